from pydantic import BaseModel, Field
from typing import List

MIN_SIDE = 1
MAX_SIDE = 20


class TriangleInput(BaseModel):
    side_a: int = Field(5, ge=MIN_SIDE, le=MAX_SIDE)
    side_b: int = Field(7, ge=MIN_SIDE, le=MAX_SIDE)
    side_c: int = Field(9, ge=MIN_SIDE, le=MAX_SIDE)


class InequalityCheck(BaseModel):
    expression: str
    left: int
    right: int
    holds: bool


class TriangleCheckResponse(BaseModel):
    valid: bool
    sides: TriangleInput
    checks: List[InequalityCheck]
    message: str
