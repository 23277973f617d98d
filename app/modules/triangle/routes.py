from fastapi import APIRouter
from app.modules.triangle.schemas import TriangleInput, TriangleCheckResponse
from app.modules.triangle.service import evaluate

router = APIRouter(prefix="/triangle", tags=["triangle"])


@router.post("/check", response_model=TriangleCheckResponse)
async def check_triangle(sides: TriangleInput):
    """Check three side lengths (1-20) against the triangle inequality"""
    return evaluate(sides)
