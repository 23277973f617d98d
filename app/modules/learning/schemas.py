from pydantic import BaseModel
from typing import List


class ProgressPoint(BaseModel):
    week: str
    progress: int


class Stat(BaseModel):
    label: str
    value: str


class Achievement(BaseModel):
    title: str
    earned: str


class DashboardResponse(BaseModel):
    progress: List[ProgressPoint]
    stats: List[Stat]
    achievements: List[Achievement]


class MaterialResponse(BaseModel):
    id: int
    title: str
    duration: str
    completed: bool
    difficulty: str
