from fastapi import APIRouter
from app.modules.learning.content import PROGRESS_SERIES, STATS, ACHIEVEMENTS, MATERIALS
from app.modules.learning.schemas import DashboardResponse, MaterialResponse
from typing import List

router = APIRouter(tags=["learning"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard():
    """Sample progress series, stats and achievements for the dashboard"""
    return DashboardResponse(progress=PROGRESS_SERIES, stats=STATS, achievements=ACHIEVEMENTS)


@router.get("/materials", response_model=List[MaterialResponse])
async def materials():
    return MATERIALS
