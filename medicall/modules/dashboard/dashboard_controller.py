# medicall/modules/dashboard/dashboard_controller.py
"""Dashboard controller with API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.common.database.database import get_db_session
from medicall.auth.dependencies import get_current_user
from medicall.models.models import User

from . import dashboard_service as service
from .schemas import DashboardStatsResponse


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Get the overview figures:
    - Patients by status
    - Active doctors and how many are online
    - Today's and upcoming scheduled bookings
    - Today's calls and how many completed
    """
    stats = await service.get_stats(db)
    return DashboardStatsResponse(stats=stats)
