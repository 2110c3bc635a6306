from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from analytics.overview import get_overview
from analytics.schemas import OverviewResponse
from core.database import get_db

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/overview", response_model=OverviewResponse)
def analytics_overview(
    daysBack: int = Query(30, ge=1, le=365),
    granularity: Literal["hourly", "daily", "weekly", "monthly"] = Query("daily"),
    db: Session = Depends(get_db),
):
    return {
        "success": True,
        "data": get_overview(db, daysBack, granularity),
    }
