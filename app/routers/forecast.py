"""
Forecast API endpoints - the "time machine" view of the classroom pipeline.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.services.forecast_service import ForecastService
from app.utils.date_utils import resolve_target_date, describe_offset
from datetime import date
from typing import Optional

router = APIRouter()


@router.get("")
def get_forecast(
    target_date: Optional[date] = Query(None, description="Anchor date (defaults to today)"),
    offset_months: int = Query(
        0,
        ge=settings.MIN_OFFSET_MONTHS,
        le=settings.MAX_OFFSET_MONTHS,
        description="Months to slide the anchor date"
    ),
    include_trend: bool = Query(True, description="Include the +/-12 month trend series"),
    db: Session = Depends(get_db)
):
    """
    Forecast classroom enrollment at a target date.
    
    - **target_date**: anchor date, past or future
    - **offset_months**: shift applied to the anchor (slider, -12..+24)
    - **include_trend**: set false to skip the per-classroom trend series
    
    Returns per-classroom rosters (oldest first), capacity alerts, totals,
    upcoming transitions and children that no classroom accepts.
    """
    evaluated_at = resolve_target_date(target_date, offset_months)
    
    forecast = ForecastService(db).get_forecast(evaluated_at, include_trend=include_trend)
    
    result = forecast.to_dict()
    result["offsetMonths"] = offset_months
    result["offsetLabel"] = describe_offset(offset_months)
    return result
