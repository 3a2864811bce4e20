"""
Forecast service - loads records and runs the enrollment forecaster.
"""
from sqlalchemy.orm import Session
from datetime import date
import logging

from app.config import settings
from app.forecasting import EnrollmentForecaster, EnrollmentForecast
from app.services.classroom_service import ClassroomService
from app.services.child_service import ChildService

logger = logging.getLogger(__name__)


class ForecastService:
    """Reads the current classroom and child lists and forecasts a target date."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def build_forecaster(self) -> EnrollmentForecaster:
        """Forecaster over a fresh snapshot of both tables, tuned from settings."""
        classrooms = ClassroomService(self.db).list_all()
        children = ChildService(self.db).list_all()
        return EnrollmentForecaster(
            classrooms,
            children,
            trend_window=settings.TREND_WINDOW_MONTHS,
            graduating_soon_months=settings.GRADUATING_SOON_MONTHS,
            graduating_next_month=settings.GRADUATING_NEXT_MONTH,
            near_capacity_ratio=settings.NEAR_CAPACITY_RATIO,
            high_availability_ratio=settings.HIGH_AVAILABILITY_RATIO,
        )
    
    def get_forecast(self, target_date: date, include_trend: bool = True) -> EnrollmentForecast:
        forecaster = self.build_forecaster()
        logger.info(
            "Forecasting %s for %d classrooms / %d children",
            target_date, len(forecaster.classrooms), len(forecaster.children)
        )
        return forecaster.forecast(target_date, include_trend=include_trend)
