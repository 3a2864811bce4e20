"""
Enrollment forecasting for the classroom pipeline.

The forecaster is a pure function of (classrooms, children, target date):
classroom membership is recomputed from birth dates on every call and
nothing derived is ever persisted.
"""

from .enrollment_forecaster import (
    AlertType,
    CapacityStatus,
    UnplacedReason,
    RosterEntry,
    CapacityAlert,
    TrendPoint,
    ClassroomForecast,
    Transition,
    UnplacedChild,
    ForecastTotals,
    EnrollmentForecast,
    EnrollmentForecaster,
    order_classrooms,
)

__all__ = [
    'AlertType',
    'CapacityStatus',
    'UnplacedReason',
    'RosterEntry',
    'CapacityAlert',
    'TrendPoint',
    'ClassroomForecast',
    'Transition',
    'UnplacedChild',
    'ForecastTotals',
    'EnrollmentForecast',
    'EnrollmentForecaster',
    'order_classrooms',
]
