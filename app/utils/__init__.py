"""
Utils package initialization.
"""
from app.utils.date_utils import (
    months_between,
    add_months,
    month_label,
    format_age_months,
    resolve_target_date,
    describe_offset,
)

__all__ = [
    "months_between",
    "add_months",
    "month_label",
    "format_age_months",
    "resolve_target_date",
    "describe_offset",
]
