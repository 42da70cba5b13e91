"""
Report generation: period aggregation for weekly and monthly reports.
"""

from .aggregation import (
    PeriodRecords,
    collect_period,
    count_by_category,
    count_by_status,
    count_rows,
    generate_monthly_summary,
    generate_weekly_report,
    summarize_attendance,
)

__all__ = [
    "PeriodRecords",
    "collect_period",
    "count_by_category",
    "count_by_status",
    "count_rows",
    "generate_monthly_summary",
    "generate_weekly_report",
    "summarize_attendance",
]
