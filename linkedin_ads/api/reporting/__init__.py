"""Ad analytics reporting."""

from linkedin_ads.api.reporting.models import (
    AnalyticsElement,
    AnalyticsInput,
    AnalyticsResult,
    Date,
    DateRange,
    Paging,
    SortBy,
)
from linkedin_ads.api.reporting.query_builder import ReportingQueryBuilder
from linkedin_ads.api.reporting.repository import ReportingRepository

__all__ = [
    "AnalyticsElement",
    "AnalyticsInput",
    "AnalyticsResult",
    "Date",
    "DateRange",
    "Paging",
    "SortBy",
    "ReportingQueryBuilder",
    "ReportingRepository",
]
