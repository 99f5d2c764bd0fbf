"""Request and result models for ad analytics reporting.

Analytics rows have no fixed schema: LinkedIn returns exactly the metrics
listed in ``fields``. Each row is therefore split into the two facets every
row carries (``dateRange`` and ``pivotValues``) and a free-form ``metrics``
mapping holding everything else.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Date:
    """Calendar date in LinkedIn's ``(day:D,month:M,year:Y)`` shape."""

    year: int
    month: int
    day: int

    def to_dict(self) -> Dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; ``end`` is open-ended when None."""

    start: Date
    end: Optional[Date] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"start": self.start.to_dict()}
        if self.end is not None:
            result["end"] = self.end.to_dict()
        return result


@dataclass(frozen=True)
class SortBy:
    """Sort facet for analytics (e.g. field=IMPRESSIONS, order=DESCENDING)."""

    field: str = ""
    order: str = ""


@dataclass(frozen=True)
class AnalyticsInput:
    """Parameters for ``GET /adAnalytics?q=analytics``.

    Attributes:
        account_id: Ad account ID, always sent as the ``accounts`` facet
        date_range: Reporting period
        time_granularity: ALL, DAILY, MONTHLY or YEARLY
        pivot: Grouping dimension (CAMPAIGN, CREATIVE, MEMBER_COMPANY, ...)
        campaign_type: TEXT_AD, SPONSORED_UPDATES, SPONSORED_INMAILS, DYNAMIC
        shares: Share URNs
        campaigns: Campaign URNs
        campaign_groups: Campaign group URNs
        accounts: Additional account URNs
        companies: Organization URNs
        sort_by: Sort field and order
        fields: Metrics to return; ``pivotValues`` is always added
    """

    account_id: str
    date_range: DateRange
    time_granularity: str = ""
    pivot: str = ""
    campaign_type: str = ""
    shares: List[str] = field(default_factory=list)
    campaigns: List[str] = field(default_factory=list)
    campaign_groups: List[str] = field(default_factory=list)
    accounts: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)
    sort_by: SortBy = field(default_factory=SortBy)
    fields: List[str] = field(default_factory=list)


@dataclass
class Paging:
    """Paging block of an analytics response."""

    count: Optional[int] = None
    start: Optional[int] = None
    links: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.count is not None:
            result["count"] = self.count
        if self.start is not None:
            result["start"] = self.start
        result["links"] = self.links
        return result


@dataclass
class AnalyticsElement:
    """One analytics row.

    ``metrics`` never contains the ``dateRange`` or ``pivotValues`` keys.
    """

    date_range: Optional[DateRange] = None
    pivot_values: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.date_range is not None:
            result["dateRange"] = self.date_range.to_dict()
        if self.pivot_values:
            result["pivotValues"] = self.pivot_values
        result["metrics"] = self.metrics
        return result


@dataclass
class AnalyticsResult:
    """Normalized analytics rows with the response paging block."""

    elements: List[AnalyticsElement] = field(default_factory=list)
    paging: Paging = field(default_factory=Paging)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements": [element.to_dict() for element in self.elements],
            "paging": self.paging.to_dict(),
        }
