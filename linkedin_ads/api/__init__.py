"""LinkedIn Marketing API repositories and query builders."""

from linkedin_ads.api.adaccounts import (
    AdAccountQueryBuilder,
    AdAccountRepository,
    AdAccountSearchInput,
    AdAccountSearchResult,
)
from linkedin_ads.api.campaigns import (
    CampaignQueryBuilder,
    CampaignRepository,
    CampaignSearchInput,
    CampaignSearchResult,
)
from linkedin_ads.api.reporting import (
    AnalyticsElement,
    AnalyticsInput,
    AnalyticsResult,
    Date,
    DateRange,
    ReportingQueryBuilder,
    ReportingRepository,
    SortBy,
)

__all__ = [
    "AdAccountQueryBuilder",
    "AdAccountRepository",
    "AdAccountSearchInput",
    "AdAccountSearchResult",
    "CampaignQueryBuilder",
    "CampaignRepository",
    "CampaignSearchInput",
    "CampaignSearchResult",
    "AnalyticsElement",
    "AnalyticsInput",
    "AnalyticsResult",
    "Date",
    "DateRange",
    "ReportingQueryBuilder",
    "ReportingRepository",
    "SortBy",
]
