"""Ad account search."""

from linkedin_ads.api.adaccounts.models import AdAccountSearchInput, AdAccountSearchResult
from linkedin_ads.api.adaccounts.query_builder import AdAccountQueryBuilder
from linkedin_ads.api.adaccounts.repository import AdAccountRepository

__all__ = [
    "AdAccountSearchInput",
    "AdAccountSearchResult",
    "AdAccountQueryBuilder",
    "AdAccountRepository",
]
