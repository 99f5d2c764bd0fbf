"""Campaign search."""

from linkedin_ads.api.campaigns.models import CampaignSearchInput, CampaignSearchResult
from linkedin_ads.api.campaigns.query_builder import CampaignQueryBuilder
from linkedin_ads.api.campaigns.repository import CampaignRepository, extract_next_page_token

__all__ = [
    "CampaignSearchInput",
    "CampaignSearchResult",
    "CampaignQueryBuilder",
    "CampaignRepository",
    "extract_next_page_token",
]
