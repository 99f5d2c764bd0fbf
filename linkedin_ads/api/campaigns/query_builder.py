"""Query builder for the campaign search endpoint."""

from typing import Dict, Tuple

from linkedin_ads.api.campaigns.models import CampaignSearchInput
from linkedin_ads.core.constants import (
    PATH_AD_ACCOUNTS,
    PATH_AD_CAMPAIGNS,
    QUERY_PARAM_PAGE_TOKEN,
)
from linkedin_ads.utils.query_utils import (
    QueryParams,
    bool_search_term,
    build_endpoint,
    build_headers,
    build_search_param,
    build_url,
    escape_path_segment,
    list_search_term,
)


class CampaignQueryBuilder:
    """Builds ``GET /adAccounts/{id}/adCampaigns?q=search`` requests.

    LinkedIn paginates campaign searches with an opaque ``pageToken``
    cursor instead of start/count offsets.
    """

    def __init__(self, base_url: str, version: str, access_token: str):
        """Initialize the query builder.

        Args:
            base_url: LinkedIn REST base URL
            version: LinkedIn-Version header value
            access_token: OAuth2 access token
        """
        self.base_url = base_url
        self.version = version
        self.access_token = access_token

    def build_search_query(self, search_input: CampaignSearchInput) -> Tuple[str, Dict[str, str]]:
        """Build URL and headers for a campaign search.

        Args:
            search_input: Search filters; ``account_id`` is path-escaped

        Returns:
            Tuple of (url, headers)
        """
        endpoint = build_endpoint(
            self.base_url,
            PATH_AD_ACCOUNTS,
            escape_path_segment(search_input.account_id),
            PATH_AD_CAMPAIGNS,
        )
        url = build_url(endpoint, self._build_query_params(search_input))
        return url, build_headers(self.access_token, self.version)

    @staticmethod
    def _build_query_params(search_input: CampaignSearchInput) -> QueryParams:
        params = QueryParams().add_raw("q", "search")

        # Single Rest.li composite parameter; must not be URL-encoded
        search = build_search_param([
            list_search_term("campaignGroup", search_input.campaign_groups),
            list_search_term("associatedEntity", search_input.associated_entities),
            list_search_term("id", search_input.campaign_ids),
            list_search_term("status", search_input.status),
            list_search_term("type", search_input.type),
            list_search_term("name", search_input.name),
            bool_search_term("test", search_input.test),
        ])
        if search:
            params.add_raw("search", search)

        if search_input.sort_order:
            params.add("sortOrder", search_input.sort_order)
        if search_input.page_size > 0:
            params.add("pageSize", search_input.page_size)
        if search_input.page_token:
            params.add(QUERY_PARAM_PAGE_TOKEN, search_input.page_token)

        return params
