"""Query builder for the ad account search endpoint."""

from typing import Dict, Tuple

from linkedin_ads.api.adaccounts.models import AdAccountSearchInput
from linkedin_ads.core.constants import PATH_AD_ACCOUNTS
from linkedin_ads.utils.query_utils import (
    QueryParams,
    bool_search_term,
    build_endpoint,
    build_headers,
    build_search_param,
    build_url,
    escape_query_value,
    list_search_term,
)


class AdAccountQueryBuilder:
    """Builds ``GET /adAccounts?q=search`` requests.

    Example URL:
        https://api.linkedin.com/rest/adAccounts?q=search
            &search=(status:(values:List(ACTIVE)),test:false)&count=100
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

    def build_search_query(self, search_input: AdAccountSearchInput) -> Tuple[str, Dict[str, str]]:
        """Build URL and headers for an ad account search.

        Args:
            search_input: Search filters

        Returns:
            Tuple of (url, headers)
        """
        endpoint = build_endpoint(self.base_url, PATH_AD_ACCOUNTS)
        url = build_url(endpoint, self._build_query_params(search_input))
        return url, build_headers(self.access_token, self.version)

    @staticmethod
    def _build_query_params(search_input: AdAccountSearchInput) -> QueryParams:
        params = QueryParams().add_raw("q", "search")

        search = build_search_param([
            list_search_term("status", search_input.status),
            list_search_term("id", search_input.account_ids),
            list_search_term("reference", search_input.references),
            list_search_term("name", search_input.names),
            bool_search_term("test", search_input.test),
        ])
        if search:
            params.add_raw("search", search)

        sort_parts = []
        if search_input.sort_field:
            sort_parts.append(f"field:{escape_query_value(search_input.sort_field)}")
        if search_input.sort_order:
            sort_parts.append(f"order:{escape_query_value(search_input.sort_order)}")
        if sort_parts:
            params.add_raw("sort", f"({','.join(sort_parts)})")

        if search_input.start > 0:
            params.add("start", search_input.start)
        if search_input.count > 0:
            params.add("count", search_input.count)

        return params
