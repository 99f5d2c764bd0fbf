"""Repository for LinkedIn ad campaigns."""

from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlparse

from loguru import logger

from linkedin_ads.api.base import BaseRepository
from linkedin_ads.api.campaigns.models import CampaignSearchInput, CampaignSearchResult
from linkedin_ads.api.campaigns.query_builder import CampaignQueryBuilder
from linkedin_ads.core.constants import KEY_PAGING, PAGING_NEXT_KEY, QUERY_PARAM_PAGE_TOKEN
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.protocols import HTTPClient, Logger


def extract_next_page_token(paging: Optional[Dict[str, Any]]) -> str:
    """Read the ``pageToken`` query parameter of the paging ``next`` link.

    Args:
        paging: Paging block of the response (may be None)

    Returns:
        The token, or an empty string when there is no next page

    Example:
        >>> extract_next_page_token({"next": "https://api.linkedin.com/rest/x?pageToken=ABC123"})
        'ABC123'
    """
    if not paging:
        return ""
    next_link = paging.get(PAGING_NEXT_KEY)
    if not isinstance(next_link, str) or not next_link:
        return ""
    try:
        query = urlparse(next_link).query
    except ValueError:
        return ""
    tokens = parse_qs(query).get(QUERY_PARAM_PAGE_TOKEN)
    return tokens[0] if tokens else ""


class CampaignRepository(BaseRepository):
    """Searches campaigns of one ad account."""

    def __init__(
        self,
        client: HTTPClient,
        query_builder: CampaignQueryBuilder,
        logger: Optional[Logger] = None,
    ):
        super().__init__(client, logger)
        self.query_builder = query_builder

    def search_campaigns(
        self,
        search_input: CampaignSearchInput,
        ctx: Optional[RequestContext] = None,
    ) -> CampaignSearchResult:
        """Search campaigns.

        Args:
            search_input: Search filters
            ctx: Optional cancellation/deadline signal

        Returns:
            CampaignSearchResult with the raw elements and the next page token

        Raises:
            RequestFailedError: If the request could not be sent
            ProviderError: If LinkedIn rejected the request
            DecodeError: If the response is malformed
        """
        url, headers = self.query_builder.build_search_query(search_input)
        envelope = self._fetch_envelope(url, headers, ctx)

        result = CampaignSearchResult(
            elements=self._object_elements(url, envelope, ctx),
            next_page_token=extract_next_page_token(envelope.get(KEY_PAGING)),
        )
        logger.debug(
            f"Retrieved {len(result.elements)} campaigns for account {search_input.account_id}"
        )
        return result
