"""Repository for LinkedIn ad accounts."""

from typing import Optional

from loguru import logger

from linkedin_ads.api.adaccounts.models import AdAccountSearchInput, AdAccountSearchResult
from linkedin_ads.api.adaccounts.query_builder import AdAccountQueryBuilder
from linkedin_ads.api.base import BaseRepository
from linkedin_ads.core.constants import KEY_PAGING
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.protocols import HTTPClient, Logger


class AdAccountRepository(BaseRepository):
    """Searches ad accounts and passes LinkedIn's elements through unchanged."""

    def __init__(
        self,
        client: HTTPClient,
        query_builder: AdAccountQueryBuilder,
        logger: Optional[Logger] = None,
    ):
        super().__init__(client, logger)
        self.query_builder = query_builder

    def search_ad_accounts(
        self,
        search_input: AdAccountSearchInput,
        ctx: Optional[RequestContext] = None,
    ) -> AdAccountSearchResult:
        """Search ad accounts.

        Args:
            search_input: Search filters
            ctx: Optional cancellation/deadline signal

        Returns:
            AdAccountSearchResult with the raw elements and paging block

        Raises:
            RequestFailedError: If the request could not be sent
            ProviderError: If LinkedIn rejected the request
            DecodeError: If the response is malformed
        """
        url, headers = self.query_builder.build_search_query(search_input)
        envelope = self._fetch_envelope(url, headers, ctx)

        result = AdAccountSearchResult(
            elements=self._object_elements(url, envelope, ctx),
            paging=envelope.get(KEY_PAGING) or {},
        )
        logger.debug(f"Retrieved {len(result.elements)} ad accounts")
        return result
