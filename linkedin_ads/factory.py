"""Wiring of the transport, query builders and repositories."""

from dataclasses import dataclass
from typing import Optional

from linkedin_ads.api.adaccounts import AdAccountQueryBuilder, AdAccountRepository
from linkedin_ads.api.campaigns import CampaignQueryBuilder, CampaignRepository
from linkedin_ads.api.reporting import ReportingQueryBuilder, ReportingRepository
from linkedin_ads.core.config import AppConfig
from linkedin_ads.core.protocols import HTTPClient, Logger
from linkedin_ads.infrastructure.http_client import RetryingHTTPClient


@dataclass
class Repositories:
    """The three LinkedIn Ads repositories sharing one HTTP client."""

    client: HTTPClient
    ad_accounts: AdAccountRepository
    campaigns: CampaignRepository
    reporting: ReportingRepository

    def close(self) -> None:
        """Close the underlying client if it supports closing."""
        close = getattr(self.client, "close", None)
        if callable(close):
            close()


def build_repositories(
    config: AppConfig,
    logger: Optional[Logger] = None,
    client: Optional[HTTPClient] = None,
) -> Repositories:
    """Build all repositories from configuration.

    Args:
        config: Application configuration
        logger: Logger collaborator for failure paths (silent if None)
        client: HTTP client to share (a RetryingHTTPClient if None)

    Returns:
        Repositories bundle
    """
    client = client or RetryingHTTPClient(config.http)

    linkedin = config.linkedin
    builder_args = (linkedin.base_url, linkedin.version, linkedin.access_token)

    return Repositories(
        client=client,
        ad_accounts=AdAccountRepository(
            client, AdAccountQueryBuilder(*builder_args), logger
        ),
        campaigns=CampaignRepository(
            client, CampaignQueryBuilder(*builder_args), logger
        ),
        reporting=ReportingRepository(
            client, ReportingQueryBuilder(*builder_args), logger
        ),
    )
