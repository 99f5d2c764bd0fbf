"""Infrastructure layer: HTTP transport and logger implementations."""

from linkedin_ads.infrastructure.http_client import RetryingHTTPClient
from linkedin_ads.infrastructure.logger import LoguruLogger

__all__ = ["RetryingHTTPClient", "LoguruLogger"]
