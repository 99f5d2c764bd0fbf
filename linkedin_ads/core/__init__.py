"""Core abstractions and interfaces for the LinkedIn Ads pipeline."""

from linkedin_ads.core.protocols import (
    HTTPClient,
    Logger,
    Response,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import (
    LinkedInAdsError,
    ConfigurationError,
    SerializationError,
    TransportError,
    RequestFailedError,
    ProviderError,
    DecodeError,
)
from linkedin_ads.core.config import (
    HTTPConfig,
    LinkedInConfig,
    AppConfig,
    ConfigurationManager,
)

__all__ = [
    # Protocols
    "HTTPClient",
    "Logger",
    "Response",
    "RequestContext",
    # Exceptions
    "LinkedInAdsError",
    "ConfigurationError",
    "SerializationError",
    "TransportError",
    "RequestFailedError",
    "ProviderError",
    "DecodeError",
    # Configuration
    "HTTPConfig",
    "LinkedInConfig",
    "AppConfig",
    "ConfigurationManager",
]
