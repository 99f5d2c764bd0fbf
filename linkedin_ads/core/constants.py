"""Constants for the LinkedIn Ads request pipeline.

This module centralizes header names, status thresholds, log/error message
templates and API defaults so that the transport and the repositories share
one vocabulary.
"""

from typing import Final, FrozenSet


# API constants
LINKEDIN_API_BASE_URL: Final[str] = "https://api.linkedin.com/rest"
LINKEDIN_API_VERSION: Final[str] = "202505"
RESTLI_PROTOCOL_VERSION: Final[str] = "2.0.0"

# Transport defaults
REQUEST_TIMEOUT_SECONDS: Final[float] = 30.0
MAX_RETRIES: Final[int] = 3
RETRY_DELAY_SECONDS: Final[float] = 1.0
MAX_RETRY_DELAY_SECONDS: Final[float] = 30.0
DEFAULT_USER_AGENT: Final[str] = "linkedin-mcp-client/1.0"

# Retryable HTTP statuses (plus every status >= 500)
RETRYABLE_STATUS_CODES: Final[FrozenSet[int]] = frozenset({408, 429})
SERVER_ERROR_THRESHOLD: Final[int] = 500

# Header names
HEADER_AUTHORIZATION: Final[str] = "Authorization"
HEADER_LINKEDIN_VERSION: Final[str] = "LinkedIn-Version"
HEADER_RESTLI_PROTOCOL_VERSION: Final[str] = "X-Restli-Protocol-Version"
HEADER_ACCEPT: Final[str] = "Accept"
HEADER_CONTENT_TYPE: Final[str] = "Content-Type"
HEADER_USER_AGENT: Final[str] = "User-Agent"
CONTENT_TYPE_JSON: Final[str] = "application/json"
BEARER_PREFIX: Final[str] = "Bearer "

# Resource paths
PATH_AD_ACCOUNTS: Final[str] = "adAccounts"
PATH_AD_CAMPAIGNS: Final[str] = "adCampaigns"
PATH_AD_ANALYTICS: Final[str] = "adAnalytics"

# Envelope / paging keys
KEY_ELEMENTS: Final[str] = "elements"
KEY_PAGING: Final[str] = "paging"
KEY_DATE_RANGE: Final[str] = "dateRange"
KEY_PIVOT_VALUES: Final[str] = "pivotValues"
PAGING_NEXT_KEY: Final[str] = "next"
QUERY_PARAM_PAGE_TOKEN: Final[str] = "pageToken"

# Pivots sent as a bare value (pivot=MEMBER_COMPANY); all others are wrapped
# as pivot=(value:CAMPAIGN)
SIMPLE_PIVOTS: Final[FrozenSet[str]] = frozenset({
    "MEMBER_COMPANY",
    "MEMBER_INDUSTRY",
    "MEMBER_SENIORITY",
    "MEMBER_JOB_TITLE",
    "MEMBER_JOB_FUNCTION",
    "MEMBER_COUNTRY_V2",
    "MEMBER_REGION_V2",
})

# Repository log messages
LOG_MESSAGE_FAILED_REQUEST: Final[str] = "failed to make request"
LOG_MESSAGE_LINKEDIN_API_ERROR: Final[str] = "linkedin api responded with error"
LOG_MESSAGE_FAILED_DECODE_RESPONSE: Final[str] = "failed to decode response"
LOG_MESSAGE_FAILED_DECODE_ELEMENT: Final[str] = "failed to decode analytics element"

# Repository log tags
LOG_TAG_URL: Final[str] = "url"
LOG_TAG_ERROR: Final[str] = "error"
LOG_TAG_STATUS: Final[str] = "status"
LOG_TAG_BODY: Final[str] = "body"
LOG_TAG_METRIC: Final[str] = "metric"

# Error message templates
ERR_FMT_FAILED_REQUEST: Final[str] = "failed to make request: {error}"
ERR_FMT_API_ERROR_BODY: Final[str] = "linkedin api error: status {status}, body: {body}"
ERR_FMT_API_ERROR: Final[str] = "linkedin api error: status {status}"
ERR_FMT_DECODE_RESPONSE: Final[str] = "failed to decode response: {error}"
ERR_FMT_DECODE_ELEMENT: Final[str] = "failed to decode analytics element at index {index}: {error}"

# Truncation limit for response bodies attached to logs and exceptions
MAX_LOGGED_BODY_CHARS: Final[int] = 500

# Environment variable names
ENV_ACCESS_TOKEN: Final[str] = "LINKEDIN_ACCESS_TOKEN"
ENV_ACCOUNT_ID: Final[str] = "LINKEDIN_ACCOUNT_ID"
ENV_BASE_URL: Final[str] = "LINKEDIN_BASE_URL"
ENV_API_VERSION: Final[str] = "LINKEDIN_API_VERSION"
ENV_HTTP_TIMEOUT: Final[str] = "LINKEDIN_HTTP_TIMEOUT"
ENV_HTTP_MAX_RETRIES: Final[str] = "LINKEDIN_HTTP_MAX_RETRIES"
ENV_HTTP_RETRY_DELAY: Final[str] = "LINKEDIN_HTTP_RETRY_DELAY"
ENV_HTTP_MAX_RETRY_DELAY: Final[str] = "LINKEDIN_HTTP_MAX_RETRY_DELAY"
ENV_HTTP_USER_AGENT: Final[str] = "LINKEDIN_HTTP_USER_AGENT"
ENV_CONFIG_FILE: Final[str] = "LINKEDIN_ADS_CONFIG"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"

# Logging configuration
LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
LOG_LEVEL_DEFAULT: Final[str] = "INFO"
