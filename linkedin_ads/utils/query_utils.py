"""Query-string helpers for the Rest.li 2.0 grammar used by LinkedIn.

LinkedIn's Marketing API expects some parameters in a structured syntax such
as ``search=(status:(values:List(ACTIVE,PAUSED)))``. The parentheses, colons
and commas of that syntax are significant: percent-encoding them breaks the
request. Plain scalar values (page tokens, sort orders) must still be
encoded. QueryParams keeps both kinds of parameter in one ordered list and
only encodes the ones added with ``add``.
"""

from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, quote_plus

from linkedin_ads.core.constants import (
    BEARER_PREFIX,
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_LINKEDIN_VERSION,
    HEADER_RESTLI_PROTOCOL_VERSION,
    RESTLI_PROTOCOL_VERSION,
)


class QueryParams:
    """Ordered query parameters with per-parameter encoding control."""

    def __init__(self):
        self._params: List[Tuple[str, str]] = []

    def add(self, key: str, value) -> "QueryParams":
        """Append a parameter whose value is percent-encoded.

        Args:
            key: Parameter name
            value: Parameter value (converted to str)

        Returns:
            self, for chaining
        """
        self._params.append((key, escape_query_value(value)))
        return self

    def add_raw(self, key: str, value: str) -> "QueryParams":
        """Append a parameter whose value is sent verbatim.

        Args:
            key: Parameter name
            value: Already-formatted Rest.li value, e.g. ``(value:CAMPAIGN)``

        Returns:
            self, for chaining
        """
        self._params.append((key, value))
        return self

    def encode(self) -> str:
        """Join the parameters into a query string (without leading '?')."""
        return "&".join(f"{key}={value}" for key, value in self._params)

    def __len__(self) -> int:
        return len(self._params)


def escape_query_value(value) -> str:
    """Percent-encode a single query value (spaces become '+')."""
    return quote_plus(str(value), safe="")


def escape_path_segment(segment) -> str:
    """Percent-encode a single path segment."""
    return quote(str(segment), safe="")


def build_endpoint(base_url: str, *segments: str) -> str:
    """Join the API base URL with path segments.

    Segments are used as given; escape identifiers with
    escape_path_segment first.

    Args:
        base_url: API base URL; a trailing '/' is ignored
        *segments: Path segments appended in order

    Returns:
        Endpoint URL without query string

    Example:
        >>> build_endpoint("https://api.linkedin.com/rest/", "adAccounts")
        'https://api.linkedin.com/rest/adAccounts'
    """
    return "/".join([base_url.rstrip("/"), *segments])


def build_url(endpoint: str, params: QueryParams) -> str:
    """Attach an encoded query string to an endpoint."""
    if not len(params):
        return endpoint
    return f"{endpoint}?{params.encode()}"


def clean_values(values: Optional[Iterable[str]]) -> List[str]:
    """Strip whitespace and drop empty entries.

    Args:
        values: Raw filter values (None allowed)

    Returns:
        Cleaned values in their original order
    """
    if not values:
        return []
    cleaned = []
    for value in values:
        if value is None:
            continue
        trimmed = str(value).strip()
        if trimmed:
            cleaned.append(trimmed)
    return cleaned


def list_search_term(field: str, values: Optional[Iterable[str]]) -> Optional[str]:
    """Format one list filter of the composite search parameter.

    Args:
        field: Search field name (e.g. "status")
        values: Filter values

    Returns:
        ``field:(values:List(v1,v2))`` or None when no value survives cleaning

    Example:
        >>> list_search_term("status", ["ACTIVE", " PAUSED ", ""])
        'status:(values:List(ACTIVE,PAUSED))'
    """
    cleaned = clean_values(values)
    if not cleaned:
        return None
    return f"{field}:(values:List({','.join(cleaned)}))"


def bool_search_term(field: str, value: Optional[bool]) -> Optional[str]:
    """Format a boolean filter as a literal ``field:true|false`` term."""
    if value is None:
        return None
    return f"{field}:{'true' if value else 'false'}"


def build_search_param(terms: Iterable[Optional[str]]) -> Optional[str]:
    """Wrap search terms into the composite ``(term1,term2)`` value.

    Args:
        terms: Terms from list_search_term/bool_search_term (None skipped)

    Returns:
        Composite value, or None when there are no terms
    """
    parts = [term for term in terms if term]
    if not parts:
        return None
    return f"({','.join(parts)})"


def format_list(values: Iterable[str]) -> str:
    """Format values as a Rest.li ``List(...)``, percent-encoding each item.

    Args:
        values: List items

    Returns:
        ``List(item1,item2)``
    """
    items = [escape_query_value(v) for v in values]
    return f"List({','.join(items)})"


def authorization_value(access_token: str) -> str:
    """Authorization header value; a bare token gets the Bearer scheme."""
    token = access_token.strip()
    if token.lower().startswith(BEARER_PREFIX.lower()):
        return token
    return f"{BEARER_PREFIX}{token}"


def build_headers(access_token: str, version: str) -> Dict[str, str]:
    """Build the four headers every LinkedIn Marketing API call carries.

    Args:
        access_token: OAuth2 access token (with or without "Bearer ")
        version: LinkedIn-Version header value (YYYYMM)

    Returns:
        Headers dictionary
    """
    return {
        HEADER_AUTHORIZATION: authorization_value(access_token),
        HEADER_LINKEDIN_VERSION: version,
        HEADER_RESTLI_PROTOCOL_VERSION: RESTLI_PROTOCOL_VERSION,
        HEADER_ACCEPT: CONTENT_TYPE_JSON,
    }
