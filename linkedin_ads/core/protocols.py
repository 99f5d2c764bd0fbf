"""Protocol definitions (interfaces) for the LinkedIn Ads pipeline.

Repositories depend on these interfaces rather than on concrete classes,
so tests can substitute fakes for the transport and the logger.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Protocol

from linkedin_ads.core.context import RequestContext


class Response:
    """Raw HTTP response of one attempt.

    Attributes:
        status_code: HTTP status code
        headers: Header name to list of values (case-insensitive lookup)
        body: Raw response bytes
    """

    def __init__(
        self,
        status_code: int,
        headers: Optional[Mapping[str, List[str]]] = None,
        body: bytes = b"",
    ):
        self.status_code = status_code
        self.headers = headers if headers is not None else {}
        self.body = body

    @property
    def ok(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (invalid bytes replaced)."""
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Body decoded as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.body)

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {len(self.body)} bytes>"


class HTTPClient(Protocol):
    """Interface for the outbound HTTP transport."""

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a GET request.

        Args:
            url: Fully built request URL
            headers: Request headers (override the transport defaults)
            ctx: Optional cancellation/deadline signal

        Returns:
            Response of the final attempt

        Raises:
            TransportError: If no response could be obtained
        """
        ...

    def post(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a POST request with a JSON body."""
        ...

    def put(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a PUT request with a JSON body."""
        ...

    def patch(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a PATCH request with a JSON body."""
        ...

    def delete(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a DELETE request."""
        ...


class Logger(Protocol):
    """Interface for the structured logger collaborator.

    Repositories only call ``error``; the other levels exist for callers
    that share one logger across layers.
    """

    def info(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        ...

    def warn(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        ...

    def error(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        ...
