"""Retrying HTTP transport for the LinkedIn Marketing API.

This module provides the only component that talks to the network. It keeps
the transport concerns (timeouts, header injection, retries with exponential
backoff) apart from the resource-specific query building and response
handling done by the repositories.

Retry policy:
- Network failures (connection, timeout, read errors) are retried; once the
  budget is spent a TransportError is raised.
- Statuses 408, 429 and 5xx are retried; once the budget is spent the last
  Response is returned as-is, NOT raised. Classifying status codes into
  errors is the repositories' job.
- Everything else is returned after a single attempt.
"""

import json
import threading
from concurrent.futures import Future
from typing import Any, Dict, List, Optional

import requests
from requests.structures import CaseInsensitiveDict
from loguru import logger

from linkedin_ads.core.config import HTTPConfig
from linkedin_ads.core.constants import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    RETRYABLE_STATUS_CODES,
    SERVER_ERROR_THRESHOLD,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import SerializationError, TransportError
from linkedin_ads.core.protocols import Response


class HTTPMethod:
    """HTTP request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RetryingHTTPClient:
    """HTTP client with bounded exponential-backoff retries.

    Each attempt runs on a worker thread while the calling thread waits on
    the attempt and the context together, so cancelling the context abandons
    an attempt that is still waiting on the network.

    requests Sessions are not thread-safe, so a client that creates its own
    sessions keeps one per calling thread. An injected session is used by
    every thread as-is.
    """

    def __init__(
        self,
        config: Optional[HTTPConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the HTTP client.

        Args:
            config: Transport configuration (defaults if None)
            session: requests Session to send through (one per thread if None)
        """
        self.config = config or HTTPConfig()
        self._session = session
        self._local = threading.local()
        self._owned_sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()

        logger.debug(
            f"RetryingHTTPClient initialized (timeout={self.config.timeout}s, "
            f"max_retries={self.config.max_retries})"
        )

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a GET request.

        Args:
            url: Request URL
            headers: Additional headers
            ctx: Optional cancellation/deadline signal

        Returns:
            Response of the final attempt

        Raises:
            TransportError: If the request fails after all retries
        """
        return self.request(HTTPMethod.GET, url, headers=headers, ctx=ctx)

    def post(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a POST request with a JSON body."""
        return self.request(HTTPMethod.POST, url, body=body, headers=headers, ctx=ctx)

    def put(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a PUT request with a JSON body."""
        return self.request(HTTPMethod.PUT, url, body=body, headers=headers, ctx=ctx)

    def patch(
        self,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a PATCH request with a JSON body."""
        return self.request(HTTPMethod.PATCH, url, body=body, headers=headers, ctx=ctx)

    def delete(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute a DELETE request."""
        return self.request(HTTPMethod.DELETE, url, headers=headers, ctx=ctx)

    def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        ctx: Optional[RequestContext] = None,
    ) -> Response:
        """Execute an HTTP request with retries.

        Attempts are numbered 0..max_retries. The wait before attempt k+1 is
        ``min(retry_delay * 2**k, max_retry_delay)``.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL, already carrying its query string
            body: Optional JSON-serializable body
            headers: Additional headers (win over default headers)
            ctx: Optional cancellation/deadline signal

        Returns:
            Response of the final attempt, whatever its status code

        Raises:
            SerializationError: If the body cannot be encoded as JSON
            TransportError: If no response could be obtained
        """
        ctx = ctx or RequestContext.background()
        payload = self._serialize_body(body)
        complete_headers = self._build_headers(headers, has_body=payload is not None)
        max_retries = self.config.max_retries

        last_error: Optional[BaseException] = None

        for attempt in range(max_retries + 1):
            logger.debug(f"{method} {url} (attempt {attempt + 1}/{max_retries + 1})")

            try:
                if ctx.done():
                    raise requests.exceptions.Timeout(ctx.error())

                raw_response = self._send(method, url, payload, complete_headers, ctx)
            except (
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL,
            ) as e:
                raise TransportError(
                    f"failed to create request: {e}",
                    last_error=e,
                    attempts=attempt + 1,
                ) from e
            except requests.exceptions.RequestException as e:
                last_error = e
                if attempt < max_retries:
                    logger.warning(f"{method} {url} failed: {e}")
                    if self._wait_before_retry(attempt, ctx):
                        continue
                break

            response = self._to_response(raw_response)

            if self._should_retry(response.status_code) and attempt < max_retries:
                logger.warning(
                    f"{method} {url} received status {response.status_code}, retrying"
                )
                if self._wait_before_retry(attempt, ctx):
                    continue
                # Cancelled while waiting: the last response is still valid
                return response

            return response

        attempts = attempt + 1
        reason = ctx.error() or "max retries exceeded"
        raise TransportError(
            f"{reason}: request failed: {last_error}",
            last_error=last_error,
            attempts=attempts,
            details={"url": url, "method": method, "attempts": attempts},
        ) from last_error

    def close(self) -> None:
        """Close the injected session and every session this client created."""
        if self._session is not None:
            self._session.close()
        with self._sessions_lock:
            owned, self._owned_sessions = self._owned_sessions, []
        for session in owned:
            session.close()

    def _current_session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._owned_sessions.append(session)
        return session

    def _send(
        self,
        method: str,
        url: str,
        payload: Optional[bytes],
        headers: Dict[str, str],
        ctx: RequestContext,
    ) -> requests.Response:
        """Run one attempt, giving up on it as soon as the context is done.

        The attempt, body read included, runs on a worker thread. An
        abandoned attempt finishes in the background (bounded by its timeout)
        and its late response is closed.

        Raises:
            requests.exceptions.Timeout: If the context ended the attempt
            requests.exceptions.RequestException: If the attempt itself failed
        """
        session = self._current_session()
        timeout = self._attempt_timeout(ctx)
        future: Future = Future()
        settled = threading.Event()

        def attempt():
            try:
                future.set_result(
                    session.request(
                        method=method,
                        url=url,
                        data=payload,
                        headers=headers,
                        timeout=timeout,
                    )
                )
            except Exception as e:
                future.set_exception(e)

        future.add_done_callback(lambda _: settled.set())
        ctx.add_cancel_callback(settled.set)
        try:
            threading.Thread(target=attempt, name=f"linkedin-ads-{method}", daemon=True).start()
            while not future.done() and not ctx.done():
                settled.wait(ctx.remaining())
        finally:
            ctx.remove_cancel_callback(settled.set)

        if ctx.done():
            future.add_done_callback(self._discard_late_response)
            raise requests.exceptions.Timeout(ctx.error())
        return future.result()

    @staticmethod
    def _discard_late_response(future: Future) -> None:
        if future.exception() is None:
            future.result().close()

    @staticmethod
    def _serialize_body(body: Any) -> Optional[bytes]:
        """Encode the request body as JSON.

        Args:
            body: JSON-serializable value, or None for no body

        Returns:
            UTF-8 encoded JSON, or None

        Raises:
            SerializationError: If the body is not JSON-serializable
        """
        if body is None:
            return None
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"failed to marshal request body: {e}",
                details={"body_type": type(body).__name__},
            ) from e

    def _build_headers(
        self, additional_headers: Optional[Dict[str, str]], has_body: bool
    ) -> Dict[str, str]:
        """Build request headers.

        Order of precedence (last wins): default headers, User-Agent,
        Content-Type (only with a body), caller headers.

        Args:
            additional_headers: Caller-supplied headers
            has_body: Whether the request carries a JSON body

        Returns:
            Complete headers dictionary
        """
        headers = CaseInsensitiveDict(self.config.default_headers)
        headers[HEADER_USER_AGENT] = self.config.user_agent

        if has_body:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON

        if additional_headers:
            headers.update(additional_headers)

        return dict(headers)

    def _attempt_timeout(self, ctx: RequestContext) -> float:
        """Per-attempt timeout, bounded by the context deadline."""
        remaining = ctx.remaining()
        if remaining is None:
            return self.config.timeout
        # requests rejects a zero timeout
        return max(min(self.config.timeout, remaining), 0.001)

    @staticmethod
    def _should_retry(status_code: int) -> bool:
        """Whether a status code is worth another attempt."""
        return status_code >= SERVER_ERROR_THRESHOLD or status_code in RETRYABLE_STATUS_CODES

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds to wait after a failed attempt.

        Args:
            attempt: Zero-based number of the attempt that just failed

        Returns:
            ``min(retry_delay * 2**attempt, max_retry_delay)``
        """
        return min(self.config.retry_delay * (2 ** attempt), self.config.max_retry_delay)

    def _wait_before_retry(self, attempt: int, ctx: RequestContext) -> bool:
        """Sleep before the next attempt.

        Returns:
            False if the context was cancelled or expired, meaning no further
            attempt should be made
        """
        if ctx.done():
            return False
        delay = self.backoff_delay(attempt)
        logger.info(f"Retrying in {delay:.3f}s (attempt {attempt + 1}/{self.config.max_retries})")
        return ctx.sleep(delay)

    @staticmethod
    def _to_response(raw_response: requests.Response) -> Response:
        """Convert a requests response into a transport Response.

        requests joins repeated headers with ", "; the urllib3 header dict
        underneath still holds each value separately.
        """
        raw_headers = getattr(raw_response.raw, "headers", None)
        if hasattr(raw_headers, "getlist"):
            headers = CaseInsensitiveDict(
                {key: raw_headers.getlist(key) for key in raw_headers}
            )
        else:
            headers = CaseInsensitiveDict(
                {key: [value] for key, value in raw_response.headers.items()}
            )
        return Response(
            status_code=raw_response.status_code,
            headers=headers,
            body=raw_response.content or b"",
        )
