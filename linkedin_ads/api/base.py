"""Shared request/response handling for the LinkedIn API repositories.

Every repository follows the same steps: build the request, send it through
the transport, classify the outcome and decode the JSON envelope. Only the
final normalization differs per resource, so the common steps live here.
"""

import json
from typing import Any, Dict, List, Optional

from linkedin_ads.core.constants import (
    ERR_FMT_API_ERROR,
    ERR_FMT_API_ERROR_BODY,
    ERR_FMT_DECODE_RESPONSE,
    ERR_FMT_FAILED_REQUEST,
    KEY_ELEMENTS,
    KEY_PAGING,
    LOG_MESSAGE_FAILED_DECODE_RESPONSE,
    LOG_MESSAGE_FAILED_REQUEST,
    LOG_MESSAGE_LINKEDIN_API_ERROR,
    LOG_TAG_BODY,
    LOG_TAG_ERROR,
    LOG_TAG_STATUS,
    LOG_TAG_URL,
    MAX_LOGGED_BODY_CHARS,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import (
    DecodeError,
    ProviderError,
    RequestFailedError,
    SerializationError,
    TransportError,
)
from linkedin_ads.core.protocols import HTTPClient, Logger, Response


class BaseRepository:
    """Common plumbing for LinkedIn resource repositories.

    Attributes:
        client: Transport used to send requests
        logger: Optional structured logger; failures are only logged when set
    """

    def __init__(self, client: HTTPClient, logger: Optional[Logger] = None):
        self.client = client
        self.logger = logger

    def _fetch_envelope(
        self,
        url: str,
        headers: Dict[str, str],
        ctx: Optional[RequestContext],
    ) -> Dict[str, Any]:
        """Send a GET request and return the decoded response envelope.

        Args:
            url: Request URL
            headers: Request headers
            ctx: Optional cancellation/deadline signal

        Returns:
            Decoded JSON object

        Raises:
            RequestFailedError: If the transport could not deliver a response
            ProviderError: If LinkedIn answered with a non-2xx status
            DecodeError: If the body is not a JSON object
        """
        response = self._execute(url, headers, ctx)
        self._raise_for_status(url, response, ctx)
        return self._decode_envelope(url, response, ctx)

    def _execute(
        self,
        url: str,
        headers: Dict[str, str],
        ctx: Optional[RequestContext],
    ) -> Response:
        try:
            return self.client.get(url, headers=headers, ctx=ctx)
        except (TransportError, SerializationError) as e:
            self._log_error(ctx, LOG_MESSAGE_FAILED_REQUEST, {
                LOG_TAG_URL: url,
                LOG_TAG_ERROR: str(e),
            })
            raise RequestFailedError(
                ERR_FMT_FAILED_REQUEST.format(error=e.message),
                details={"url": url},
            ) from e

    def _raise_for_status(
        self,
        url: str,
        response: Response,
        ctx: Optional[RequestContext],
    ) -> None:
        """Raise a ProviderError for any non-2xx response.

        The error embeds the body parsed as JSON when possible, otherwise the
        trimmed raw text, otherwise just the status code.
        """
        if response.ok:
            return

        body_text = response.text.strip()
        tags = {
            LOG_TAG_URL: url,
            LOG_TAG_STATUS: str(response.status_code),
        }
        if body_text:
            tags[LOG_TAG_BODY] = body_text[:MAX_LOGGED_BODY_CHARS]

        self._log_error(ctx, LOG_MESSAGE_LINKEDIN_API_ERROR, tags)

        try:
            parsed_body = response.json()
        except ValueError:
            parsed_body = None
        else:
            raise ProviderError(
                ERR_FMT_API_ERROR_BODY.format(
                    status=response.status_code, body=json.dumps(parsed_body)
                ),
                status_code=response.status_code,
                response_body=body_text,
                parsed_body=parsed_body,
            )

        if body_text:
            raise ProviderError(
                ERR_FMT_API_ERROR_BODY.format(status=response.status_code, body=body_text),
                status_code=response.status_code,
                response_body=body_text,
            )

        raise ProviderError(
            ERR_FMT_API_ERROR.format(status=response.status_code),
            status_code=response.status_code,
        )

    def _decode_envelope(
        self,
        url: str,
        response: Response,
        ctx: Optional[RequestContext],
    ) -> Dict[str, Any]:
        """Decode a 2xx body into the ``{elements, paging}`` envelope.

        ``elements`` and ``paging`` may be missing or null; any other type
        is a decode error.
        """
        try:
            envelope = response.json()
            if not isinstance(envelope, dict):
                raise ValueError(f"expected a JSON object, got {type(envelope).__name__}")
            elements = envelope.get(KEY_ELEMENTS)
            if elements is not None and not isinstance(elements, list):
                raise ValueError(f"'{KEY_ELEMENTS}' must be an array")
            paging = envelope.get(KEY_PAGING)
            if paging is not None and not isinstance(paging, dict):
                raise ValueError(f"'{KEY_PAGING}' must be an object")
        except ValueError as e:
            self._log_error(ctx, LOG_MESSAGE_FAILED_DECODE_RESPONSE, {
                LOG_TAG_URL: url,
                LOG_TAG_ERROR: str(e),
            })
            raise DecodeError(ERR_FMT_DECODE_RESPONSE.format(error=e)) from e

        return envelope

    def _object_elements(
        self,
        url: str,
        envelope: Dict[str, Any],
        ctx: Optional[RequestContext],
    ) -> List[Dict[str, Any]]:
        """Return the envelope elements, requiring each one to be an object."""
        elements = envelope.get(KEY_ELEMENTS) or []
        for index, element in enumerate(elements):
            if not isinstance(element, dict):
                error = f"element {index} is {type(element).__name__}, expected an object"
                self._log_error(ctx, LOG_MESSAGE_FAILED_DECODE_RESPONSE, {
                    LOG_TAG_URL: url,
                    LOG_TAG_ERROR: error,
                })
                raise DecodeError(ERR_FMT_DECODE_RESPONSE.format(error=error), index=index)
        return list(elements)

    def _log_error(
        self,
        ctx: Optional[RequestContext],
        message: str,
        tags: Dict[str, str],
    ) -> None:
        if self.logger is None:
            return
        self.logger.error(ctx, message, tags)
