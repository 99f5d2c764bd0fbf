"""Repository for LinkedIn ad analytics."""

from typing import Any, Dict, List, Optional

from loguru import logger

from linkedin_ads.api.base import BaseRepository
from linkedin_ads.api.reporting.models import (
    AnalyticsElement,
    AnalyticsInput,
    AnalyticsResult,
    Date,
    DateRange,
    Paging,
)
from linkedin_ads.api.reporting.query_builder import ReportingQueryBuilder
from linkedin_ads.core.constants import (
    ERR_FMT_DECODE_ELEMENT,
    ERR_FMT_DECODE_RESPONSE,
    KEY_DATE_RANGE,
    KEY_ELEMENTS,
    KEY_PAGING,
    KEY_PIVOT_VALUES,
    LOG_MESSAGE_FAILED_DECODE_ELEMENT,
    LOG_MESSAGE_FAILED_DECODE_RESPONSE,
    LOG_TAG_ERROR,
    LOG_TAG_METRIC,
    LOG_TAG_URL,
)
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import DecodeError
from linkedin_ads.core.protocols import HTTPClient, Logger


def _decode_int(value: Any, name: str) -> int:
    # JSON numbers may arrive as 2024.0; booleans are not numbers here
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{name} must be an integer, got {value!r}")


def decode_date(raw: Any, name: str) -> Date:
    """Decode a ``{"year": Y, "month": M, "day": D}`` object.

    Raises:
        ValueError: If the object or any component is malformed
    """
    if not isinstance(raw, dict):
        raise ValueError(f"{name} must be an object")
    return Date(
        year=_decode_int(raw.get("year"), f"{name}.year"),
        month=_decode_int(raw.get("month"), f"{name}.month"),
        day=_decode_int(raw.get("day"), f"{name}.day"),
    )


def decode_date_range(raw: Any) -> Optional[DateRange]:
    """Decode the ``dateRange`` facet of an analytics row.

    Returns:
        DateRange, or None when the row has no ``start`` date

    Raises:
        ValueError: If the facet is malformed
    """
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"{KEY_DATE_RANGE} must be an object")

    raw_start = raw.get("start")
    raw_end = raw.get("end")
    if raw_start is None:
        if raw_end is not None:
            raise ValueError(f"{KEY_DATE_RANGE}.end given without start")
        return None

    start = decode_date(raw_start, f"{KEY_DATE_RANGE}.start")
    end = decode_date(raw_end, f"{KEY_DATE_RANGE}.end") if raw_end is not None else None
    return DateRange(start=start, end=end)


def decode_pivot_values(raw: Any) -> List[str]:
    """Decode the ``pivotValues`` facet (a list of URN strings)."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"{KEY_PIVOT_VALUES} must be an array")
    for i, value in enumerate(raw):
        if not isinstance(value, str):
            raise ValueError(f"{KEY_PIVOT_VALUES}[{i}] must be a string, got {value!r}")
    return list(raw)


def decode_element(raw: Any) -> AnalyticsElement:
    """Split a raw analytics row into date range, pivot values and metrics.

    Args:
        raw: One decoded entry of the response ``elements`` array

    Returns:
        AnalyticsElement whose metrics hold every key except ``dateRange``
        and ``pivotValues``; a null row gives an empty element

    Raises:
        ValueError: If the row is malformed
    """
    if raw is None:
        return AnalyticsElement()
    if not isinstance(raw, dict):
        raise ValueError(f"element must be an object, got {type(raw).__name__}")

    metrics = {
        key: value
        for key, value in raw.items()
        if key not in (KEY_DATE_RANGE, KEY_PIVOT_VALUES)
    }
    return AnalyticsElement(
        date_range=decode_date_range(raw.get(KEY_DATE_RANGE)),
        pivot_values=decode_pivot_values(raw.get(KEY_PIVOT_VALUES)),
        metrics=metrics,
    )


def decode_paging(raw: Optional[Dict[str, Any]]) -> Paging:
    """Decode the ``{count, start, links}`` paging block."""
    if not raw:
        return Paging()
    count = raw.get("count")
    start = raw.get("start")
    links = raw.get("links")
    if links is not None and not isinstance(links, list):
        raise ValueError("paging.links must be an array")
    return Paging(
        count=_decode_int(count, "paging.count") if count is not None else None,
        start=_decode_int(start, "paging.start") if start is not None else None,
        links=list(links or []),
    )


class ReportingRepository(BaseRepository):
    """Fetches analytics reports and normalizes their dynamic rows."""

    def __init__(
        self,
        client: HTTPClient,
        query_builder: ReportingQueryBuilder,
        logger: Optional[Logger] = None,
    ):
        super().__init__(client, logger)
        self.query_builder = query_builder

    def get_analytics(
        self,
        analytics_input: AnalyticsInput,
        ctx: Optional[RequestContext] = None,
    ) -> AnalyticsResult:
        """Run an analytics report.

        A single malformed row fails the whole call; rows decoded before it
        are discarded.

        Args:
            analytics_input: Report parameters
            ctx: Optional cancellation/deadline signal

        Returns:
            AnalyticsResult with one AnalyticsElement per row

        Raises:
            RequestFailedError: If the request could not be sent
            ProviderError: If LinkedIn rejected the request
            DecodeError: If the envelope or any row is malformed
        """
        url, headers = self.query_builder.build_analytics_query(analytics_input)
        envelope = self._fetch_envelope(url, headers, ctx)

        try:
            paging = decode_paging(envelope.get(KEY_PAGING))
        except ValueError as e:
            self._log_error(ctx, LOG_MESSAGE_FAILED_DECODE_RESPONSE, {
                LOG_TAG_URL: url,
                LOG_TAG_ERROR: str(e),
            })
            raise DecodeError(ERR_FMT_DECODE_RESPONSE.format(error=e)) from e

        elements = []
        for index, raw_element in enumerate(envelope.get(KEY_ELEMENTS) or []):
            try:
                elements.append(decode_element(raw_element))
            except ValueError as e:
                self._log_error(ctx, LOG_MESSAGE_FAILED_DECODE_ELEMENT, {
                    LOG_TAG_URL: url,
                    LOG_TAG_METRIC: str(index),
                    LOG_TAG_ERROR: str(e),
                })
                raise DecodeError(
                    ERR_FMT_DECODE_ELEMENT.format(index=index, error=e),
                    index=index,
                ) from e

        logger.debug(
            f"Retrieved {len(elements)} analytics rows for account {analytics_input.account_id}"
        )
        return AnalyticsResult(elements=elements, paging=paging)
