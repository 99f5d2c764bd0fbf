"""Query builder for the ad analytics endpoint.

Example URL:
    https://api.linkedin.com/rest/adAnalytics?q=analytics&pivot=(value:CAMPAIGN)
        &dateRange=(start:(day:1,month:1,year:2024),end:(day:31,month:1,year:2024))
        &timeGranularity=(value:DAILY)
        &accounts=List(urn%3Ali%3AsponsoredAccount%3A512345678)
        &fields=impressions,clicks,pivotValues
"""

from typing import Dict, List, Tuple

from linkedin_ads.api.reporting.models import AnalyticsInput, Date, DateRange, SortBy
from linkedin_ads.core.constants import KEY_PIVOT_VALUES, PATH_AD_ANALYTICS, SIMPLE_PIVOTS
from linkedin_ads.utils.query_utils import (
    QueryParams,
    build_endpoint,
    build_headers,
    build_url,
    clean_values,
    escape_query_value,
    format_list,
)
from linkedin_ads.utils.urn_utils import account_urn


def format_date(date: Date) -> str:
    """Format a date as ``(day:D,month:M,year:Y)``."""
    return f"(day:{date.day},month:{date.month},year:{date.year})"


def format_date_range(date_range: DateRange) -> str:
    """Format a date range as ``(start:(...)[,end:(...)])``."""
    value = f"start:{format_date(date_range.start)}"
    if date_range.end is not None:
        value = f"{value},end:{format_date(date_range.end)}"
    return f"({value})"


def format_pivot(pivot: str) -> str:
    """Pivot value: bare for the member demographic pivots, wrapped otherwise."""
    if pivot in SIMPLE_PIVOTS:
        return escape_query_value(pivot)
    return f"(value:{escape_query_value(pivot)})"


def format_sort_by(sort_by: SortBy) -> str:
    """Format the sort facet as ``(field:F,order:O)``; empty when unset."""
    parts = []
    if sort_by.field:
        parts.append(f"field:{escape_query_value(sort_by.field)}")
    if sort_by.order:
        parts.append(f"order:{escape_query_value(sort_by.order)}")
    if not parts:
        return ""
    return f"({','.join(parts)})"


def ensure_pivot_values(fields: List[str]) -> List[str]:
    """Return the requested fields with ``pivotValues`` appended if missing."""
    result = list(fields)
    if KEY_PIVOT_VALUES not in result:
        result.append(KEY_PIVOT_VALUES)
    return result


class ReportingQueryBuilder:
    """Builds ``GET /adAnalytics?q=analytics`` requests."""

    def __init__(self, base_url: str, version: str, access_token: str):
        """Initialize the query builder.

        Args:
            base_url: LinkedIn REST base URL
            version: LinkedIn-Version header value
            access_token: OAuth2 access token
        """
        self.base_url = base_url
        self.version = version
        self.access_token = access_token

    def build_analytics_query(self, analytics_input: AnalyticsInput) -> Tuple[str, Dict[str, str]]:
        """Build URL and headers for an analytics report.

        Args:
            analytics_input: Report parameters

        Returns:
            Tuple of (url, headers)
        """
        endpoint = build_endpoint(self.base_url, PATH_AD_ANALYTICS)
        url = build_url(endpoint, self._build_query_params(analytics_input))
        return url, build_headers(self.access_token, self.version)

    @staticmethod
    def _build_query_params(analytics_input: AnalyticsInput) -> QueryParams:
        params = QueryParams().add_raw("q", "analytics")

        if analytics_input.pivot:
            params.add_raw("pivot", format_pivot(analytics_input.pivot))

        params.add_raw("dateRange", format_date_range(analytics_input.date_range))

        if analytics_input.time_granularity:
            params.add_raw(
                "timeGranularity",
                f"(value:{escape_query_value(analytics_input.time_granularity)})",
            )

        # At least one facet is required: the configured account always goes
        # first, extra account URNs share the same List
        accounts = [account_urn(analytics_input.account_id)]
        for urn in clean_values(analytics_input.accounts):
            if urn not in accounts:
                accounts.append(urn)
        params.add_raw("accounts", format_list(accounts))

        facets = (
            ("shares", analytics_input.shares),
            ("campaigns", analytics_input.campaigns),
            ("campaignGroups", analytics_input.campaign_groups),
            ("companies", analytics_input.companies),
        )
        for name, values in facets:
            cleaned = clean_values(values)
            if cleaned:
                params.add_raw(name, format_list(cleaned))

        if analytics_input.campaign_type:
            params.add_raw(
                "campaignType",
                f"(value:{escape_query_value(analytics_input.campaign_type)})",
            )

        sort_by = format_sort_by(analytics_input.sort_by)
        if sort_by:
            params.add_raw("sortBy", sort_by)

        fields = ensure_pivot_values(clean_values(analytics_input.fields))
        params.add_raw("fields", ",".join(fields))

        return params
