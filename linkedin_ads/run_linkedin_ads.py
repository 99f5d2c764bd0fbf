#!/usr/bin/env python3
"""
LinkedIn Ads command-line runner.

Runs a single ad account search, campaign search or analytics report and
prints the normalized result as JSON on stdout. Logs go to stderr.

Usage:
    # Active ad accounts
    linkedin-ads accounts --status ACTIVE

    # Campaigns of the configured account, 50 per page
    linkedin-ads campaigns --status ACTIVE PAUSED --page-size 50

    # Daily campaign report for January
    linkedin-ads analytics --start 2024-01-01 --end 2024-01-31 \\
        --pivot CAMPAIGN --granularity DAILY --fields impressions clicks

Environment Variables:
    Required:
    - LINKEDIN_ACCESS_TOKEN: OAuth2 access token

    Optional:
    - LINKEDIN_ACCOUNT_ID: Default ad account for campaigns/analytics
    - LINKEDIN_BASE_URL, LINKEDIN_API_VERSION
    - LINKEDIN_HTTP_TIMEOUT, LINKEDIN_HTTP_MAX_RETRIES,
      LINKEDIN_HTTP_RETRY_DELAY, LINKEDIN_HTTP_MAX_RETRY_DELAY,
      LINKEDIN_HTTP_USER_AGENT
    - LINKEDIN_ADS_CONFIG: YAML configuration file
    - LOG_LEVEL: Logging level (default: INFO)

Exit Codes:
    0: Success
    1: Configuration error
    2: Request, provider or decode error
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from linkedin_ads.api.adaccounts import AdAccountSearchInput
from linkedin_ads.api.campaigns import CampaignSearchInput
from linkedin_ads.api.reporting import AnalyticsInput, Date, DateRange, SortBy
from linkedin_ads.core.config import AppConfig, ConfigurationManager
from linkedin_ads.core.constants import ENV_LOG_LEVEL, LOG_LEVEL_DEFAULT
from linkedin_ads.core.context import RequestContext
from linkedin_ads.core.exceptions import ConfigurationError, LinkedInAdsError
from linkedin_ads.factory import Repositories, build_repositories
from linkedin_ads.infrastructure.logger import LoguruLogger
from linkedin_ads.utils.env import get_env
from linkedin_ads.utils.logging import setup_logging
from linkedin_ads.utils.urn_utils import extract_id_from_urn

EXIT_SUCCESS = 0
EXIT_CONFIGURATION_ERROR = 1
EXIT_REQUEST_ERROR = 2


def parse_date(value: str) -> Date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")
    return Date(year=parsed.year, month=parsed.month, day=parsed.day)


def _add_test_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--test",
        dest="test",
        action="store_true",
        default=None,
        help="Only test entities",
    )
    group.add_argument(
        "--no-test",
        dest="test",
        action="store_false",
        help="Only non-test entities",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the three sub-commands."""
    parser = argparse.ArgumentParser(
        prog="linkedin-ads",
        description="Query the LinkedIn Marketing API (ad accounts, campaigns, analytics)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file (default: $LINKEDIN_ADS_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        default=get_env(ENV_LOG_LEVEL, LOG_LEVEL_DEFAULT).upper(),
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        help="Overall deadline in seconds, retries included",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # accounts
    accounts = subparsers.add_parser("accounts", help="Search ad accounts")
    accounts.add_argument("--status", nargs="+", default=[], help="Account statuses")
    accounts.add_argument("--id", dest="account_ids", nargs="+", default=[], help="Account IDs")
    accounts.add_argument("--reference", nargs="+", default=[], help="Reference URNs")
    accounts.add_argument("--name", nargs="+", default=[], help="Account names")
    _add_test_flags(accounts)
    accounts.add_argument("--sort-field", default="", help="Sort field (e.g. ID)")
    accounts.add_argument("--sort-order", default="", help="ASCENDING or DESCENDING")
    accounts.add_argument("--start", type=int, default=0, help="Pagination start")
    accounts.add_argument("--count", type=int, default=0, help="Page size")

    # campaigns
    campaigns = subparsers.add_parser("campaigns", help="Search campaigns of an ad account")
    campaigns.add_argument("--account-id", help="Ad account ID or URN (default: configured)")
    campaigns.add_argument("--campaign-group", nargs="+", default=[], help="Campaign group URNs")
    campaigns.add_argument("--associated-entity", nargs="+", default=[], help="Associated entity URNs")
    campaigns.add_argument("--campaign-id", nargs="+", default=[], help="Campaign URNs")
    campaigns.add_argument("--status", nargs="+", default=[], help="Campaign statuses")
    campaigns.add_argument("--type", nargs="+", default=[], help="Campaign types")
    campaigns.add_argument("--name", nargs="+", default=[], help="Campaign names")
    _add_test_flags(campaigns)
    campaigns.add_argument("--sort-order", default="", help="ASCENDING or DESCENDING")
    campaigns.add_argument("--page-size", type=int, default=0, help="Results per page")
    campaigns.add_argument("--page-token", default="", help="Cursor from a previous page")

    # analytics
    analytics = subparsers.add_parser("analytics", help="Run an analytics report")
    analytics.add_argument("--account-id", help="Ad account ID or URN (default: configured)")
    analytics.add_argument("--start", type=parse_date, required=True, help="Start date (YYYY-MM-DD)")
    analytics.add_argument("--end", type=parse_date, help="End date (YYYY-MM-DD)")
    analytics.add_argument("--granularity", default="", help="ALL, DAILY, MONTHLY or YEARLY")
    analytics.add_argument("--pivot", default="", help="Pivot (CAMPAIGN, CREATIVE, MEMBER_COMPANY, ...)")
    analytics.add_argument("--campaign-type", default="", help="Campaign type filter")
    analytics.add_argument("--share", nargs="+", default=[], help="Share URNs")
    analytics.add_argument("--campaign", nargs="+", default=[], help="Campaign URNs")
    analytics.add_argument("--campaign-group", nargs="+", default=[], help="Campaign group URNs")
    analytics.add_argument("--extra-account", nargs="+", default=[], help="Additional account URNs")
    analytics.add_argument("--company", nargs="+", default=[], help="Organization URNs")
    analytics.add_argument("--sort-field", default="", help="Sort field (e.g. IMPRESSIONS)")
    analytics.add_argument("--sort-order", default="", help="ASCENDING or DESCENDING")
    analytics.add_argument("--fields", nargs="+", default=[], help="Metrics to return")

    return parser


def resolve_account_id(args: argparse.Namespace, config: AppConfig) -> str:
    """Account ID from the command line, else from configuration.

    Raises:
        ConfigurationError: If neither provides one
    """
    account_id = extract_id_from_urn(args.account_id or config.linkedin.account_id)
    if not account_id:
        raise ConfigurationError(
            "Ad account ID is required (use --account-id or set LINKEDIN_ACCOUNT_ID)"
        )
    return account_id


def run_command(
    args: argparse.Namespace,
    config: AppConfig,
    repositories: Repositories,
    ctx: RequestContext,
) -> dict:
    """Run the selected sub-command and return its JSON-ready result."""
    if args.command == "accounts":
        result = repositories.ad_accounts.search_ad_accounts(
            AdAccountSearchInput(
                status=args.status,
                account_ids=args.account_ids,
                references=args.reference,
                names=args.name,
                test=args.test,
                sort_field=args.sort_field,
                sort_order=args.sort_order,
                start=args.start,
                count=args.count,
            ),
            ctx,
        )
        logger.success(f"Found {len(result.elements)} ad accounts")
        return result.to_dict()

    if args.command == "campaigns":
        result = repositories.campaigns.search_campaigns(
            CampaignSearchInput(
                account_id=resolve_account_id(args, config),
                campaign_groups=args.campaign_group,
                associated_entities=args.associated_entity,
                campaign_ids=args.campaign_id,
                status=args.status,
                type=args.type,
                name=args.name,
                test=args.test,
                sort_order=args.sort_order,
                page_size=args.page_size,
                page_token=args.page_token,
            ),
            ctx,
        )
        logger.success(
            f"Found {len(result.elements)} campaigns (more pages: {result.has_next_page})"
        )
        return result.to_dict()

    result = repositories.reporting.get_analytics(
        AnalyticsInput(
            account_id=resolve_account_id(args, config),
            date_range=DateRange(start=args.start, end=args.end),
            time_granularity=args.granularity,
            pivot=args.pivot,
            campaign_type=args.campaign_type,
            shares=args.share,
            campaigns=args.campaign,
            campaign_groups=args.campaign_group,
            accounts=args.extra_account,
            companies=args.company,
            sort_by=SortBy(field=args.sort_field, order=args.sort_order),
            fields=args.fields,
        ),
        ctx,
    )
    logger.success(f"Retrieved {len(result.elements)} analytics rows")
    return result.to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (sys.argv[1:] if None)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, log_file=args.log_file)

    try:
        config = ConfigurationManager(config_path=args.config).load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIGURATION_ERROR

    logger.info(f"Running '{args.command}' against {config.linkedin.base_url}")

    repositories = build_repositories(config, logger=LoguruLogger())
    ctx = RequestContext(timeout=args.deadline)
    try:
        output = run_command(args, config, repositories, ctx)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIGURATION_ERROR
    except LinkedInAdsError as e:
        logger.error(f"Request failed: {e}")
        return EXIT_REQUEST_ERROR
    finally:
        repositories.close()

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
