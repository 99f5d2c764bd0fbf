"""URN utility functions for LinkedIn API."""
import re
from typing import Optional


def extract_id_from_urn(urn: str) -> Optional[str]:
    """
    Extract the trailing ID from a LinkedIn URN.

    Args:
        urn: LinkedIn URN (e.g., "urn:li:sponsoredAccount:12345")

    Returns:
        ID as string, the input itself if it is already a bare ID,
        or None if not found

    Examples:
        >>> extract_id_from_urn("urn:li:sponsoredAccount:12345")
        "12345"
        >>> extract_id_from_urn("12345")
        "12345"
    """
    if not urn or not isinstance(urn, str):
        return None

    match = re.search(r"([^:]+)$", urn.strip())
    return match.group(1) if match else None


def build_linkedin_urn(entity_type: str, entity_id: str) -> str:
    """
    Build LinkedIn URN from entity type and ID.

    Args:
        entity_type: Entity type (e.g., "sponsoredCampaign")
        entity_id: Entity ID

    Returns:
        Formatted URN

    Examples:
        >>> build_linkedin_urn("sponsoredCampaign", "12345")
        "urn:li:sponsoredCampaign:12345"
    """
    return f"urn:li:{entity_type}:{entity_id}"


def account_urn(account_id: str) -> str:
    """Sponsored account URN for a numeric account ID (or an existing URN)."""
    account_id = str(account_id).strip()
    if account_id.startswith("urn:li:"):
        return account_id
    return build_linkedin_urn("sponsoredAccount", account_id)
