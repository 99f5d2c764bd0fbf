"""Request and result models for the campaign search."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CampaignSearchInput:
    """Filters for ``GET /adAccounts/{id}/adCampaigns?q=search``.

    Attributes:
        account_id: Ad account owning the campaigns (numeric ID)
        campaign_groups: Campaign group URNs
        associated_entities: Associated entity URNs (e.g. organizations)
        campaign_ids: Campaign URNs
        status: Campaign statuses (ACTIVE, PAUSED, ARCHIVED, ...)
        type: Campaign types (TEXT_AD, SPONSORED_UPDATES, ...)
        name: Exact campaign names
        test: Only test campaigns (True), only non-test (False), or both (None)
        sort_order: ASCENDING or DESCENDING
        page_size: Results per page
        page_token: Cursor from a previous result's ``next_page_token``
    """

    account_id: str
    campaign_groups: List[str] = field(default_factory=list)
    associated_entities: List[str] = field(default_factory=list)
    campaign_ids: List[str] = field(default_factory=list)
    status: List[str] = field(default_factory=list)
    type: List[str] = field(default_factory=list)
    name: List[str] = field(default_factory=list)
    test: Optional[bool] = None
    sort_order: str = ""
    page_size: int = 0
    page_token: str = ""


@dataclass
class CampaignSearchResult:
    """Campaigns as returned by LinkedIn plus the cursor for the next page.

    ``next_page_token`` is empty on the last page.
    """

    elements: List[Dict[str, Any]] = field(default_factory=list)
    next_page_token: str = ""

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_token)

    def to_dict(self) -> Dict[str, Any]:
        """Provider-style JSON shape with a ``metadata`` block."""
        metadata: Dict[str, Any] = {}
        if self.next_page_token:
            metadata["nextPageToken"] = self.next_page_token
        return {"elements": self.elements, "metadata": metadata}
