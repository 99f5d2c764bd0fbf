"""Request and result models for the ad account search."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class AdAccountSearchInput:
    """Filters for ``GET /adAccounts?q=search``.

    List filters are combined into the composite ``search`` parameter;
    empty lists are ignored.

    Attributes:
        status: Account statuses (e.g. ACTIVE, DRAFT)
        account_ids: Account IDs
        references: Associated organization or person URNs
        names: Exact account names
        test: Only test accounts (True), only non-test accounts (False), or
            both (None)
        sort_field: Sort field (e.g. ID, NAME)
        sort_order: ASCENDING or DESCENDING
        start: Pagination start index
        count: Page size (max 1000)
    """

    status: List[str] = field(default_factory=list)
    account_ids: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    test: Optional[bool] = None
    sort_field: str = ""
    sort_order: str = ""
    start: int = 0
    count: int = 0


@dataclass
class AdAccountSearchResult:
    """Ad accounts as returned by LinkedIn, with the raw paging block."""

    elements: List[Dict[str, Any]] = field(default_factory=list)
    paging: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Provider-style JSON shape; ``paging`` is omitted when empty."""
        result: Dict[str, Any] = {"elements": self.elements}
        if self.paging:
            result["paging"] = self.paging
        return result
