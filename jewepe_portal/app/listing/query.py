from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ListQuery:
    """Committed query of a list screen.

    ``with_changes`` is the only way to derive a new query: any change other
    than ``page`` itself sends the list back to the first page.
    """

    page: int = 1
    limit: int = 10
    sort_key: str = ""
    search_text: str = ""
    status_filter: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be > 0, got {self.limit}")

    def with_changes(self, **changes: Any) -> "ListQuery":
        if "status_filter" in changes and changes["status_filter"] == "":
            changes["status_filter"] = None
        resets_page = any(
            getattr(self, name) != value for name, value in changes.items() if name != "page"
        )
        updated = replace(self, **changes)
        if resets_page and updated.page != 1:
            updated = replace(updated, page=1)
        return updated
