"""Record types for resource stores.

Records are plain dictionaries. Every stored record carries the three
system-managed keys below plus the user-defined fields of its resource.
"""

from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]

ID_FIELD = "id"
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

SYSTEM_FIELDS = frozenset({ID_FIELD, CREATED_AT_FIELD, UPDATED_AT_FIELD})


@dataclass(frozen=True)
class Page:
    """One page of a list or query result.

    Attributes:
        data: Records on this page, in insertion order.
        total: Number of matching records before pagination.
        limit: Page size that was requested.
        offset: Number of matching records skipped.
        has_more: Whether records remain after this page.
    """

    data: list[Record] = field(default_factory=list)
    total: int = 0
    limit: int = 100
    offset: int = 0
    has_more: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
        }
