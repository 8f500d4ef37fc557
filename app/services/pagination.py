from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ListPage(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total


def build_page(items: Sequence[T], total: int, limit: int, offset: int) -> ListPage[T]:
    """Compose a page; an offset past ``total`` yields no items and no more pages."""
    return ListPage(items=list(items), total=total, limit=limit, offset=offset)
