from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional

from .models import FurnitureItem, Layout


class LayoutEvent(NamedTuple):
    kind: str                          # "created" | "updated" | "deleted"
    item_id: str
    item: Optional[FurnitureItem]      # None for deleted


CREATED = "created"
UPDATED = "updated"
DELETED = "deleted"


def _by_id(layout: Layout) -> Dict[str, FurnitureItem]:
    out: Dict[str, FurnitureItem] = {}
    for it in layout:
        out[it.id] = it   # last wins
    return out


def diff_layouts(previous: Layout, current: Layout) -> List[LayoutEvent]:
    """Events that turn a view of ``previous`` into a view of ``current``.

    Deletions come first, then creations/updates in ``current`` order.
    Unchanged items produce no event.
    """
    old = _by_id(previous)
    new = _by_id(current)
    events: List[LayoutEvent] = []
    for item_id in old:
        if item_id not in new:
            events.append(LayoutEvent(DELETED, item_id, None))
    seen = set()
    for it in current:
        if it.id in seen:
            continue
        seen.add(it.id)
        item = new[it.id]
        if it.id not in old:
            events.append(LayoutEvent(CREATED, it.id, item))
        elif old[it.id] != item:
            events.append(LayoutEvent(UPDATED, it.id, item))
    return events
