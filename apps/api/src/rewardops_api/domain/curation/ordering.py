"""Display-order reconciliation.

Every operation here returns a new list whose ``display_order`` values are
exactly ``1..N`` in sequence order. Inputs are never mutated; callers swap the
returned list into the snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Collection, Iterable, Sequence
from uuid import UUID

from .items import CatalogItem, index_by_id


class MovePosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class OrderChange:
    """One row whose display order moved relative to the baseline."""

    item_id: UUID
    new_order: int
    previous_order: int | None


def sort_by_display_order(items: Iterable[CatalogItem]) -> list[CatalogItem]:
    # sorted() is stable, so ties keep their load order
    return sorted(items, key=lambda item: item.display_order)


def densify(ordered: Sequence[CatalogItem]) -> list[CatalogItem]:
    """Renumber ``ordered`` as ``1..N`` following its sequence order."""

    result: list[CatalogItem] = []
    for position, item in enumerate(ordered, start=1):
        result.append(item if item.display_order == position else replace(item, display_order=position))
    return result


def is_dense(items: Iterable[CatalogItem]) -> bool:
    orders = sorted(item.display_order for item in items)
    return orders == list(range(1, len(orders) + 1))


def normalize(items: Iterable[CatalogItem]) -> list[CatalogItem]:
    return densify(sort_by_display_order(items))


def reorder(items: Sequence[CatalogItem], dragged_id: UUID, target_id: UUID) -> list[CatalogItem]:
    """Drop ``dragged_id`` immediately before ``target_id``."""

    if dragged_id == target_id:
        return list(items)

    ordered = sort_by_display_order(items)
    dragged_index = next((i for i, item in enumerate(ordered) if item.id == dragged_id), None)
    if dragged_index is None or not any(item.id == target_id for item in ordered):
        return list(items)

    dragged = ordered.pop(dragged_index)
    target_index = next(i for i, item in enumerate(ordered) if item.id == target_id)
    ordered.insert(target_index, dragged)
    return densify(ordered)


def move_selected(
    items: Sequence[CatalogItem],
    selection: Collection[UUID],
    position: MovePosition,
) -> list[CatalogItem]:
    """Move every selected item to the top or bottom, keeping relative order."""

    if not selection:
        return list(items)

    ordered = sort_by_display_order(items)
    selected = [item for item in ordered if item.id in selection]
    unselected = [item for item in ordered if item.id not in selection]

    if MovePosition(position) is MovePosition.TOP:
        return densify(selected + unselected)
    return densify(unselected + selected)


def move_item(items: Sequence[CatalogItem], item_id: UUID, direction: MoveDirection) -> list[CatalogItem]:
    """Single-step move; moving past either end leaves the order untouched."""

    ordered = sort_by_display_order(items)
    index = next((i for i, item in enumerate(ordered) if item.id == item_id), None)
    if index is None:
        return list(items)

    direction = MoveDirection(direction)
    last = len(ordered) - 1
    if direction is MoveDirection.UP:
        new_index = max(index - 1, 0)
    elif direction is MoveDirection.DOWN:
        new_index = min(index + 1, last)
    elif direction is MoveDirection.TOP:
        new_index = 0
    else:
        new_index = last

    if new_index == index:
        return list(items)

    moved = ordered.pop(index)
    ordered.insert(new_index, moved)
    return densify(ordered)


def diff_orders(current: Iterable[CatalogItem], baseline: Iterable[CatalogItem]) -> list[OrderChange]:
    """Rows whose ``display_order`` differs from the last persisted snapshot.

    Items absent from the baseline are included so their position gets
    written on the next save.
    """

    previous = index_by_id(baseline)
    changes: list[OrderChange] = []
    for item in sort_by_display_order(current):
        original = previous.get(item.id)
        if original is None:
            changes.append(OrderChange(item.id, item.display_order, None))
        elif original.display_order != item.display_order:
            changes.append(OrderChange(item.id, item.display_order, original.display_order))
    return changes


__all__ = [
    "MoveDirection",
    "MovePosition",
    "OrderChange",
    "densify",
    "diff_orders",
    "is_dense",
    "move_item",
    "move_selected",
    "normalize",
    "reorder",
    "sort_by_display_order",
]
