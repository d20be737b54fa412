"""Selection of catalog ids targeted by bulk commands."""

from __future__ import annotations

from typing import Iterable, Iterator
from uuid import UUID


class SelectionSet:
    """Ids chosen for the next bulk command.

    Filtering never prunes the selection: hidden items stay selected until a
    bulk command commits, the admin deselects them, or the item is purged.
    """

    def __init__(self, ids: Iterable[UUID] = ()) -> None:
        self._ids: set[UUID] = set(ids)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __iter__(self) -> Iterator[UUID]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __repr__(self) -> str:
        return f"SelectionSet(size={len(self._ids)})"

    @property
    def ids(self) -> frozenset[UUID]:
        return frozenset(self._ids)

    def add(self, item_id: UUID) -> None:
        self._ids.add(item_id)

    def discard(self, item_id: UUID) -> None:
        self._ids.discard(item_id)

    def toggle(self, item_id: UUID) -> bool:
        """Flip membership and return whether the id is now selected."""

        if item_id in self._ids:
            self._ids.remove(item_id)
            return False
        self._ids.add(item_id)
        return True

    def toggle_all(self, visible_ids: Iterable[UUID]) -> None:
        # Select-all checkbox: clears when every visible id is already selected.
        visible = set(visible_ids)
        if visible and visible <= self._ids:
            self._ids -= visible
        else:
            self._ids |= visible

    def replace(self, ids: Iterable[UUID]) -> None:
        self._ids = set(ids)

    def clear(self) -> None:
        self._ids.clear()

    def visible(self, visible_ids: Iterable[UUID]) -> list[UUID]:
        """Selected ids among ``visible_ids``, in the given order."""

        return [item_id for item_id in visible_ids if item_id in self._ids]

    def hidden_count(self, visible_ids: Iterable[UUID]) -> int:
        return len(self._ids - set(visible_ids))

    def retain(self, existing_ids: Iterable[UUID]) -> None:
        self._ids &= set(existing_ids)


__all__ = ["SelectionSet"]
