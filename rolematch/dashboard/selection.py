"""Checkbox selection state keyed by entity id."""

from typing import Iterable, Protocol, TypeVar


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


class Selection:
    """Set of selected ids owned by one dashboard session."""

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: set[str] = set(ids)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def toggle(self, entity_id: str) -> bool:
        """Flip one id; returns whether it is now selected."""
        if entity_id in self._ids:
            self._ids.discard(entity_id)
            return False
        self._ids.add(entity_id)
        return True

    def toggle_all(self, visible_ids: Iterable[str]) -> None:
        """Select every visible id, or clear them all if all were selected.

        Mirrors a "select all" checkbox: selections outside ``visible_ids``
        are dropped either way.
        """
        visible = list(visible_ids)
        all_selected = bool(visible) and all(i in self._ids for i in visible)
        self._ids = set() if all_selected else set(visible)

    def clear(self) -> None:
        self._ids.clear()

    def pick(self, items: Iterable[T]) -> list[T]:
        """Selected items, in the order given."""
        return [item for item in items if item.id in self._ids]
