"""Ordering policy for categories and to-dos.

Orderings are expressed as sort descriptors (field + direction) so the same
policy can be applied in memory or pushed down to the database as ORDER BY
clauses. In-memory sorting relies on Python's stable sort, so entities that
compare equal keep their incoming relative order and repeated calls give the
same result.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from sqlalchemy import asc, desc


@dataclass(frozen=True)
class SortDescriptor:
    """Sort by one entity field."""

    key: str
    ascending: bool = True

    def sort(self, entities: Sequence[Any]) -> List[Any]:
        """Sort entities by this field. Unset values always go last."""
        present = [e for e in entities if getattr(e, self.key) is not None]
        missing = [e for e in entities if getattr(e, self.key) is None]
        present = sorted(present, key=lambda e: getattr(e, self.key), reverse=not self.ascending)
        return present + missing

    def to_clauses(self, model) -> list:
        """ORDER BY clauses for a SQLAlchemy model, with NULLs last."""
        column = getattr(model, self.key)
        direction = asc if self.ascending else desc
        return [column.is_(None), direction(column)]


def sort_by_order(ascending: bool = True) -> SortDescriptor:
    return SortDescriptor("order", ascending)


def sort_by_created_at(ascending: bool = True) -> SortDescriptor:
    return SortDescriptor("created_at", ascending)


def default_ordering() -> List[SortDescriptor]:
    """Display order ascending, ties broken by creation time ascending.

    The first entity under this ordering is the default category.
    """
    return [sort_by_order(ascending=True), sort_by_created_at(ascending=True)]


def sort_entities(entities: Sequence[Any], descriptors: Sequence[SortDescriptor]) -> List[Any]:
    """Apply descriptors in priority order (first descriptor is the primary key).

    Sorts by the least significant descriptor first; stability preserves the
    earlier passes for ties.
    """
    result = list(entities)
    for descriptor in reversed(list(descriptors)):
        result = descriptor.sort(result)
    return result


def order_by_clauses(model, descriptors: Sequence[SortDescriptor]) -> list:
    clauses: list = []
    for descriptor in descriptors:
        clauses.extend(descriptor.to_clauses(model))
    return clauses


def next_order(entities: Sequence[Any]) -> int:
    """Position for appending after the existing entities."""
    orders = [e.order for e in entities if e.order is not None]
    return max(orders) + 1 if orders else 0


def reorder(entities: Sequence[Any], from_index: int, to_index: int) -> List[Any]:
    """Move one entity and renumber positions 0..n-1.

    Args:
        entities: Entities in current display order
        from_index: Position of the entity being moved
        to_index: Position it is dropped at

    Returns:
        Entities in their new order, each with `order` set to its index

    Raises:
        IndexError: If either index is out of range
    """
    items = list(entities)
    if not 0 <= from_index < len(items) or not 0 <= to_index < len(items):
        raise IndexError(f"Cannot move position {from_index} to {to_index} in {len(items)} items")
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    for position, entity in enumerate(items):
        entity.order = position
    return items
