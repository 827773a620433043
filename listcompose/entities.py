"""Entity-type abstraction and the persistence contracts it relies on.

Entity types, queries and records belong to the host's persistence layer.
This module only declares what the list behavior needs from them:

- EntityType: builds queries, finds records and declares its ordering
  capabilities through explicit flags
- Query: a mutable query builder, executed by the host
- Record / TreeNode: a fetched record, deletable and (for trees) movable
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional, Protocol, Sequence

from listcompose.errors import UnsupportedOperationError


class Query(Protocol):
    """Query builder supplied by the host persistence layer.

    Filtering methods mutate the query and return it, so calls can be chained.
    """

    def where(self, column: str, value: Any) -> "Query":
        ...

    def where_in(self, column: str, values: Sequence[Any]) -> "Query":
        ...

    def search(self, term: str, columns: Sequence[str], mode: str = "all") -> "Query":
        ...

    def order_by(self, column: str, direction: str = "asc") -> "Query":
        ...

    def apply_scope(self, name: str, *args: Any) -> "Query":
        ...

    def get(self) -> list[Any]:
        ...

    def get_nested(self) -> list[Any]:
        ...

    def count(self) -> int:
        ...

    def paginate(self, per_page: int, page: int = 1) -> list[Any]:
        ...


class Record(Protocol):
    """A fetched record."""

    def delete(self) -> None:
        ...


class TreeNode(Record, Protocol):
    """A record of an entity type with nested-position capability."""

    def move_before(self, target: "TreeNode") -> None:
        ...

    def move_after(self, target: "TreeNode") -> None:
        ...

    def make_child_of(self, target: "TreeNode") -> None:
        ...

    def make_root(self) -> None:
        ...


def read_field(record: Any, name: str) -> Any:
    """Read a field from a record object or a mapping row; missing fields read as None."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


class EntityType(ABC):
    """Base class for entity types served by the host persistence layer.

    Capability flags are explicit: the ordering strategy is derived from
    supports_flat_ordering() / supports_tree_ordering(), never from class
    inspection.
    """

    key_name: str = "id"
    sort_order_column: str = "sort_order"

    @abstractmethod
    def new_query(self) -> Query:
        """Return a fresh, unfiltered query over this entity type."""

    def supports_flat_ordering(self) -> bool:
        return False

    def supports_tree_ordering(self) -> bool:
        return False

    def get_key(self, record: Any) -> Any:
        """Get the primary key value of a record (an object or a mapping)."""
        return read_field(record, self.key_name)

    def get_sort_order(self, record: Any) -> Any:
        """Get the sort order value of a record (an object or a mapping)."""
        return read_field(record, self.sort_order_column)

    def find(self, key: Any) -> Optional[Any]:
        """Find a single record by primary key."""
        records = self.new_query().where_in(self.key_name, [key]).get()
        return records[0] if records else None

    def set_sortable_order(self, ids: Sequence[Any], orders: Sequence[Any]) -> None:
        """Assign caller-supplied sort order values, keyed by record id."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support flat ordering"
        )


class SortableEntityType(EntityType):
    """Entity type whose records carry a sort order column."""

    def supports_flat_ordering(self) -> bool:
        return True

    @abstractmethod
    def set_sortable_order(self, ids: Sequence[Any], orders: Sequence[Any]) -> None:
        ...


class NestedTreeEntityType(EntityType):
    """Entity type whose records are TreeNode instances."""

    def supports_tree_ordering(self) -> bool:
        return True
