"""Reorder coordinator - applies drag-and-drop moves to an entity type.

The strategy comes from the entity's capability flags:
- flat_sequence: bulk reassignment of caller-supplied sort orders
- hierarchical_tree: move one node before / after / into another, or to root
- none: reordering is rejected

Moves are delegated to the entity type or its records; concurrent reorders
of the same records are not locked here, the last write wins.
"""

import logging
from typing import Any, Optional

from listcompose.collaborator import ListCollaborator
from listcompose.definitions.registry import DefinitionRegistry
from listcompose.entities import EntityType
from listcompose.errors import UnsupportedOperationError
from listcompose.ordering.schemas import MovePosition, MoveRequest, OrderingStrategy
from listcompose.ordering.selector import select_strategy
from listcompose.schemas import RefreshSignal

logger = logging.getLogger(__name__)


class ReorderCoordinator:
    """Executes move requests against one definition's entity type."""

    def __init__(self, registry: DefinitionRegistry, collaborator: Optional[ListCollaborator] = None):
        self.registry = registry
        self.collaborator = collaborator or ListCollaborator()

    def get_entity(self, definition: Optional[str] = None) -> EntityType:
        """Get a fresh entity type instance for a definition."""
        definition = self.registry.normalize(definition)
        config = self.registry.resolve(definition)
        return self.collaborator.make_entity(config.model_class, definition)

    def get_strategy(self, definition: Optional[str] = None) -> OrderingStrategy:
        return select_strategy(self.get_entity(definition))

    def reorder(self, request: MoveRequest, definition: Optional[str] = None) -> Optional[RefreshSignal]:
        """Apply a move request.

        Args:
            request: The move request
            definition: Definition id (default: request.definition, then primary)

        Returns:
            RefreshSignal for the definition when records were moved, None for
            tolerated no-ops (partial payloads, moving a node onto itself)

        Raises:
            UnsupportedOperationError: If the entity type supports no ordering
        """
        definition = self.registry.normalize(definition or request.definition)
        entity = self.get_entity(definition)
        strategy = select_strategy(entity)

        if strategy == OrderingStrategy.FLAT_SEQUENCE:
            moved = self._reorder_flat(entity, request)
        elif strategy == OrderingStrategy.HIERARCHICAL_TREE:
            moved = self._reorder_tree(entity, request)
        else:
            raise UnsupportedOperationError(
                f"List '{definition}' ({type(entity).__name__}) does not support reordering"
            )

        if not moved:
            return None

        logger.info(f"Reordered records of list '{definition}' ({strategy.value})")
        return RefreshSignal(definition=definition)

    def _reorder_flat(self, entity: EntityType, request: MoveRequest) -> bool:
        if not request.ids or not request.orders:
            logger.warning("Ignoring flat reorder without ids or orders")
            return False

        entity.set_sortable_order(request.ids, request.orders)
        return True

    def _reorder_tree(self, entity: EntityType, request: MoveRequest) -> bool:
        source = entity.find(request.source_node) if request.source_node not in (None, "") else None
        if source is None:
            logger.warning(f"Ignoring tree reorder: source node {request.source_node!r} not found")
            return False

        target = entity.find(request.target_node) if request.target_node not in (None, "") else None
        if target is not None and entity.get_key(source) == entity.get_key(target):
            return False

        position = request.position
        if target is None:
            source.make_root()
        elif position == MovePosition.BEFORE.value:
            source.move_before(target)
        elif position == MovePosition.AFTER.value:
            source.move_after(target)
        elif position == MovePosition.CHILD.value:
            source.make_child_of(target)
        else:
            source.make_root()
        return True

    # ── Reorder view support ─────────────────────────────

    def get_records(self, definition: Optional[str] = None) -> list[Any]:
        """Get all records of a definition in their current order.

        Raises:
            UnsupportedOperationError: If the entity type supports no ordering
        """
        definition = self.registry.normalize(definition)
        entity = self.get_entity(definition)
        strategy = select_strategy(entity)

        query = entity.new_query()
        self.collaborator.reorder_extend_query(query)

        if strategy == OrderingStrategy.FLAT_SEQUENCE:
            return query.order_by(entity.sort_order_column).get()
        if strategy == OrderingStrategy.HIERARCHICAL_TREE:
            return query.get_nested()

        raise UnsupportedOperationError(f"List '{definition}' does not support reordering")

    @staticmethod
    def get_record_sort_order(record: Any, entity: EntityType) -> Any:
        """Get the sort order value of a record."""
        return entity.get_sort_order(record)
