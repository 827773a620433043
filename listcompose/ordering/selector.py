"""Ordering strategy selection from entity capability flags."""

from listcompose.entities import EntityType
from listcompose.ordering.schemas import OrderingStrategy


def select_strategy(entity: EntityType) -> OrderingStrategy:
    """Pick the ordering strategy for an entity type.

    Flat ordering wins when an entity type declares both capabilities.
    """
    if entity.supports_flat_ordering():
        return OrderingStrategy.FLAT_SEQUENCE
    if entity.supports_tree_ordering():
        return OrderingStrategy.HIERARCHICAL_TREE
    return OrderingStrategy.NONE
