"""Pydantic schemas for record ordering."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class OrderingStrategy(str, Enum):
    """How records of an entity type can be reordered."""
    NONE = "none"
    FLAT_SEQUENCE = "flat_sequence"
    HIERARCHICAL_TREE = "hierarchical_tree"


class MovePosition(str, Enum):
    """Where a tree node is moved relative to its target."""
    BEFORE = "before"
    AFTER = "after"
    CHILD = "child"
    ROOT = "root"


class MoveRequest(BaseModel):
    """A reorder request coming from a drag operation.

    Flat-sequence lists send ids + orders; tree lists send
    source_node / target_node / position.
    """

    definition: Optional[str] = None

    # Flat sequence
    ids: Optional[list[Any]] = Field(
        default=None,
        description="Record ids, parallel to orders",
    )
    orders: Optional[list[Any]] = Field(
        default=None,
        description="Sort order values assigned to ids, as supplied by the client",
    )

    # Hierarchical tree
    source_node: Optional[Any] = None
    target_node: Optional[Any] = None
    position: Optional[str] = Field(
        default=None,
        description="'before', 'after' or 'child'; anything else moves the source to the root",
    )
