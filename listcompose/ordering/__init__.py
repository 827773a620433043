"""Record ordering: strategy selection and reorder coordination."""

from .schemas import MovePosition, MoveRequest, OrderingStrategy
from .selector import select_strategy
from .coordinator import ReorderCoordinator

__all__ = [
    "MovePosition",
    "MoveRequest",
    "OrderingStrategy",
    "select_strategy",
    "ReorderCoordinator",
]
