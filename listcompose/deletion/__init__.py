"""Bulk deletion of checked list records."""

from .schemas import DeletionOutcome, DeletionRequest, DeletionStatus
from .coordinator import BulkDeleteCoordinator

__all__ = [
    "DeletionOutcome",
    "DeletionRequest",
    "DeletionStatus",
    "BulkDeleteCoordinator",
]
