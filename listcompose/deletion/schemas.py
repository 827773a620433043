"""Pydantic schemas for bulk deletion."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from listcompose.schemas import RefreshSignal


class DeletionStatus(str, Enum):
    """How a bulk delete ended."""
    EMPTY_SELECTION = "empty_selection"
    NOTHING_DELETED = "nothing_deleted"
    DELETED = "deleted"


class DeletionRequest(BaseModel):
    """Records checked in a list, to be deleted."""

    definition: Optional[str] = None
    checked_ids: Optional[list[Any]] = Field(
        default=None,
        description="Primary keys of the checked records",
    )


class DeletionOutcome(BaseModel):
    """Result of a bulk delete, reported to the user as a flash message."""

    status: DeletionStatus
    deleted_count: int = 0
    level: str = Field(
        default="success",
        description="Flash level: 'success' or 'error'",
    )
    message: str = Field(
        ...,
        description="Message key for the host to translate",
    )
    refresh: RefreshSignal
