"""Schemas shared by the reorder and delete coordinators."""

from pydantic import BaseModel


class RefreshSignal(BaseModel):
    """Tells the caller that a list must be re-fetched and re-rendered."""

    definition: str
