"""Pydantic schemas exchanged by widgets and their callers.

ListState carries the request-scoped user state (search, sort, page, filter
values) into a composition pass. ListSnapshot is what a list refresh produces:
everything the host renderer needs, with all hooks already applied.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from listcompose.definitions.schemas import SortSpec
from listcompose.ordering.schemas import OrderingStrategy


class ListState(BaseModel):
    """User state of a list for the current request."""

    search_term: Optional[str] = None
    page: int = Field(default=1, ge=1)
    per_page: Optional[int] = Field(default=None, ge=1)
    sort_column: Optional[str] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    scope_values: dict[str, Any] = Field(default_factory=dict)


class HeaderCell(BaseModel):
    """A rendered column header."""

    name: str
    label: str
    value: Any = None
    type: str = "text"
    sortable: bool = False
    sort_direction: Optional[str] = None


class ListRow(BaseModel):
    """A rendered list row."""

    key: Any = None
    row_class: Optional[str] = None
    cells: dict[str, Any] = Field(default_factory=dict)
    sort_order: Any = None
    children: list["ListRow"] = Field(default_factory=list)


class ListSnapshot(BaseModel):
    """A refreshed list, ready for rendering."""

    alias: str
    definition: str
    ordering_strategy: OrderingStrategy = OrderingStrategy.NONE
    reorder: bool = False
    headers: list[HeaderCell] = Field(default_factory=list)
    rows: list[ListRow] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: Optional[int] = None
    search_term: Optional[str] = None
    sort: Optional[SortSpec] = None
    css_classes: list[str] = Field(default_factory=list)
    record_url: Optional[str] = None
    record_on_click: Optional[str] = None
    show_checkboxes: bool = False
    show_tree: bool = False
    tree_expanded: bool = False
    no_records_message: str = ""
