"""Pydantic schemas for resolved list definitions.

Raw definitions use the host's camelCase keys (modelClass, recordUrl, ...).
Resolved models expose snake_case attributes, accept either spelling, and
are frozen: a ResolvedConfig never changes once built.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ConfigModel(BaseModel):
    """Base for all resolved configuration models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


# ── Columns ──────────────────────────────────────────────


class ColumnDefinition(ConfigModel):
    """A single list column as declared in the column specification."""

    label: str = ""
    type: str = Field(
        default="text",
        description="Display type hint for the host renderer (text, number, date, switch, ...)",
    )
    sortable: bool = True
    searchable: bool = False
    invisible: bool = False
    select: Optional[str] = Field(
        default=None,
        description="Dotted attribute path to read the value from (defaults to the column name)",
    )
    default: Any = None
    css_class: Optional[str] = None


class ColumnSpec(ConfigModel):
    """The column specification of a list (the `list` section)."""

    columns: dict[str, ColumnDefinition] = Field(default_factory=dict)


# ── Presentation (allowlisted) ───────────────────────────


class SortSpec(ConfigModel):
    """Default sort: a column and a direction."""

    column: str
    direction: str = "asc"

    @field_validator("direction")
    @classmethod
    def _normalize_direction(cls, value: str) -> str:
        value = value.lower()
        if value not in ("asc", "desc"):
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got '{value}'")
        return value


class PresentationConfig(ConfigModel):
    """Presentation fields transferred from the raw definition to the list widget.

    Only the fields declared here can ever be transferred; anything else in
    the raw definition is dropped.
    """

    record_url: Optional[str] = Field(
        default=None,
        description="Link target for each record, e.g. 'acme/blog/posts/update/:id'",
    )
    record_on_click: Optional[str] = Field(
        default=None,
        description="Client-side click behavior for each record",
    )
    records_per_page: Optional[int] = Field(default=None, ge=1)
    per_page_options: Optional[list[int]] = None
    show_page_numbers: bool = True
    no_records_message: str = "backend::lang.list.no_records"
    default_sort: Optional[SortSpec] = None
    reorder: bool = False
    show_sorting: bool = True
    show_setup: bool = False
    show_checkboxes: bool = False
    show_tree: bool = False
    tree_expanded: bool = False
    custom_view_path: Optional[str] = None

    @field_validator("default_sort", mode="before")
    @classmethod
    def _coerce_sort(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"column": value}
        return value


# ── Toolbar / search ─────────────────────────────────────


class SearchConfig(ConfigModel):
    """Search box embedded in a list toolbar."""

    prompt: str = "backend::lang.list.search_prompt"
    mode: str = Field(
        default="all",
        description="How multiple words match: 'all', 'any' or 'exact'",
    )
    scope: Optional[str] = Field(
        default=None,
        description="Named query scope the host applies instead of column search",
    )


class ToolbarConfig(ConfigModel):
    """Toolbar above a list."""

    buttons: Optional[str] = Field(
        default=None,
        description="Path of the host partial holding the toolbar buttons",
    )
    search: Optional[SearchConfig] = None


# ── Filter ───────────────────────────────────────────────


class ScopeConfig(ConfigModel):
    """A single filter scope."""

    label: str = ""
    type: str = Field(
        default="group",
        description="Scope type: group, checkbox, switch, text, date",
    )
    column: Optional[str] = Field(
        default=None,
        description="Column the scope value is matched against (defaults to the scope name)",
    )
    scope: Optional[str] = Field(
        default=None,
        description="Named query scope applied with the scope value instead of a column match",
    )
    default: Any = None
    options: Optional[dict[str, str]] = None

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Any) -> Any:
        # YAML reads unquoted option keys and labels as ints and bools
        if isinstance(value, dict):
            return {str(key): str(label) for key, label in value.items()}
        return value


class FilterConfig(ConfigModel):
    """Filter above a list."""

    scopes: dict[str, ScopeConfig] = Field(default_factory=dict)


# ── Resolved definition ──────────────────────────────────


class ResolvedConfig(ConfigModel):
    """Validated configuration of one list definition."""

    definition: str
    model_class: str
    column_spec: ColumnSpec = Field(alias="list")
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)
    toolbar: Optional[ToolbarConfig] = None
    filter: Optional[FilterConfig] = None

    title: Optional[str] = None
    delete_message: Optional[str] = None
    no_records_deleted_message: Optional[str] = None
