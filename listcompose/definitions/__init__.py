"""List definitions: registry, resolver and resolved config schemas."""

from .schemas import (
    ColumnDefinition,
    ColumnSpec,
    FilterConfig,
    PresentationConfig,
    ResolvedConfig,
    ScopeConfig,
    SearchConfig,
    SortSpec,
    ToolbarConfig,
)
from .resolver import ConfigResolver, LIST_FIELDS_TO_TRANSFER, REQUIRED_CONFIG
from .registry import DefinitionRegistry

__all__ = [
    "ColumnDefinition",
    "ColumnSpec",
    "FilterConfig",
    "PresentationConfig",
    "ResolvedConfig",
    "ScopeConfig",
    "SearchConfig",
    "SortSpec",
    "ToolbarConfig",
    "ConfigResolver",
    "LIST_FIELDS_TO_TRANSFER",
    "REQUIRED_CONFIG",
    "DefinitionRegistry",
]
