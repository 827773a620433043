"""Filter widget - scopes, their values, and applying them to a query."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from listcompose.definitions.schemas import FilterConfig, ScopeConfig
from listcompose.entities import Query
from listcompose.widgets.base import WidgetBase
from listcompose.widgets.extension_points import FilterExtensionPoints

logger = logging.getLogger(__name__)

COLLECTION_TYPES = (list, tuple, set, frozenset, Mapping)


@dataclass
class FilterScope:
    """A defined filter scope and its current value."""

    name: str
    label: str
    type: str = "group"
    column: Optional[str] = None
    scope: Optional[str] = None
    options: Optional[dict[str, str]] = None
    value: Any = None

    @classmethod
    def from_config(cls, name: str, config: ScopeConfig) -> "FilterScope":
        return cls(
            name=name,
            label=config.label or name,
            type=config.type,
            column=config.column,
            scope=config.scope,
            options=config.options,
            value=config.default,
        )

    @property
    def is_active(self) -> bool:
        if self.type in ("checkbox", "switch"):
            return bool(self.value)
        if isinstance(self.value, COLLECTION_TYPES):
            return len(self.value) > 0
        return self.value not in (None, "")


class FilterWidget(WidgetBase):
    """Scope filter above a list."""

    def __init__(self, alias: str, definition: str, config: Optional[FilterConfig] = None):
        super().__init__(alias, definition)
        self.config = config or FilterConfig()
        self.hooks = FilterExtensionPoints()
        self.scopes: Optional[dict[str, FilterScope]] = None

    def define_scopes(self) -> dict[str, FilterScope]:
        """Build scopes from config on first call, then fire extend_scopes."""
        if self.scopes is None:
            self.scopes = {
                name: FilterScope.from_config(name, scope)
                for name, scope in self.config.scopes.items()
            }
            self.hooks.extend_scopes(self)
        return self.scopes

    def add_scopes(self, scopes: Mapping[str, Union[ScopeConfig, Mapping]]) -> None:
        defined = self.define_scopes()
        for name, scope in scopes.items():
            if not isinstance(scope, ScopeConfig):
                scope = ScopeConfig.model_validate(scope)
            defined[name] = FilterScope.from_config(name, scope)

    def remove_scope(self, name: str) -> None:
        self.define_scopes().pop(name, None)

    def set_scope_value(self, name: str, value: Any) -> None:
        scope = self.define_scopes().get(name)
        if scope is None:
            logger.debug(f"Ignoring value for unknown scope '{name}' on {self.alias}")
            return
        scope.value = value

    def get_scope_values(self) -> dict[str, Any]:
        return {name: scope.value for name, scope in self.define_scopes().items()}

    def update(self, values: Optional[Mapping[str, Any]] = None) -> Any:
        """Apply new scope values and fire the update slot."""
        for name, value in (values or {}).items():
            self.set_scope_value(name, value)
        return self.hooks.update()

    def apply_scope_to_query(self, query: Query, scope: FilterScope) -> Query:
        column = scope.column or scope.name

        if scope.scope:
            query.apply_scope(scope.scope, scope.value)
        elif scope.type in ("checkbox", "switch"):
            query.where(column, True)
        elif isinstance(scope.value, (list, tuple, set, frozenset)):
            query.where_in(column, list(scope.value))
        else:
            query.where(column, scope.value)

        self.hooks.extend_query(query, scope)
        return query

    def apply_all_scopes_to_query(self, query: Query) -> Query:
        """Apply every active scope to a query."""
        for scope in self.define_scopes().values():
            if scope.is_active:
                self.apply_scope_to_query(query, scope)
        return query
