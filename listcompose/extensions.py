"""Static extension registry.

Lets code outside the collaborator extend list columns and filter scopes
for every list built by a composer. Callbacks run after the collaborator's
own hook, in registration order.

Usage:
    extensions = ExtensionRegistry()
    extensions.extend_list_columns(lambda widget, entity: widget.remove_column("secret"))
    composer = WidgetComposer(registry, collaborator, extensions=extensions)
"""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

ColumnsCallback = Callable[[Any, Any], None]
ScopesCallback = Callable[[Any], None]


class ExtensionRegistry:
    """Ordered callbacks applied to composed list and filter widgets."""

    def __init__(self) -> None:
        self._column_callbacks: list[ColumnsCallback] = []
        self._scope_callbacks: list[ScopesCallback] = []

    def extend_list_columns(self, callback: ColumnsCallback) -> None:
        """Register a callback receiving (list_widget, entity)."""
        self._column_callbacks.append(callback)
        logger.debug(f"Registered list columns extension #{len(self._column_callbacks)}")

    def extend_list_filter_scopes(self, callback: ScopesCallback) -> None:
        """Register a callback receiving (filter_widget)."""
        self._scope_callbacks.append(callback)
        logger.debug(f"Registered filter scopes extension #{len(self._scope_callbacks)}")

    def apply_list_columns(self, widget: Any) -> None:
        for callback in self._column_callbacks:
            callback(widget, widget.entity)

    def apply_filter_scopes(self, widget: Any) -> None:
        for callback in self._scope_callbacks:
            callback(widget)

    def count(self) -> int:
        return len(self._column_callbacks) + len(self._scope_callbacks)
