"""Widget composer - builds and wires the widgets of one list definition.

For a definition the composer:
- resolves its config and obtains the (extended) entity type
- builds the list widget and fills its extension points from the collaborator
- builds the toolbar when configured, linking its search box to the list
- builds the filter when it declares scopes, linking it to the list

Nothing is rendered here; callers refresh the list widget when they need data.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from listcompose.collaborator import ListCollaborator
from listcompose.definitions.registry import DefinitionRegistry
from listcompose.definitions.schemas import ResolvedConfig
from listcompose.entities import EntityType, Query
from listcompose.extensions import ExtensionRegistry
from listcompose.ordering.selector import select_strategy
from listcompose.widgets.extension_points import ListExtensionPoints
from listcompose.widgets.filter import FilterWidget
from listcompose.widgets.lists import ListWidget
from listcompose.widgets.schemas import ListState
from listcompose.widgets.toolbar import ToolbarWidget

logger = logging.getLogger(__name__)


@dataclass
class CompositionResult:
    """Widgets composed for one definition."""

    definition: str
    list: ListWidget
    toolbar: Optional[ToolbarWidget] = None
    filter: Optional[FilterWidget] = None


class WidgetComposer:
    """Composes list, toolbar and filter widgets for list definitions.

    Usage:
        composer = WidgetComposer(registry, collaborator)
        result = composer.compose("list")
        snapshot = result.list.on_refresh()
    """

    def __init__(
        self,
        registry: DefinitionRegistry,
        collaborator: Optional[ListCollaborator] = None,
        extensions: Optional[ExtensionRegistry] = None,
    ):
        self.registry = registry
        self.collaborator = collaborator or ListCollaborator()
        self.extensions = extensions or ExtensionRegistry()

    def compose(self, definition: Optional[str] = None, state: Optional[ListState] = None) -> CompositionResult:
        """Compose the widgets of a definition (falls back to the primary).

        Args:
            definition: Definition id
            state: Request state (search term, sort, page, filter values)

        Returns:
            CompositionResult with the list and the optional toolbar / filter

        Raises:
            ConfigurationError: If the definition config or its entity type is invalid
        """
        definition = self.registry.normalize(definition)
        config = self.registry.resolve(definition)
        state = state or ListState()

        entity = self.collaborator.make_extended_entity(config.model_class, definition)
        widget = self.make_list_widget(config, entity)
        self._apply_state(widget, state)

        toolbar = self.make_toolbar_widget(widget, config, state) if config.toolbar is not None else None
        filter_widget = self.make_filter_widget(widget, config, state) if config.filter is not None else None

        logger.info(
            f"Composed list '{definition}' "
            f"(ordering={widget.ordering_strategy.value}, "
            f"toolbar={toolbar is not None}, filter={filter_widget is not None})"
        )
        return CompositionResult(
            definition=definition,
            list=widget,
            toolbar=toolbar,
            filter=filter_widget,
        )

    # ── List ─────────────────────────────────────────────

    def make_list_widget(self, config: ResolvedConfig, entity: EntityType) -> ListWidget:
        definition = config.definition
        widget = ListWidget(
            alias=definition,
            definition=definition,
            entity=entity,
            column_spec=config.column_spec,
            presentation=config.presentation,
            ordering_strategy=select_strategy(entity),
        )
        widget.hooks = self._list_extension_points(definition)
        return widget

    def _list_extension_points(self, definition: str) -> ListExtensionPoints:
        collaborator = self.collaborator

        def extend_columns(widget: ListWidget) -> None:
            collaborator.list_extend_columns(widget)
            self.extensions.apply_list_columns(widget)

        def extend_query_before(query: Query) -> None:
            collaborator.list_extend_query_before(query, definition)

        def extend_query(query: Query) -> None:
            collaborator.list_extend_query(query, definition)

        def extend_records(records: list[Any]) -> Optional[list[Any]]:
            return collaborator.list_extend_records(records, definition)

        def inject_row_class(record: Any) -> Optional[str]:
            return collaborator.list_inject_row_class(record, definition)

        def override_column_value(record: Any, column_name: str) -> Any:
            return collaborator.list_override_column_value(record, column_name, definition)

        def override_header_value(column_name: str) -> Any:
            return collaborator.list_override_header_value(column_name, definition)

        return ListExtensionPoints(
            extend_columns=extend_columns,
            extend_query_before=extend_query_before,
            extend_query=extend_query,
            extend_records=extend_records,
            inject_row_class=inject_row_class,
            override_column_value=override_column_value,
            override_header_value=override_header_value,
        )

    @staticmethod
    def _apply_state(widget: ListWidget, state: ListState) -> None:
        if state.sort_column:
            widget.set_sort(state.sort_column, state.sort_direction)
        if state.per_page:
            widget.set_per_page(state.per_page)
        widget.set_page(state.page)

    # ── Toolbar ──────────────────────────────────────────

    def make_toolbar_widget(self, widget: ListWidget, config: ResolvedConfig, state: ListState) -> ToolbarWidget:
        toolbar = ToolbarWidget(f"{widget.alias}Toolbar", config.definition, config.toolbar)
        toolbar.css_classes.append("list-header")

        search = toolbar.get_search_widget()
        if search is not None:
            if state.search_term is not None:
                search.set_active_term(state.search_term)

            def submit():
                widget.set_search_term(search.get_active_term(), reset_page=True)
                return widget.on_refresh()

            search.hooks.submit = submit
            widget.set_search_options(mode=search.mode, scope=search.scope)
            widget.set_search_term(search.get_active_term())
            logger.debug(f"Linked search {search.alias} to list {widget.alias}")

        return toolbar

    # ── Filter ───────────────────────────────────────────

    def make_filter_widget(
        self, widget: ListWidget, config: ResolvedConfig, state: ListState
    ) -> Optional[FilterWidget]:
        """Build the filter widget, or None when the filter declares no scopes."""
        if not config.filter.scopes:
            return None

        widget.css_classes.append("list-flush")
        filter_widget = FilterWidget(f"{widget.alias}Filter", config.definition, config.filter)
        collaborator = self.collaborator

        def extend_scopes(host: FilterWidget) -> None:
            collaborator.list_filter_extend_scopes(host)
            self.extensions.apply_filter_scopes(host)

        def extend_query(query: Query, scope: Any) -> None:
            collaborator.list_filter_extend_query(query, scope)

        filter_widget.hooks.update = widget.on_filter
        filter_widget.hooks.extend_scopes = extend_scopes
        filter_widget.hooks.extend_query = extend_query

        for name, value in state.scope_values.items():
            filter_widget.set_scope_value(name, value)

        # Filter state applies to every list query, not only on update
        widget.add_filter(filter_widget.apply_all_scopes_to_query)
        logger.debug(f"Linked filter {filter_widget.alias} to list {widget.alias}")

        return filter_widget
