"""List widget - columns, query building and the refresh cycle.

A refresh runs the full render cycle and fires every extension point:

1. Define columns (once), then extend_columns
2. New query -> extend_query_before -> search -> filters -> sort -> extend_query
3. Fetch (nested for trees, paginated when a page size is set)
4. extend_records
5. Headers (override_header_value) and rows (inject_row_class,
   override_column_value)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from listcompose.definitions.schemas import (
    ColumnDefinition,
    ColumnSpec,
    PresentationConfig,
    SortSpec,
)
from listcompose.entities import EntityType, Query, read_field
from listcompose.ordering.schemas import OrderingStrategy
from listcompose.widgets.base import WidgetBase
from listcompose.widgets.extension_points import ListExtensionPoints
from listcompose.widgets.schemas import HeaderCell, ListRow, ListSnapshot

logger = logging.getLogger(__name__)

QueryFilter = Callable[[Query], Any]

SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class ListColumn:
    """A defined list column."""

    name: str
    label: str
    type: str = "text"
    sortable: bool = True
    searchable: bool = False
    invisible: bool = False
    select: Optional[str] = None
    default: Any = None
    css_class: Optional[str] = None

    @classmethod
    def from_definition(cls, name: str, definition: ColumnDefinition) -> "ListColumn":
        return cls(
            name=name,
            label=definition.label or name,
            type=definition.type,
            sortable=definition.sortable,
            searchable=definition.searchable,
            invisible=definition.invisible,
            select=definition.select,
            default=definition.default,
            css_class=definition.css_class,
        )

    @property
    def value_from(self) -> str:
        return self.select or self.name

    def get_value(self, record: Any) -> Any:
        """Read the column value from a record, following dotted paths."""
        value = record
        for key in self.value_from.split("."):
            if value is None:
                break
            value = read_field(value, key)
        return self.default if value is None else value


class ListWidget(WidgetBase):
    """Data list bound to one definition."""

    def __init__(
        self,
        alias: str,
        definition: str,
        entity: EntityType,
        column_spec: ColumnSpec,
        presentation: Optional[PresentationConfig] = None,
        ordering_strategy: OrderingStrategy = OrderingStrategy.NONE,
        hooks: Optional[ListExtensionPoints] = None,
    ):
        super().__init__(alias, definition)
        self.entity = entity
        self.column_spec = column_spec
        self.presentation = presentation or PresentationConfig()
        self.ordering_strategy = ordering_strategy
        self.hooks = hooks or ListExtensionPoints()

        self.columns: Optional[dict[str, ListColumn]] = None
        self.search_term: Optional[str] = None
        self.search_mode = "all"
        self.search_scope: Optional[str] = None
        self.sort: Optional[SortSpec] = self.presentation.default_sort
        self.page = 1
        self.per_page = self.presentation.records_per_page
        self._filters: list[QueryFilter] = []

    # ── Columns ──────────────────────────────────────────

    def define_columns(self) -> dict[str, ListColumn]:
        """Build columns from the column definitions on first call, then fire extend_columns."""
        if self.columns is None:
            self.columns = {
                name: ListColumn.from_definition(name, column)
                for name, column in self.column_spec.columns.items()
            }
            self.hooks.extend_columns(self)
        return self.columns

    def add_columns(self, columns: Mapping[str, Union[ColumnDefinition, Mapping]]) -> None:
        """Add or replace columns, typically from an extend_columns hook."""
        defined = self.define_columns()
        for name, column in columns.items():
            if not isinstance(column, ColumnDefinition):
                column = ColumnDefinition.model_validate(column)
            defined[name] = ListColumn.from_definition(name, column)

    def remove_column(self, name: str) -> None:
        self.define_columns().pop(name, None)

    def get_visible_columns(self) -> list[ListColumn]:
        return [c for c in self.define_columns().values() if not c.invisible]

    def get_searchable_columns(self) -> list[ListColumn]:
        return [c for c in self.define_columns().values() if c.searchable]

    # ── User state ───────────────────────────────────────

    def set_search_term(self, term: Optional[str], reset_page: bool = False) -> None:
        self.search_term = term or None
        if reset_page:
            self.page = 1

    def set_search_options(self, mode: Optional[str] = None, scope: Optional[str] = None) -> None:
        if mode:
            self.search_mode = mode
        self.search_scope = scope

    def set_sort(self, column: str, direction: str = "asc") -> None:
        """Sort by a sortable column; unknown columns and directions are ignored."""
        defined = self.define_columns().get(column)
        direction = (direction or "").lower()
        if defined is None or not defined.sortable or direction not in SORT_DIRECTIONS:
            logger.debug(f"Ignoring sort on '{column}' ({direction!r}) for list {self.alias}")
            return
        self.sort = SortSpec(column=column, direction=direction)

    def set_page(self, page: int) -> None:
        self.page = max(1, page)

    def set_per_page(self, per_page: int) -> None:
        """Change the page size, restricted to the configured options when present."""
        options = self.presentation.per_page_options
        if options and per_page not in options:
            return
        self.per_page = per_page

    def add_filter(self, callback: QueryFilter) -> None:
        """Register a callback applied to every list query."""
        self._filters.append(callback)

    # ── Query and records ────────────────────────────────

    def prepare_query(self) -> Query:
        query = self.entity.new_query()
        self.hooks.extend_query_before(query)

        if self.search_term:
            if self.search_scope:
                query.apply_scope(self.search_scope, self.search_term)
            else:
                columns = [c.value_from for c in self.get_searchable_columns()]
                if columns:
                    query.search(self.search_term, columns, self.search_mode)

        for apply_filter in self._filters:
            apply_filter(query)

        if self.sort is not None:
            column = self.define_columns().get(self.sort.column)
            query.order_by(column.value_from if column else self.sort.column, self.sort.direction)

        self.hooks.extend_query(query)
        return query

    def get_records(self) -> tuple[list[Any], int]:
        """Fetch the current page of records and the total count."""
        query = self.prepare_query()

        if self.presentation.show_tree:
            records = query.get_nested()
            total = len(records)
        elif self.per_page:
            total = query.count()
            records = query.paginate(self.per_page, self.page)
        else:
            records = query.get()
            total = len(records)

        extended = self.hooks.extend_records(records)
        if extended is not None:
            records = list(extended)

        return records, total

    # ── Rendering data ───────────────────────────────────

    def get_headers(self) -> list[HeaderCell]:
        headers = []
        for column in self.get_visible_columns():
            value = self.hooks.override_header_value(column.name)
            headers.append(
                HeaderCell(
                    name=column.name,
                    label=column.label,
                    value=column.label if value is None else value,
                    type=column.type,
                    sortable=column.sortable and self.presentation.show_sorting,
                    sort_direction=self.sort.direction if self.sort and self.sort.column == column.name else None,
                )
            )
        return headers

    def build_row(self, record: Any, columns: list[ListColumn]) -> ListRow:
        cells = {}
        for column in columns:
            value = self.hooks.override_column_value(record, column.name)
            cells[column.name] = column.get_value(record) if value is None else value

        row = ListRow(
            key=self.entity.get_key(record),
            row_class=self.hooks.inject_row_class(record),
            cells=cells,
        )
        if self.ordering_strategy == OrderingStrategy.FLAT_SEQUENCE:
            row.sort_order = self.entity.get_sort_order(record)
        if self.presentation.show_tree:
            row.children = [self.build_row(child, columns) for child in read_field(record, "children") or []]
        return row

    def on_refresh(self) -> ListSnapshot:
        """Re-fetch records and produce a snapshot for rendering."""
        columns = self.get_visible_columns()
        records, total = self.get_records()
        logger.debug(f"Refreshed list {self.alias}: {len(records)} of {total} records")

        return ListSnapshot(
            alias=self.alias,
            definition=self.definition,
            ordering_strategy=self.ordering_strategy,
            reorder=self.presentation.reorder,
            headers=self.get_headers(),
            rows=[self.build_row(record, columns) for record in records],
            total=total,
            page=self.page,
            per_page=None if self.presentation.show_tree else self.per_page,
            search_term=self.search_term,
            sort=self.sort,
            css_classes=list(self.css_classes),
            record_url=self.presentation.record_url,
            record_on_click=self.presentation.record_on_click,
            show_checkboxes=self.presentation.show_checkboxes,
            show_tree=self.presentation.show_tree,
            tree_expanded=self.presentation.tree_expanded,
            no_records_message=self.presentation.no_records_message,
        )

    def on_filter(self) -> ListSnapshot:
        """Refresh after the filter changed, starting from the first page."""
        self.page = 1
        return self.on_refresh()
