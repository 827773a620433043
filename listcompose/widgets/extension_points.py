"""Extension point tables for widgets.

Each widget owns one table of named callback slots. Slots default to no-op
and are filled in by the composer when it wires a widget to the
collaborator; widgets only ever call their own slots.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from listcompose.entities import Query


def _noop(*args: Any) -> None:
    return None


@dataclass
class ListExtensionPoints:
    """Slots fired by a list widget during its render cycle."""

    extend_columns: Callable[[Any], None] = _noop
    extend_query_before: Callable[[Query], None] = _noop
    extend_query: Callable[[Query], None] = _noop
    extend_records: Callable[[list[Any]], Optional[list[Any]]] = _noop
    inject_row_class: Callable[[Any], Optional[str]] = _noop
    override_column_value: Callable[[Any, str], Any] = _noop
    override_header_value: Callable[[str], Any] = _noop


@dataclass
class SearchExtensionPoints:
    """Slots fired by a search widget."""

    submit: Callable[[], Any] = _noop


@dataclass
class FilterExtensionPoints:
    """Slots fired by a filter widget."""

    update: Callable[[], Any] = _noop
    extend_scopes: Callable[[Any], None] = _noop
    extend_query: Callable[[Query, Any], None] = _noop
