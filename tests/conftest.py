"""pytest configuration and fixtures for listcompose tests.

Entity types here are backed by a plain in-memory store; queries record the
calls made on them so tests can assert on the built query.
"""

import pytest

from listcompose.collaborator import ListCollaborator
from listcompose.controller import ListController
from listcompose.definitions.registry import DefinitionRegistry
from listcompose.entities import EntityType, NestedTreeEntityType, SortableEntityType


class Store:
    """Records of one entity type plus a log of what was done to them."""

    def __init__(self, records=None):
        self.records = []
        self.queries = []
        self.sort_calls = []
        self.moves = []
        self.scopes = {}
        for record in records or []:
            self.add(record)

    def add(self, record):
        record._store = self
        self.records.append(record)
        return record


class Record:
    def __init__(self, **fields):
        self._store = None
        self.__dict__.update(fields)

    def delete(self):
        self._store.records.remove(self)

    def __repr__(self):
        return f"<Record id={getattr(self, 'id', None)!r}>"


class Node(Record):
    """Tree record; parent_id is None for roots."""

    @property
    def children(self):
        return [r for r in self._store.records if r.parent_id == self.id]

    def move_before(self, target):
        self._store.moves.append(("move_before", self.id, target.id))
        self.parent_id = target.parent_id

    def move_after(self, target):
        self._store.moves.append(("move_after", self.id, target.id))
        self.parent_id = target.parent_id

    def make_child_of(self, target):
        self._store.moves.append(("make_child_of", self.id, target.id))
        self.parent_id = target.id

    def make_root(self):
        self._store.moves.append(("make_root", self.id, None))
        self.parent_id = None


class InMemoryQuery:
    def __init__(self, store):
        self.store = store
        self.calls = []
        self._filters = []
        self._order = None
        store.queries.append(self)

    def where(self, column, value):
        self.calls.append(("where", column, value))
        self._filters.append(lambda r: getattr(r, column, None) == value)
        return self

    def where_in(self, column, values):
        values = list(values)
        self.calls.append(("where_in", column, values))
        self._filters.append(lambda r: getattr(r, column, None) in values)
        return self

    def search(self, term, columns, mode="all"):
        self.calls.append(("search", term, tuple(columns), mode))
        words = term.lower().split()

        def matches(record):
            text = " ".join(str(getattr(record, c, "") or "") for c in columns).lower()
            if mode == "any":
                return any(w in text for w in words)
            return all(w in text for w in words)

        self._filters.append(matches)
        return self

    def order_by(self, column, direction="asc"):
        self.calls.append(("order_by", column, direction))
        self._order = (column, direction)
        return self

    def apply_scope(self, name, *args):
        self.calls.append(("apply_scope", name, args))
        scope = self.store.scopes[name]
        self._filters.append(lambda r: scope(r, *args))
        return self

    def _matching(self):
        records = [r for r in self.store.records if all(f(r) for f in self._filters)]
        if self._order is not None:
            column, direction = self._order
            records.sort(key=lambda r: getattr(r, column), reverse=direction == "desc")
        return records

    def get(self):
        return self._matching()

    def get_nested(self):
        return [r for r in self._matching() if r.parent_id is None]

    def count(self):
        return len(self._matching())

    def paginate(self, per_page, page=1):
        start = (page - 1) * per_page
        return self._matching()[start:start + per_page]


class PlainEntity(EntityType):
    def __init__(self, store):
        self.store = store

    def new_query(self):
        return InMemoryQuery(self.store)


class SortableEntity(SortableEntityType):
    def __init__(self, store):
        self.store = store

    def new_query(self):
        return InMemoryQuery(self.store)

    def set_sortable_order(self, ids, orders):
        if len(ids) != len(orders):
            raise ValueError("Invalid setSortableOrder call - count of ids and orders must match")
        self.store.sort_calls.append((list(ids), list(orders)))
        for key, order in zip(ids, orders):
            record = self.find(key)
            if record is not None:
                record.sort_order = order


class TreeEntity(NestedTreeEntityType):
    def __init__(self, store):
        self.store = store

    def new_query(self):
        return InMemoryQuery(self.store)


class SortableTreeEntity(SortableEntity):
    def supports_tree_ordering(self):
        return True


class RecordingCollaborator(ListCollaborator):
    """Collaborator that logs every hook it receives."""

    def __init__(self, entity_types=None):
        super().__init__(entity_types)
        self.calls = []

    def names(self):
        return [name for name, _ in self.calls]

    def list_extend_model(self, entity, definition=None):
        self.calls.append(("list_extend_model", definition))
        return entity

    def list_extend_columns(self, widget):
        self.calls.append(("list_extend_columns", widget.alias))

    def list_extend_query_before(self, query, definition=None):
        self.calls.append(("list_extend_query_before", definition))

    def list_extend_query(self, query, definition=None):
        self.calls.append(("list_extend_query", definition))

    def list_extend_records(self, records, definition=None):
        self.calls.append(("list_extend_records", definition))
        return None

    def list_inject_row_class(self, record, definition=None):
        self.calls.append(("list_inject_row_class", record.id))
        return None

    def list_override_column_value(self, record, column_name, definition=None):
        self.calls.append(("list_override_column_value", (record.id, column_name)))
        return None

    def list_override_header_value(self, column_name, definition=None):
        self.calls.append(("list_override_header_value", column_name))
        return None

    def list_filter_extend_scopes(self, widget):
        self.calls.append(("list_filter_extend_scopes", widget.alias))

    def list_filter_extend_query(self, query, scope):
        self.calls.append(("list_filter_extend_query", scope.name))

    def reorder_extend_query(self, query):
        self.calls.append(("reorder_extend_query", None))


@pytest.fixture
def store():
    return Store([
        Record(id=1, title="Alpha post", status="published", featured=True, sort_order=1),
        Record(id=2, title="Beta post", status="published", featured=False, sort_order=2),
        Record(id=3, title="Gamma draft", status="draft", featured=False, sort_order=3),
    ])


@pytest.fixture
def tree_store():
    return Store([
        Node(id=1, title="Root A", parent_id=None),
        Node(id=2, title="Child of A", parent_id=1),
        Node(id=3, title="Root B", parent_id=None),
    ])


@pytest.fixture
def collaborator(store, tree_store):
    return RecordingCollaborator(entity_types={
        "Article": lambda: SortableEntity(store),
        "Plain": lambda: PlainEntity(store),
        "Category": lambda: TreeEntity(tree_store),
        "Both": lambda: SortableTreeEntity(store),
    })


@pytest.fixture
def definitions():
    return {
        "list": {
            "modelClass": "Article",
            "list": {
                "columns": {
                    "title": {"label": "Title", "searchable": True},
                    "status": {"label": "Status"},
                },
            },
            "recordUrl": "blog/posts/update/:id",
            "showCheckboxes": True,
            "bogusField": "dropped",
            "toolbar": {
                "buttons": "list_toolbar",
                "search": {"prompt": "backend::lang.list.search_prompt"},
            },
            "filter": {
                "scopes": {
                    "status": {"label": "Status"},
                    "featured": {"label": "Featured", "type": "checkbox"},
                },
            },
        },
        "categories": {
            "modelClass": "Category",
            "list": {"title": {"label": "Title"}},
            "showTree": True,
        },
        "plain": {
            "modelClass": "Plain",
            "list": {"columns": {"title": {"label": "Title", "searchable": True}}},
            "title": "acme.blog::lang.plain.title",
        },
    }


@pytest.fixture
def registry(definitions):
    return DefinitionRegistry(definitions)


@pytest.fixture
def make_controller(definitions, collaborator):
    """Build a fresh controller, as a host would per request."""
    def factory(state=None, **kwargs):
        return ListController(definitions, collaborator=collaborator, state=state, **kwargs)
    return factory
