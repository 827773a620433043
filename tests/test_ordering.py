"""Tests for ordering strategy selection and the reorder coordinator."""

import logging

import pytest

from conftest import PlainEntity, SortableEntity, SortableTreeEntity, TreeEntity
from listcompose.errors import UnsupportedOperationError
from listcompose.ordering import MoveRequest, OrderingStrategy, ReorderCoordinator, select_strategy
from listcompose.schemas import RefreshSignal


@pytest.fixture
def reorderer(registry, collaborator):
    return ReorderCoordinator(registry, collaborator)


def by_id(store, key):
    return next(r for r in store.records if r.id == key)


# ── Strategy selection ───────────────────────────────────


@pytest.mark.parametrize("entity_class, expected", [
    (PlainEntity, OrderingStrategy.NONE),
    (SortableEntity, OrderingStrategy.FLAT_SEQUENCE),
    (TreeEntity, OrderingStrategy.HIERARCHICAL_TREE),
    (SortableTreeEntity, OrderingStrategy.FLAT_SEQUENCE),
])
def test_select_strategy(store, entity_class, expected):
    entity = entity_class(store)
    assert select_strategy(entity) == expected
    assert select_strategy(entity) == expected
    assert store.queries == []


def test_get_strategy_per_definition(reorderer):
    assert reorderer.get_strategy("list") == OrderingStrategy.FLAT_SEQUENCE
    assert reorderer.get_strategy("categories") == OrderingStrategy.HIERARCHICAL_TREE
    assert reorderer.get_strategy("plain") == OrderingStrategy.NONE
    assert reorderer.get_strategy("ghost") == OrderingStrategy.FLAT_SEQUENCE


# ── Flat sequence ────────────────────────────────────────


def test_flat_reorder_assigns_supplied_orders(reorderer, store):
    signal = reorderer.reorder(MoveRequest(definition="list", ids=[3, 1, 2], orders=[1, 2, 3]))

    assert signal == RefreshSignal(definition="list")
    assert store.sort_calls == [([3, 1, 2], [1, 2, 3])]
    assert [by_id(store, key).sort_order for key in (1, 2, 3)] == [2, 3, 1]


def test_flat_reorder_keeps_orders_as_given(reorderer, store):
    reorderer.reorder(MoveRequest(ids=[1, 2], orders=[10, 5]))
    assert store.sort_calls == [([1, 2], [10, 5])]


@pytest.mark.parametrize("ids, orders", [
    (None, [1, 2]),
    ([1, 2], None),
    ([], []),
])
def test_flat_reorder_without_payload_is_a_noop(reorderer, store, caplog, ids, orders):
    with caplog.at_level(logging.WARNING, logger="listcompose.ordering.coordinator"):
        assert reorderer.reorder(MoveRequest(definition="list", ids=ids, orders=orders)) is None

    assert store.sort_calls == []
    assert [r.levelno for r in caplog.records] == [logging.WARNING]


def test_flat_reorder_length_mismatch_is_rejected_by_entity(reorderer, store):
    with pytest.raises(ValueError):
        reorderer.reorder(MoveRequest(definition="list", ids=[1, 2], orders=[1]))
    assert store.sort_calls == []


# ── Hierarchical tree ────────────────────────────────────


@pytest.mark.parametrize("position, move, parent_id", [
    ("before", "move_before", None),
    ("after", "move_after", None),
    ("child", "make_child_of", 3),
])
def test_tree_moves(reorderer, tree_store, position, move, parent_id):
    signal = reorderer.reorder(
        MoveRequest(definition="categories", source_node=2, target_node=3, position=position)
    )

    assert signal == RefreshSignal(definition="categories")
    assert tree_store.moves == [(move, 2, 3)]
    assert by_id(tree_store, 2).parent_id == parent_id


def test_tree_move_onto_itself_is_a_noop(reorderer, tree_store):
    signal = reorderer.reorder(
        MoveRequest(definition="categories", source_node=1, target_node=1, position="child")
    )
    assert signal is None
    assert tree_store.moves == []


@pytest.mark.parametrize("target_node", [None, "", 99])
def test_tree_move_without_target_promotes_to_root(reorderer, tree_store, target_node):
    signal = reorderer.reorder(
        MoveRequest(definition="categories", source_node=2, target_node=target_node, position="child")
    )

    assert signal is not None
    assert tree_store.moves == [("make_root", 2, None)]
    assert by_id(tree_store, 2).parent_id is None


def test_tree_move_with_unknown_position_promotes_to_root(reorderer, tree_store):
    reorderer.reorder(MoveRequest(definition="categories", source_node=2, target_node=3, position="sideways"))
    assert tree_store.moves == [("make_root", 2, None)]


@pytest.mark.parametrize("source_node", [None, 99])
def test_tree_move_without_source_is_a_noop(reorderer, tree_store, source_node):
    signal = reorderer.reorder(
        MoveRequest(definition="categories", source_node=source_node, target_node=3, position="child")
    )
    assert signal is None
    assert tree_store.moves == []


# ── No ordering ──────────────────────────────────────────


def test_reorder_without_capability_is_unsupported(reorderer, store):
    with pytest.raises(UnsupportedOperationError):
        reorderer.reorder(MoveRequest(definition="plain", ids=[1], orders=[1]))
    assert store.sort_calls == []


def test_reorder_unknown_definition_uses_primary(reorderer, store):
    signal = reorderer.reorder(MoveRequest(definition="ghost", ids=[1], orders=[5]))
    assert signal.definition == "list"
    assert by_id(store, 1).sort_order == 5


def test_definition_argument_overrides_request(reorderer, tree_store):
    signal = reorderer.reorder(
        MoveRequest(definition="list", source_node=2, target_node=None), definition="categories"
    )
    assert signal.definition == "categories"
    assert tree_store.moves == [("make_root", 2, None)]


def test_reorder_uses_plain_entity(reorderer, collaborator):
    reorderer.reorder(MoveRequest(ids=[1], orders=[1]))
    assert "list_extend_model" not in collaborator.names()


# ── Reorder records ──────────────────────────────────────


def test_get_records_flat_ordered_by_sort_column(reorderer, store, collaborator):
    by_id(store, 3).sort_order = 0
    records = reorderer.get_records("list")

    assert [r.id for r in records] == [3, 1, 2]
    assert ("order_by", "sort_order", "asc") in store.queries[-1].calls
    assert collaborator.names() == ["reorder_extend_query"]


def test_get_records_tree_returns_roots(reorderer):
    records = reorderer.get_records("categories")
    assert [r.id for r in records] == [1, 3]
    assert [c.id for c in records[0].children] == [2]


def test_get_records_without_capability(reorderer):
    with pytest.raises(UnsupportedOperationError):
        reorderer.get_records("plain")


def test_get_record_sort_order(store):
    entity = SortableEntity(store)
    assert ReorderCoordinator.get_record_sort_order(by_id(store, 2), entity) == 2


def test_get_record_sort_order_from_mapping_row(store):
    entity = SortableEntity(store)

    assert ReorderCoordinator.get_record_sort_order({"id": 4, "sort_order": 7}, entity) == 7
    assert entity.get_key({"id": 4, "sort_order": 7}) == 4
