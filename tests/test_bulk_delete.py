"""Tests for the bulk-delete coordinator."""

import pytest

from conftest import RecordingCollaborator, SortableEntity
from listcompose import settings
from listcompose.definitions import DefinitionRegistry
from listcompose.deletion import BulkDeleteCoordinator, DeletionRequest, DeletionStatus
from listcompose.errors import MissingDefinitionError


@pytest.fixture
def deleter(registry, collaborator):
    return BulkDeleteCoordinator(registry, collaborator)


def remaining_ids(store):
    return [r.id for r in store.records]


@pytest.mark.parametrize("checked_ids", [None, []])
def test_empty_selection(deleter, store, checked_ids):
    outcome = deleter.bulk_delete(DeletionRequest(checked_ids=checked_ids))

    assert outcome.status == DeletionStatus.EMPTY_SELECTION
    assert outcome.deleted_count == 0
    assert outcome.level == "error"
    assert outcome.message == settings.DELETE_SELECTED_EMPTY_MESSAGE
    assert outcome.refresh.definition == "list"
    assert remaining_ids(store) == [1, 2, 3]
    assert store.queries == []


def test_selection_matching_nothing(deleter, store):
    outcome = deleter.bulk_delete(DeletionRequest(definition="list", checked_ids=[98, 99]))

    assert outcome.status == DeletionStatus.NOTHING_DELETED
    assert outcome.level == "error"
    assert outcome.message == settings.DELETE_SELECTED_NOTHING_MESSAGE
    assert remaining_ids(store) == [1, 2, 3]


def test_deletes_each_matching_record(deleter, store):
    outcome = deleter.bulk_delete(DeletionRequest(definition="list", checked_ids=[1, 2, 2, 99]))

    assert outcome.status == DeletionStatus.DELETED
    assert outcome.deleted_count == 2
    assert outcome.level == "success"
    assert outcome.message == settings.DELETE_SELECTED_SUCCESS_MESSAGE
    assert outcome.refresh.definition == "list"
    assert remaining_ids(store) == [3]
    assert ("where_in", "id", [1, 2, 99]) in store.queries[-1].calls


def test_query_goes_through_list_hooks(deleter, collaborator):
    deleter.bulk_delete(DeletionRequest(checked_ids=[1]))
    assert collaborator.names() == [
        "list_extend_model",
        "list_extend_query_before",
        "list_extend_query",
    ]


def test_list_query_hooks_restrict_deletion(store):
    class PublishedOnly(RecordingCollaborator):
        def list_extend_query(self, query, definition=None):
            query.where("status", "published")

    registry = DefinitionRegistry({"list": {"modelClass": "Article", "list": {"title": {}}}})
    collaborator = PublishedOnly(entity_types={"Article": lambda: SortableEntity(store)})

    outcome = BulkDeleteCoordinator(registry, collaborator).bulk_delete(DeletionRequest(checked_ids=[1, 3]))

    assert outcome.deleted_count == 1
    assert remaining_ids(store) == [2, 3]


def test_custom_messages(store, collaborator):
    registry = DefinitionRegistry({
        "list": {
            "modelClass": "Article",
            "list": {"title": {}},
            "deleteMessage": "acme.blog::lang.posts.deleted",
            "noRecordsDeletedMessage": "acme.blog::lang.posts.none_deleted",
        },
    })
    deleter = BulkDeleteCoordinator(registry, collaborator)

    assert deleter.bulk_delete(DeletionRequest(checked_ids=[])).message == "acme.blog::lang.posts.none_deleted"
    assert deleter.bulk_delete(DeletionRequest(checked_ids=[99])).message == "acme.blog::lang.posts.none_deleted"
    assert deleter.bulk_delete(DeletionRequest(checked_ids=[1])).message == "acme.blog::lang.posts.deleted"


def test_unknown_definition_is_rejected(deleter, store):
    with pytest.raises(MissingDefinitionError):
        deleter.bulk_delete(DeletionRequest(definition="ghost", checked_ids=[1]))
    assert remaining_ids(store) == [1, 2, 3]


def test_definition_argument_overrides_request(deleter, store):
    outcome = deleter.bulk_delete(DeletionRequest(definition="ghost", checked_ids=[2]), definition="plain")
    assert outcome.refresh.definition == "plain"
    assert remaining_ids(store) == [1, 3]


def test_delete_failure_propagates(deleter, store):
    def fail():
        raise RuntimeError("database is locked")

    store.records[0].delete = fail
    with pytest.raises(RuntimeError, match="locked"):
        deleter.bulk_delete(DeletionRequest(checked_ids=[1]))
