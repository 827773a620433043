"""Bulk-delete coordinator - deletes the records checked in a list.

Records are fetched through the same query hooks as the list and deleted one
by one, so per-record side effects in the persistence layer still run.
Empty selections and zero matches are reported, not raised.
"""

import logging
from typing import Optional

from listcompose import settings
from listcompose.collaborator import ListCollaborator
from listcompose.definitions.registry import DefinitionRegistry
from listcompose.deletion.schemas import DeletionOutcome, DeletionRequest, DeletionStatus
from listcompose.schemas import RefreshSignal

logger = logging.getLogger(__name__)


class BulkDeleteCoordinator:
    """Deletes checked records of a list definition."""

    def __init__(self, registry: DefinitionRegistry, collaborator: Optional[ListCollaborator] = None):
        self.registry = registry
        self.collaborator = collaborator or ListCollaborator()

    def bulk_delete(self, request: DeletionRequest, definition: Optional[str] = None) -> DeletionOutcome:
        """Delete the records in request.checked_ids.

        Args:
            request: The deletion request
            definition: Definition id (default: request.definition, then primary)

        Returns:
            DeletionOutcome with the number of deleted records and a message key

        Raises:
            MissingDefinitionError: If an explicit definition id is unknown
        """
        definition = self.registry.require(definition if definition is not None else request.definition)
        config = self.registry.resolve(definition)

        checked_ids = list(dict.fromkeys(request.checked_ids or []))
        if not checked_ids:
            logger.info(f"Bulk delete on list '{definition}': nothing selected")
            return self._outcome(
                DeletionStatus.EMPTY_SELECTION,
                definition,
                message=config.no_records_deleted_message or settings.DELETE_SELECTED_EMPTY_MESSAGE,
            )

        entity = self.collaborator.make_extended_entity(config.model_class, definition)

        query = entity.new_query()
        self.collaborator.list_extend_query_before(query, definition)
        query.where_in(entity.key_name, checked_ids)
        self.collaborator.list_extend_query(query, definition)

        records = query.get()
        if not records:
            logger.info(f"Bulk delete on list '{definition}': no records matched {len(checked_ids)} ids")
            return self._outcome(
                DeletionStatus.NOTHING_DELETED,
                definition,
                message=config.no_records_deleted_message or settings.DELETE_SELECTED_NOTHING_MESSAGE,
            )

        for record in records:
            record.delete()

        logger.info(f"Bulk delete on list '{definition}': deleted {len(records)} records")
        return self._outcome(
            DeletionStatus.DELETED,
            definition,
            message=config.delete_message or settings.DELETE_SELECTED_SUCCESS_MESSAGE,
            deleted_count=len(records),
        )

    @staticmethod
    def _outcome(
        status: DeletionStatus,
        definition: str,
        message: str,
        deleted_count: int = 0,
    ) -> DeletionOutcome:
        return DeletionOutcome(
            status=status,
            deleted_count=deleted_count,
            level="success" if status == DeletionStatus.DELETED else "error",
            message=message,
            refresh=RefreshSignal(definition=definition),
        )
