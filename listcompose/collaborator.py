"""Collaborator hook contract.

The collaborator is the host application side of a list behavior: it turns
entity-type references into entity instances and may customise every stage
of list composition. Subclass ListCollaborator and override what you need;
every hook defaults to identity or no-op.

Usage:
    class ArticleLists(ListCollaborator):
        def list_extend_query(self, query, definition=None):
            query.where("published", True)

    collaborator = ArticleLists(entity_types={"Article": ArticleEntity})
"""

import importlib
import logging
from typing import Any, Callable, Optional

from listcompose.entities import EntityType, Query
from listcompose.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ListCollaborator:
    """Default collaborator: identity / no-op for every hook."""

    def __init__(self, entity_types: Optional[dict[str, Callable[[], EntityType]]] = None):
        self.entity_types: dict[str, Callable[[], EntityType]] = dict(entity_types or {})

    # ── Entity types ─────────────────────────────────────

    def make_entity(self, reference: str, definition: Optional[str] = None) -> EntityType:
        """Instantiate the entity type named by a definition's modelClass.

        The reference is looked up in the registered entity_types first, then
        imported as "package.module:Class" or "package.module.Class".

        Raises:
            ConfigurationError: If the reference cannot be resolved to an EntityType
        """
        factory = self.entity_types.get(reference) or self._import_entity_type(reference)
        if not callable(factory):
            raise ConfigurationError(
                f"Model class '{reference}' for list '{definition}' is not callable"
            )
        try:
            entity = factory()
        except TypeError as e:
            raise ConfigurationError(
                f"Model class '{reference}' for list '{definition}' could not be built: {e}"
            ) from e
        if not isinstance(entity, EntityType):
            raise ConfigurationError(
                f"Model class '{reference}' for list '{definition}' is not an EntityType"
            )
        return entity

    @staticmethod
    def _import_entity_type(reference: str) -> Callable[[], EntityType]:
        if ":" in reference:
            module_name, _, attr = reference.partition(":")
        else:
            module_name, _, attr = reference.rpartition(".")

        if not module_name or not attr:
            raise ConfigurationError(f"Model class '{reference}' not found")

        try:
            module = importlib.import_module(module_name)
            factory = getattr(module, attr)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(f"Model class '{reference}' not found: {e}") from e

        logger.debug(f"Imported model class {reference}")
        return factory

    def make_extended_entity(self, reference: str, definition: Optional[str] = None) -> EntityType:
        """Instantiate an entity type and pass it through list_extend_model.

        Raises:
            ConfigurationError: If the reference or the extended result is not an EntityType
        """
        entity = self.list_extend_model(self.make_entity(reference, definition), definition)
        if not isinstance(entity, EntityType):
            raise ConfigurationError(
                f"list_extend_model for list '{definition}' must return an EntityType"
            )
        return entity

    # ── List hooks ───────────────────────────────────────

    def list_extend_model(self, entity: EntityType, definition: Optional[str] = None) -> EntityType:
        """Substitute or decorate the entity type before it is used."""
        return entity

    def list_extend_columns(self, widget: Any) -> None:
        """Called after the list columns are defined."""

    def list_extend_query_before(self, query: Query, definition: Optional[str] = None) -> None:
        """Extend the list query before default filtering and sorting."""

    def list_extend_query(self, query: Query, definition: Optional[str] = None) -> None:
        """Extend the list query after default filtering and sorting."""

    def list_extend_records(self, records: list[Any], definition: Optional[str] = None) -> Optional[list[Any]]:
        """Transform the fetched records. Return None to keep them unchanged."""
        return None

    def list_inject_row_class(self, record: Any, definition: Optional[str] = None) -> Optional[str]:
        """Return a CSS class name for a list row."""
        return None

    def list_override_column_value(self, record: Any, column_name: str, definition: Optional[str] = None) -> Any:
        """Replace a cell value. Return None to keep the default."""
        return None

    def list_override_header_value(self, column_name: str, definition: Optional[str] = None) -> Any:
        """Replace a header value. Return None to keep the default."""
        return None

    # ── Filter hooks ─────────────────────────────────────

    def list_filter_extend_scopes(self, widget: Any) -> None:
        """Called after the filter scopes are defined."""

    def list_filter_extend_query(self, query: Query, scope: Any) -> None:
        """Extend the query for a filter scope being applied."""

    # ── Reorder hooks ────────────────────────────────────

    def reorder_extend_query(self, query: Query) -> None:
        """Extend the query used for finding reorder records."""
