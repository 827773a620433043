"""List controller - request-scoped facade over the list behavior.

One ListController serves one request: it owns the widgets composed during
that request and exposes the operations a request handler needs (index,
render, refresh, search, filter, delete, reorder). Build a new controller for
every request; nothing here is safe to share across requests or threads.

Usage:
    controller = ListController(
        {"list": "config_list.yaml"},
        collaborator=ArticleLists(),
        state=ListState(search_term="draft"),
    )
    page = controller.index()
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from listcompose import settings
from listcompose.collaborator import ListCollaborator
from listcompose.definitions.registry import DefinitionRegistry
from listcompose.definitions.resolver import RawConfig
from listcompose.definitions.schemas import ResolvedConfig
from listcompose.deletion.coordinator import BulkDeleteCoordinator
from listcompose.deletion.schemas import DeletionOutcome, DeletionRequest
from listcompose.entities import EntityType
from listcompose.errors import ListNotReadyError
from listcompose.extensions import ExtensionRegistry
from listcompose.ordering.coordinator import ReorderCoordinator
from listcompose.ordering.schemas import MoveRequest
from listcompose.widgets.composer import CompositionResult, WidgetComposer
from listcompose.widgets.filter import FilterWidget
from listcompose.widgets.lists import ListWidget
from listcompose.widgets.schemas import ListSnapshot, ListState
from listcompose.widgets.toolbar import ToolbarWidget

logger = logging.getLogger(__name__)


class IndexPage(BaseModel):
    """Index page context: title, body class and every refreshed list."""

    title: str
    body_class: str = settings.INDEX_BODY_CLASS
    lists: dict[str, ListSnapshot] = Field(default_factory=dict)


class ListController:
    """Composes and serves the lists of one request."""

    def __init__(
        self,
        definitions: Union[DefinitionRegistry, RawConfig],
        collaborator: Optional[ListCollaborator] = None,
        primary: Optional[str] = None,
        base_dir: Optional[Path] = None,
        extensions: Optional[ExtensionRegistry] = None,
        state: Optional[ListState] = None,
    ):
        if isinstance(definitions, DefinitionRegistry):
            self.registry = definitions
        else:
            self.registry = DefinitionRegistry(definitions, primary=primary, base_dir=base_dir)

        self.collaborator = collaborator or ListCollaborator()
        self.extensions = extensions or ExtensionRegistry()
        self.state = state or ListState()

        self.composer = WidgetComposer(self.registry, self.collaborator, self.extensions)
        self.reorderer = ReorderCoordinator(self.registry, self.collaborator)
        self.deleter = BulkDeleteCoordinator(self.registry, self.collaborator)

        self.list_widgets: dict[str, ListWidget] = {}
        self.toolbar_widgets: dict[str, ToolbarWidget] = {}
        self.filter_widgets: dict[str, FilterWidget] = {}

    # ── Composition ──────────────────────────────────────

    def make_lists(self) -> dict[str, ListWidget]:
        """Compose every definition, in registration order."""
        for definition in self.registry.list_keys():
            self.make_list(definition)
        return self.list_widgets

    def make_list(self, definition: Optional[str] = None) -> ListWidget:
        """Compose one definition (falls back to the primary) and keep its widgets."""
        result = self.composer.compose(definition, self.state)
        definition = result.definition

        self.list_widgets[definition] = result.list
        if result.toolbar is not None:
            self.toolbar_widgets[definition] = result.toolbar
        if result.filter is not None:
            self.filter_widgets[definition] = result.filter

        return result.list

    def _ensure_list(self, definition: Optional[str]) -> ListWidget:
        definition = self.registry.normalize(definition)
        widget = self.list_widgets.get(definition)
        if widget is None:
            widget = self.make_list(definition)
        return widget

    # ── Actions ──────────────────────────────────────────

    def index(self) -> IndexPage:
        """Index action: compose all lists and refresh them for display."""
        config = self.registry.resolve()
        self.make_lists()
        logger.info(f"Index page with {len(self.list_widgets)} lists")
        return IndexPage(
            title=config.title or settings.DEFAULT_TITLE_MESSAGE,
            lists={definition: widget.on_refresh() for definition, widget in self.list_widgets.items()},
        )

    def list_render(self, definition: Optional[str] = None) -> CompositionResult:
        """Get the composed widgets of a definition for the host renderer.

        Raises:
            ListNotReadyError: If no list has been composed yet
        """
        if not self.list_widgets:
            raise ListNotReadyError(settings.BEHAVIOR_NOT_READY_MESSAGE)

        definition = self.registry.normalize(definition)
        if definition not in self.list_widgets:
            self.make_list(definition)

        return CompositionResult(
            definition=definition,
            list=self.list_widgets[definition],
            toolbar=self.toolbar_widgets.get(definition),
            filter=self.filter_widgets.get(definition),
        )

    def list_refresh(self, definition: Optional[str] = None) -> ListSnapshot:
        """Refresh one list, composing it first if needed."""
        return self._ensure_list(definition).on_refresh()

    def on_search(self, term: Optional[str], definition: Optional[str] = None) -> ListSnapshot:
        """Submit the list's search box; without one, set the term on the list directly."""
        widget = self._ensure_list(definition)
        toolbar = self.toolbar_widgets.get(widget.definition)
        search = toolbar.get_search_widget() if toolbar is not None else None

        if search is None:
            widget.set_search_term(term, reset_page=True)
            return widget.on_refresh()
        return search.submit(term or "")

    def on_filter(self, values: dict[str, Any], definition: Optional[str] = None) -> ListSnapshot:
        """Update the list's filter scopes; without a filter, just refresh."""
        widget = self._ensure_list(definition)
        filter_widget = self.filter_widgets.get(widget.definition)
        if filter_widget is None:
            return widget.on_refresh()
        return filter_widget.update(values)

    def on_delete(self, request: DeletionRequest) -> tuple[DeletionOutcome, ListSnapshot]:
        """Bulk delete action: delete checked records, then refresh the list.

        Raises:
            MissingDefinitionError: If request.definition is unknown
        """
        outcome = self.deleter.bulk_delete(request)
        return outcome, self.list_refresh(outcome.refresh.definition)

    def on_reorder(self, request: MoveRequest) -> Optional[ListSnapshot]:
        """Reorder action: apply the move, then refresh the list.

        Returns None when the move was a tolerated no-op.

        Raises:
            UnsupportedOperationError: If the entity type supports no ordering
        """
        signal = self.reorderer.reorder(request)
        if signal is None:
            return None
        return self.list_refresh(signal.definition)

    # ── Accessors ────────────────────────────────────────

    def list_get_widget(self, definition: Optional[str] = None) -> Optional[ListWidget]:
        return self.list_widgets.get(self.registry.normalize(definition))

    def list_get_config(self, definition: Optional[str] = None) -> ResolvedConfig:
        return self.registry.resolve(definition)

    def list_get_entity(self, definition: Optional[str] = None) -> EntityType:
        """Get a plain (not extended) entity type instance for a definition."""
        return self.reorderer.get_entity(definition)

    def reorder_get_records(self, definition: Optional[str] = None) -> list[Any]:
        return self.reorderer.get_records(definition)
