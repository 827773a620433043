"""Toolbar widget and its embedded search box."""

from typing import Any, Optional

from listcompose.definitions.schemas import SearchConfig, ToolbarConfig
from listcompose.widgets.base import WidgetBase
from listcompose.widgets.extension_points import SearchExtensionPoints


class SearchWidget(WidgetBase):
    """Search box; submitting fires the bound submit slot."""

    def __init__(self, alias: str, definition: str, config: Optional[SearchConfig] = None):
        super().__init__(alias, definition)
        self.config = config or SearchConfig()
        self.prompt = self.config.prompt
        self.mode = self.config.mode
        self.scope = self.config.scope
        self.hooks = SearchExtensionPoints()
        self._active_term: Optional[str] = None

    def get_active_term(self) -> Optional[str]:
        return self._active_term

    def set_active_term(self, term: Optional[str]) -> None:
        self._active_term = term.strip() if term else None

    def submit(self, term: Optional[str] = None) -> Any:
        """Set the search term (when given) and fire the submit slot."""
        if term is not None:
            self.set_active_term(term)
        return self.hooks.submit()


class ToolbarWidget(WidgetBase):
    """Toolbar with buttons and an optional search box."""

    def __init__(self, alias: str, definition: str, config: Optional[ToolbarConfig] = None):
        super().__init__(alias, definition)
        self.config = config or ToolbarConfig()
        self.buttons = self.config.buttons
        self._search_widget: Optional[SearchWidget] = None
        if self.config.search is not None:
            self._search_widget = SearchWidget(f"{alias}Search", definition, self.config.search)

    def get_search_widget(self) -> Optional[SearchWidget]:
        return self._search_widget
