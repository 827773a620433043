"""List, toolbar/search and filter widgets and their composer.

Architecture:
- schemas.py          - ListState (request state), ListSnapshot (refresh output)
- extension_points.py - Named callback slots per widget
- lists.py            - ListWidget and its render cycle
- toolbar.py          - ToolbarWidget with embedded SearchWidget
- filter.py           - FilterWidget and scope application
- composer.py         - WidgetComposer wiring widgets to the collaborator
"""

from .schemas import HeaderCell, ListRow, ListSnapshot, ListState
from .extension_points import FilterExtensionPoints, ListExtensionPoints, SearchExtensionPoints
from .lists import ListColumn, ListWidget
from .toolbar import SearchWidget, ToolbarWidget
from .filter import FilterScope, FilterWidget
from .composer import CompositionResult, WidgetComposer

__all__ = [
    "HeaderCell",
    "ListRow",
    "ListSnapshot",
    "ListState",
    "FilterExtensionPoints",
    "ListExtensionPoints",
    "SearchExtensionPoints",
    "ListColumn",
    "ListWidget",
    "SearchWidget",
    "ToolbarWidget",
    "FilterScope",
    "FilterWidget",
    "CompositionResult",
    "WidgetComposer",
]
