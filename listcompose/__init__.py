"""listcompose - Composable list presentation engine.

Builds list, toolbar/search and filter widgets from named list definitions
and reconciles record reordering:
- Definition registry and config resolution (allowlisted, frozen configs)
- Widget composition with explicit extension points
- Reorder (flat sequence / nested tree) and bulk delete coordination
"""

__version__ = "0.1.0"
