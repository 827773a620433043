"""Error taxonomy for list composition, reordering and deletion."""


class ListBehaviorError(Exception):
    """Base class for all list behavior errors."""


class ConfigurationError(ListBehaviorError, ValueError):
    """A definition is missing required fields or names an unusable entity type."""


class MissingDefinitionError(ListBehaviorError, LookupError):
    """An operation named a definition that does not exist."""

    def __init__(self, definition: str, message: str = ""):
        self.definition = definition
        super().__init__(message or f"List definition '{definition}' not found")


class UnsupportedOperationError(ListBehaviorError, RuntimeError):
    """The entity type does not support the requested operation."""


class ListNotReadyError(ListBehaviorError, RuntimeError):
    """Rendering was requested before any list widget was composed."""
