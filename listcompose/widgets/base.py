"""Common widget state."""


class WidgetBase:
    """A composed, renderable unit bound to one list definition."""

    def __init__(self, alias: str, definition: str):
        self.alias = alias
        self.definition = definition
        self.css_classes: list[str] = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} alias={self.alias!r}>"
