"""Config resolver - builds a ResolvedConfig from a raw definition.

A raw definition (or any of its list / toolbar / filter sections) is either
an inline mapping or a path to a YAML document. Resolution happens in one
pass: required fields are checked, presentation fields are copied through a
fixed allowlist and the result is validated into a frozen model.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from listcompose import settings
from listcompose.definitions.schemas import ResolvedConfig
from listcompose.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Must exist in the raw definition
REQUIRED_CONFIG = ("modelClass", "list")

# Presentation fields transferred to the list widget; everything else is dropped
LIST_FIELDS_TO_TRANSFER = (
    "recordUrl",
    "recordOnClick",
    "recordsPerPage",
    "perPageOptions",
    "showPageNumbers",
    "noRecordsMessage",
    "defaultSort",
    "reorder",
    "showSorting",
    "showSetup",
    "showCheckboxes",
    "showTree",
    "treeExpanded",
    "customViewPath",
)

# Behavior-level fields kept on the resolved config itself
BEHAVIOR_FIELDS = ("title", "deleteMessage", "noRecordsDeletedMessage")

RawConfig = Union[Mapping, str, Path]


class ConfigResolver:
    """Turns raw definitions into ResolvedConfig instances."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else settings.DEFINITIONS_DIR

    def load(self, raw: Any, what: str = "definition") -> dict[str, Any]:
        """Load a raw section into a plain dict, reading YAML paths.

        Raises:
            ConfigurationError: If the path is missing or does not hold a mapping
        """
        if isinstance(raw, Mapping):
            return dict(raw)

        if isinstance(raw, (str, Path)):
            path = Path(raw)
            if not path.is_absolute():
                path = self.base_dir / path
            if not path.exists():
                raise ConfigurationError(f"Config file for {what} not found: {path}")

            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, Mapping):
                raise ConfigurationError(f"Config file for {what} must contain a mapping: {path}")
            logger.debug(f"Loaded {what} config from {path}")
            return dict(data)

        raise ConfigurationError(
            f"Config for {what} must be a mapping or a YAML path, got {type(raw).__name__}"
        )

    @staticmethod
    def missing_required(data: Mapping) -> list[str]:
        """List the required fields absent from a raw definition."""
        return [field for field in REQUIRED_CONFIG if data.get(field) is None]

    def build(self, definition: str, raw: RawConfig) -> ResolvedConfig:
        """Resolve one raw definition.

        Raises:
            ConfigurationError: If a required field is missing or a section is invalid
        """
        data = self.load(raw, what=f"list '{definition}'")

        missing = self.missing_required(data)
        if missing:
            raise ConfigurationError(
                f"List definition '{definition}' is missing required config: {', '.join(missing)}"
            )

        columns = self.load(data["list"], what=f"columns of '{definition}'")
        if "columns" not in columns:
            columns = {"columns": columns}
        # YAML "title:" with no body declares a column with defaults
        columns["columns"] = {name: column or {} for name, column in (columns["columns"] or {}).items()}

        resolved: dict[str, Any] = {
            "definition": definition,
            "modelClass": data["modelClass"],
            "list": columns,
            "presentation": self._transfer_presentation(data),
        }

        for section in ("toolbar", "filter"):
            if data.get(section) is not None:
                resolved[section] = self.load(data[section], what=f"{section} of '{definition}'")

        for field in BEHAVIOR_FIELDS:
            if data.get(field) is not None:
                resolved[field] = data[field]

        try:
            return ResolvedConfig.model_validate(resolved)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config for list '{definition}': {e}") from e

    @staticmethod
    def _transfer_presentation(data: Mapping) -> dict[str, Any]:
        transferred = {}
        for field in LIST_FIELDS_TO_TRANSFER:
            if data.get(field) is not None:
                transferred[field] = data[field]
            elif data.get(to_snake(field)) is not None:
                transferred[field] = data[to_snake(field)]
        return transferred
