"""Definition registry - named list definitions and their resolved configs.

Follows the registry pattern used across the service:
- In-memory dict keyed by definition id
- Lazy resolution with per-definition cache
- Fallback to the primary definition for absent / unknown ids

A registry lives for one request: resolved configs are cached on it and
must not be shared across requests.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from listcompose.definitions.resolver import ConfigResolver, RawConfig
from listcompose.definitions.schemas import ResolvedConfig
from listcompose.errors import ConfigurationError, MissingDefinitionError

logger = logging.getLogger(__name__)

DEFAULT_DEFINITION = "list"


class DefinitionRegistry:
    """Registry of list definitions.

    Usage:
        registry = DefinitionRegistry({"list": "config_list.yaml"})
        config = registry.resolve()          # primary definition
        config = registry.resolve("other")   # falls back to primary if unknown
    """

    def __init__(
        self,
        definitions: RawConfig,
        primary: Optional[str] = None,
        base_dir: Optional[Path] = None,
        resolver: Optional[ConfigResolver] = None,
    ):
        """Initialize the registry and validate the primary definition.

        Args:
            definitions: Mapping of definition id -> raw config, or a single
                raw config (path) which becomes the definition "list"
            primary: Primary definition id (default: first definition)
            base_dir: Base directory for relative YAML paths
            resolver: ConfigResolver instance (default: one using base_dir)

        Raises:
            ConfigurationError: If there are no definitions, the primary is
                unknown, or the primary definition is invalid
        """
        if isinstance(definitions, Mapping):
            self._definitions: dict[str, RawConfig] = dict(definitions)
        else:
            self._definitions = {DEFAULT_DEFINITION: definitions}

        if not self._definitions:
            raise ConfigurationError("At least one list definition is required")

        self.primary = primary or next(iter(self._definitions))
        if self.primary not in self._definitions:
            raise ConfigurationError(f"Primary list definition '{self.primary}' is not defined")

        self.resolver = resolver or ConfigResolver(base_dir=base_dir)
        self._resolved: dict[str, ResolvedConfig] = {}

        # Primary is validated eagerly, the others on first access
        self.resolve(self.primary)

    def has(self, definition: Optional[str]) -> bool:
        return definition is not None and definition in self._definitions

    def normalize(self, definition: Optional[str] = None) -> str:
        """Return the definition id to use, falling back to the primary."""
        if not self.has(definition):
            return self.primary
        return definition

    def require(self, definition: Optional[str] = None) -> str:
        """Like normalize(), but an explicit unknown id is an error.

        Raises:
            MissingDefinitionError: If definition is given and not registered
        """
        if definition is None:
            return self.primary
        if not self.has(definition):
            raise MissingDefinitionError(definition)
        return definition

    def resolve(self, definition: Optional[str] = None) -> ResolvedConfig:
        """Get the resolved config for a definition, building it on first access."""
        definition = self.normalize(definition)
        config = self._resolved.get(definition)
        if config is None:
            config = self.resolver.build(definition, self._definitions[definition])
            self._resolved[definition] = config
            logger.debug(f"Resolved list definition: {definition}")
        return config

    def get_raw(self, definition: Optional[str] = None) -> RawConfig:
        return self._definitions[self.normalize(definition)]

    def list_keys(self) -> list[str]:
        """List definition ids in registration order."""
        return list(self._definitions.keys())

    def count(self) -> int:
        return len(self._definitions)

    def is_resolved(self, definition: str) -> bool:
        return definition in self._resolved

    def reset(self) -> None:
        """Drop all cached resolved configs."""
        self._resolved.clear()
