"""Process-level settings, read from the environment at import time."""

import os
from pathlib import Path

LOG_LEVEL = os.environ.get("LISTCOMPOSE_LOG_LEVEL", "INFO").upper()

# Base directory for relative YAML definition paths
DEFINITIONS_DIR = Path(os.environ.get("LISTCOMPOSE_DEFINITIONS_DIR", "."))

# Message keys handed to the host for translation
DEFAULT_TITLE_MESSAGE = "backend::lang.list.default_title"
DELETE_SELECTED_EMPTY_MESSAGE = "backend::lang.list.delete_selected_empty"
DELETE_SELECTED_NOTHING_MESSAGE = "backend::lang.list.delete_selected_nothing"
DELETE_SELECTED_SUCCESS_MESSAGE = "backend::lang.list.delete_selected_success"
MISSING_DEFINITION_MESSAGE = "backend::lang.list.missing_parent_definition"
BEHAVIOR_NOT_READY_MESSAGE = "backend::lang.list.behavior_not_ready"

INDEX_BODY_CLASS = "slim-container"

# Optional "package.module:callable" returning a ListController for a ListState;
# used by the API app when no factory is injected
CONTROLLER_FACTORY = os.environ.get("LISTCOMPOSE_CONTROLLER_FACTORY", "")
