"""
Centralized constants for pickercraft.

Default commands, timings and user-facing placeholder strings live here so the
config layer, the presenter and the terminal view agree on them.
"""

from pathlib import Path

# =============================================================================
# PATHS & ENVIRONMENT
# =============================================================================

PICKERCRAFT_CONFIG_DIR = Path.home() / ".config" / "pickercraft"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "pickercraft.log"

ENV_CONFIG_DIR = "PICKERCRAFT_CONFIG_DIR"
ENV_DEBOUNCE_MS = "PICKERCRAFT_DEBOUNCE_MS"

# =============================================================================
# TIMING
# =============================================================================

DEFAULT_DEBOUNCE_MS = 80  # Quiet period before a keystroke burst triggers a search

# =============================================================================
# PIPELINE
# =============================================================================

# Exit statuses that let a chain continue: 0 = success, 1 = "no matches"
NON_FATAL_EXIT_CODES = frozenset({0, 1})

QUERY_PLACEHOLDER = "{query}"

# =============================================================================
# UI TEXT
# =============================================================================

SEARCH_PLACEHOLDER = "Type to search..."
PREVIEW_ERROR_PLACEHOLDER = "Cannot show preview"
PROMPT_PLACEHOLDER = "> "

# =============================================================================
# DEFAULT PICKERS
# =============================================================================

DEFAULT_PICKERS = {
    "files": {
        "located": False,
        "commands": [
            {"cmd": "rg", "args": ["--files", "."]},
            {"cmd": "fzf", "args": ["--filter", QUERY_PLACEHOLDER]},
        ],
    },
    "grep": {
        "located": True,
        "commands": [
            {"cmd": "rg", "args": ["--vimgrep", "--smart-case", "--", QUERY_PLACEHOLDER, "."]},
        ],
    },
}

DEFAULT_PREVIEW = {
    "commands": [
        {"cmd": "cat", "args": [QUERY_PLACEHOLDER]},
    ],
}
