#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for bbcode2md.

This module centralizes the fixed tables and default values used across the
package. Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Cleaner Pipeline - Built-in rule names and their execution order
3. Code Fences - BBCode code language aliases
4. Configuration - Config file discovery
5. CLI - Exit codes
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

# =============================================================================
# Type Definitions
# =============================================================================

MalformedConstruct = Literal["list", "url", "image", "snippet"]

# =============================================================================
# Cleaner Pipeline
# =============================================================================

# Execution order of the built-in cleaners. Color, size and center removal run
# before the emphasis rules; quote flattening runs as a single unit.
DEFAULT_CLEANER_ORDER: tuple[str, ...] = (
    "remove_color",
    "remove_size",
    "remove_center",
    "replace_bold",
    "replace_italic",
    "replace_underline",
    "replace_strikethrough",
    "replace_lists",
    "replace_urls",
    "replace_images",
    "replace_quotes",
    "replace_snippets",
)

# Placeholder used in error messages when a document carries no identifier
UNKNOWN_DOCUMENT_ID = "unknown"

MALFORMED_MARKUP_MESSAGE = "Text identified by '{doc_id}' has malformed BBCode {construct}"

# =============================================================================
# Code Fences
# =============================================================================

# Lowercased BBCode code language -> fenced code block language
LANGUAGE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "html4strict": "html",
        "div": "html",
        "shell": "sh",
        "dos": "sh",
        "batch": "sh",
        "xul": "xml",
        "wpf": "xml",
        "asm": "nasm",
        "vb": "vb.net",
        "visualbasic": "vb.net",
        "vba": "vb.net",
        "asp": "aspx-vb",
        "aspnet": "aspx-vb",
        "xaml": "xml",
        "cplusplus": "cpp",
        "txt": "text",
        "gettext": "text",
        "basic": "cbmbas",
        "lisp": "clojure",
    }
)

# =============================================================================
# Configuration
# =============================================================================

CONFIG_FILENAMES = [".bbcode2md.toml", ".bbcode2md.yaml", ".bbcode2md.yml", ".bbcode2md.json"]
PYPROJECT_TOOL_SECTION = "bbcode2md"
CONFIG_ENV_VAR = "BBCODE2MD_CONFIG"

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

DEFAULT_LOG_LEVEL = "WARNING"
