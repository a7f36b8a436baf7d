"""Shared constants for i18nbundle.

This module provides centralized configuration constants used across the
runtime and localization packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Template syntax: Default placeholder delimiters
- Depth limits: Nesting bounds for dotted placeholder paths
- Cache limits: Memory bounds for caching subsystems
- Input limits: DoS prevention via size constraints
- Fallback strings: Placeholders rendered when resolution fails

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template syntax
    "DEFAULT_LEFT_DELIM",
    "DEFAULT_RIGHT_DELIM",
    # Depth limits
    "MAX_PLACEHOLDER_DEPTH",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_ACCEPT_LANGUAGE_ENTRIES",
    "MAX_LANGUAGE_TAG_LENGTH",
    # Identifiers
    "CONSTRUCTED_LANGUAGE_TAG",
    "MESSAGE_ID_SEPARATOR",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_MESSAGE",
]

# ============================================================================
# TEMPLATE SYNTAX
# ============================================================================

# Placeholder delimiters used when a Message does not declare its own.
DEFAULT_LEFT_DELIM: str = "{{"
DEFAULT_RIGHT_DELIM: str = "}}"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum number of segments in a dotted placeholder path ({{.a.b.c}}).
# Template data is rarely nested more than two or three levels.
MAX_PLACEHOLDER_DEPTH: int = 16

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached Babel Locale instances (plural rule lookups).
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Accept-Language values come from untrusted clients.
# Entries beyond this count are ignored.
MAX_ACCEPT_LANGUAGE_ENTRIES: int = 32

# BCP-47 recommends supporting tags of at least 35 characters.
# Longer inputs are rejected before parsing.
MAX_LANGUAGE_TAG_LENGTH: int = 64

# ============================================================================
# IDENTIFIERS
# ============================================================================

# ISO 639-2 code for constructed languages. Aliased to the English plural rule.
CONSTRUCTED_LANGUAGE_TAG: str = "art"

# Joins nested keys in message files: {"menu": {"open": "..."}} -> "menu.open"
MESSAGE_ID_SEPARATOR: str = "."

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Truly invalid/unknown (e.g., localize() called without any message ID)
FALLBACK_INVALID: str = "{???}"

# Format string - use .format(id=...)
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"  # e.g., {HelloPerson}
