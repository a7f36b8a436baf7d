"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every error.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing messages, languages, data)
        2000-2999: Rendering errors (plural selection, interpolation)
        3000-3999: Template syntax errors (message compilation)
        4000-4999: Loading errors (message files, unmarshaling)
        5000-5999: Usage errors (invalid tags, invalid configuration)
    """

    # Lookup errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    NO_LANGUAGE_MATCH = 1002
    TEMPLATE_DATA_MISSING = 1003

    # Rendering errors (2000-2999)
    NO_PLURAL_RULE = 2001
    INVALID_PLURAL_COUNT = 2002
    INVALID_PLURAL_CATEGORY = 2003

    # Template syntax errors (3000-3999)
    TEMPLATE_SYNTAX = 3001
    MESSAGE_NO_OTHER = 3002
    MESSAGE_NO_ID = 3003

    # Loading errors (4000-4999)
    NO_UNMARSHAL_FUNC = 4001
    MESSAGE_FILE_INVALID = 4002

    # Usage errors (5000-5999)
    INVALID_LANGUAGE_TAG = 5001
    INVALID_CONFIG = 5002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: Where the error was detected (file path or message ID)
        position: Character offset within the template text (syntax errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    position: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MESSAGE_NOT_FOUND]: Message 'HelloPerson' not found for 'en' in country 'gb'
              --> HelloPerson
              = help: Add the message to a loaded message file or pass a default message

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
