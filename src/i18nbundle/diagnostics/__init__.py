"""Diagnostic system for i18nbundle errors.

Provides structured error diagnostics with codes, hints, and locations.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    I18nError,
    InvalidLanguageTagError,
    InvalidLocalizeConfigError,
    InvalidPluralCategoryError,
    InvalidPluralCountError,
    MessageFileFormatError,
    MessageNotFoundError,
    MissingTemplateDataError,
    NoMatchError,
    NoPluralRuleError,
    NoUnmarshalFuncError,
    TemplateCompileError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "I18nError",
    "InvalidLanguageTagError",
    "InvalidLocalizeConfigError",
    "InvalidPluralCategoryError",
    "InvalidPluralCountError",
    "MessageFileFormatError",
    "MessageNotFoundError",
    "MissingTemplateDataError",
    "NoMatchError",
    "NoPluralRuleError",
    "NoUnmarshalFuncError",
    "OutputFormat",
    "TemplateCompileError",
]
