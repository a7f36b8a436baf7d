"""i18nbundle - Country-scoped message bundles with CLDR pluralization.

Resolves a translated, pluralized, variable-substituted message for a
requested locale. Messages are stored per (country code, language tag);
the best language is chosen by tag matching; plural forms follow CLDR rules
via Babel; templates interpolate {{Name}} placeholders.

Public API:
    Bundle - Message store, populated at startup
    Localizer - Per-request resolution (localize / must_localize)
    LocalizeConfig - One localization request
    Message - Source message record
    LanguageTag - Canonical language tag
    PluralCategory - zero / one / two / few / many / other
    MissingDataPolicy - How placeholders without data render

Exceptions:
    I18nError - Base exception class
    NoPluralRuleError, NoMatchError, MessageNotFoundError,
    TemplateCompileError, MissingTemplateDataError, NoUnmarshalFuncError

Submodules:
    i18nbundle.runtime - Store, matcher, plural rules, templates
    i18nbundle.localization - Localizer and message-file loading
    i18nbundle.diagnostics - Error types and diagnostic formatting
"""

from .diagnostics import (
    I18nError,
    MessageNotFoundError,
    MissingTemplateDataError,
    NoMatchError,
    NoPluralRuleError,
    NoUnmarshalFuncError,
    TemplateCompileError,
)
from .enums import MissingDataPolicy, PluralCategory

# runtime first: runtime.bundle pulls in localization.loading, which needs runtime.message
from .runtime import Bundle, LanguageTag, Message  # isort: skip
from .localization import LocalizeConfig, Localizer  # isort: skip

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nbundle")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Bundle",
    "I18nError",
    "LanguageTag",
    "LocalizeConfig",
    "Localizer",
    "Message",
    "MessageNotFoundError",
    "MissingDataPolicy",
    "MissingTemplateDataError",
    "NoMatchError",
    "NoPluralRuleError",
    "NoUnmarshalFuncError",
    "PluralCategory",
    "TemplateCompileError",
    "__version__",
]
