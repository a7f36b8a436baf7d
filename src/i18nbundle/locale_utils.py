"""Locale utilities for Babel interoperability.

Centralizes conversion between BCP-47 language tags and POSIX locale
identifiers, cached Babel Locale construction, and detection of the
user's language preferences from the operating system.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from i18nbundle.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "from_posix_locale",
    "get_babel_locale",
    "get_system_locale",
    "get_system_preferences",
    "to_posix_locale",
]

_PSEUDO_LOCALES = frozenset({"C", "POSIX"})
_LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG")
_FALLBACK_SYSTEM_LOCALE = "en-US"


def to_posix_locale(locale_code: str) -> str:
    """Convert a BCP-47 tag to the POSIX identifier Babel parses.

    Example:
        >>> to_posix_locale("zh-Hans-CN")
        'zh_Hans_CN'
    """
    return locale_code.replace("-", "_")


def from_posix_locale(value: str) -> str | None:
    """Convert a POSIX locale setting to a BCP-47 tag string.

    Drops the codeset (``.UTF-8``) and modifier (``@euro``) suffixes, which
    have no BCP-47 form. Returns None for the "C" and "POSIX" pseudo-locales
    and for empty values.

    Example:
        >>> from_posix_locale("de_DE.ISO-8859-15@euro")
        'de-DE'
        >>> from_posix_locale("C.UTF-8") is None
        True
    """
    code = value.split("@", 1)[0].split(".", 1)[0].strip()
    if not code or code in _PSEUDO_LOCALES:
        return None
    return code.replace("_", "-")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Plural rule lookups hit this for every truncation of a tag, so parsed
    locales are cached. Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(to_posix_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects."""
    get_babel_locale.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect the system locale as a BCP-47 tag string.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en-US" as fallback.

    Returns:
        Tag such as "de-DE", ready for LanguageTag.parse()

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    candidates = [system_locale, *(os.environ.get(var) for var in _LOCALE_ENV_VARS)]

    for candidate in candidates:
        if candidate and (tag := from_posix_locale(candidate)) is not None:
            return tag

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return _FALLBACK_SYSTEM_LOCALE


def get_system_preferences() -> tuple[str, ...]:
    """Ranked language preferences of the current user.

    The GNU ``LANGUAGE`` variable (``"tr:en_GB:en"``) lists message languages
    in priority order; the system locale follows as the last resort.
    Duplicates keep their first position.

    Returns:
        BCP-47 tag strings, most preferred first. Never empty.
    """
    ranked = [from_posix_locale(entry) for entry in os.environ.get("LANGUAGE", "").split(":")]
    ranked.append(get_system_locale())
    return tuple(dict.fromkeys(tag for tag in ranked if tag is not None))
