"""Language tags and client preference parsing.

LanguageTag is the comparable identifier used as a key throughout the bundle.
Parsing delegates to Babel's ``parse_locale`` so tags accepted here are the
ones Babel can look up CLDR data for.

Python 3.13+. External dependency: Babel.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from babel.core import parse_locale

from i18nbundle.constants import MAX_ACCEPT_LANGUAGE_ENTRIES, MAX_LANGUAGE_TAG_LENGTH
from i18nbundle.diagnostics import ErrorTemplate, InvalidLanguageTagError
from i18nbundle.locale_utils import to_posix_locale

__all__ = [
    "LanguageTag",
    "parse_accept_language",
    "parse_preferences",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """Canonical language tag (language, script, territory, variant).

    Two tags are equal iff their canonical string forms are equal. Use
    ``LanguageTag.parse`` to build one from user input; the constructor
    trusts its arguments.

    Examples:
        >>> tag = LanguageTag.parse("zh_hans_cn")
        >>> str(tag)
        'zh-Hans-CN'
        >>> str(tag.base)
        'zh'
        >>> [str(t) for t in tag.parents()]
        ['zh-Hans', 'zh']
    """

    language: str
    script: str | None = None
    territory: str | None = None
    variant: str | None = None

    @classmethod
    def parse(cls, value: str | LanguageTag) -> LanguageTag:
        """Parse a BCP-47 (``en-US``) or POSIX (``en_US``) identifier.

        Args:
            value: Tag string, or an existing LanguageTag (returned unchanged)

        Returns:
            Canonical LanguageTag

        Raises:
            InvalidLanguageTagError: If value is empty, too long, or malformed
        """
        if isinstance(value, LanguageTag):
            return value

        text = value.strip()
        if not text:
            raise InvalidLanguageTagError(
                ErrorTemplate.invalid_language_tag(value, "empty"), value=value
            )
        if len(text) > MAX_LANGUAGE_TAG_LENGTH:
            raise InvalidLanguageTagError(
                ErrorTemplate.invalid_language_tag(
                    text[:MAX_LANGUAGE_TAG_LENGTH], f"longer than {MAX_LANGUAGE_TAG_LENGTH}"
                ),
                value=value,
            )
        if "@" in text or "." in text:
            raise InvalidLanguageTagError(
                ErrorTemplate.invalid_language_tag(value, "encoding and modifier suffixes"),
                value=value,
            )

        try:
            language, territory, script, variant = parse_locale(to_posix_locale(text))
        except ValueError as e:
            raise InvalidLanguageTagError(
                ErrorTemplate.invalid_language_tag(value, str(e)), value=value
            ) from e

        return cls(language, script, territory, variant)

    def __str__(self) -> str:
        return "-".join(
            part
            for part in (self.language, self.script, self.territory, self.variant)
            if part
        )

    @property
    def base(self) -> LanguageTag:
        """Language-only tag: en-US -> en."""
        return LanguageTag(self.language)

    @property
    def specificity(self) -> int:
        """Number of subtags beyond the language."""
        return sum(1 for part in (self.script, self.territory, self.variant) if part)

    @property
    def babel_identifier(self) -> str:
        """POSIX identifier Babel accepts: zh-Hans-CN -> zh_Hans_CN."""
        return to_posix_locale(str(self))

    def parents(self) -> tuple[LanguageTag, ...]:
        """Progressively truncated tags, most specific first, excluding self."""
        subtags = {"script": self.script, "territory": self.territory, "variant": self.variant}
        present = [(name, value) for name, value in subtags.items() if value]
        # Drop the last present subtag repeatedly until only the language remains
        return tuple(
            LanguageTag(self.language, **dict(present[:cut]))
            for cut in range(len(present) - 1, -1, -1)
        )


def parse_accept_language(header: str) -> tuple[LanguageTag, ...]:
    """Parse an Accept-Language style value into ranked tags.

    Entries are ordered by quality (stable for equal q). Wildcards, entries
    with ``q=0``, and malformed entries are dropped. Duplicate tags keep their
    highest-ranked position.

    Args:
        header: e.g. ``"fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5"``

    Returns:
        Ranked tuple of LanguageTag

    Example:
        >>> [str(t) for t in parse_accept_language("en;q=0.5, tr")]
        ['tr', 'en']
    """
    ranked: list[tuple[float, int, LanguageTag]] = []
    items = header.split(",")
    if len(items) > MAX_ACCEPT_LANGUAGE_ENTRIES:
        logger.debug(
            "Accept-Language has %d entries, keeping the first %d",
            len(items),
            MAX_ACCEPT_LANGUAGE_ENTRIES,
        )
        items = items[:MAX_ACCEPT_LANGUAGE_ENTRIES]

    for index, item in enumerate(items):
        tag_text, _, params = item.strip().partition(";")
        tag_text = tag_text.strip()
        if not tag_text or tag_text == "*":
            continue

        quality = _parse_quality(params)
        if quality is None:
            logger.debug("Skipping Accept-Language entry with bad quality: %r", item)
            continue
        if quality <= 0:
            continue

        try:
            tag = LanguageTag.parse(tag_text)
        except InvalidLanguageTagError:
            logger.debug("Skipping malformed Accept-Language entry: %r", tag_text)
            continue
        ranked.append((quality, index, tag))

    ranked.sort(key=lambda entry: (-entry[0], entry[1]))
    return tuple(dict.fromkeys(tag for _, _, tag in ranked))


def _parse_quality(params: str) -> float | None:
    """Extract q from ``;q=0.8`` parameters. Missing q means 1.0."""
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return None
        if not 0.0 <= quality <= 1.0:
            return None
        return quality
    return 1.0


def parse_preferences(preferences: Iterable[str | LanguageTag]) -> tuple[LanguageTag, ...]:
    """Flatten caller preferences into one ranked, de-duplicated tag tuple.

    Strings are parsed as Accept-Language lists, so both ``"en-US"`` and
    ``"tr, en;q=0.5"`` are accepted. LanguageTag values pass through.

    Args:
        preferences: Strings and/or tags in priority order

    Returns:
        Ranked tuple of LanguageTag
    """
    tags: list[LanguageTag] = []
    for preference in preferences:
        if isinstance(preference, LanguageTag):
            tags.append(preference)
        else:
            tags.extend(parse_accept_language(preference))
    return tuple(dict.fromkeys(tags))
