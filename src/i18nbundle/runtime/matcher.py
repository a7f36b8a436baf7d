"""Best-language selection over a country's registered tags.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from i18nbundle.diagnostics import ErrorTemplate, NoMatchError
from i18nbundle.enums import MatchConfidence
from i18nbundle.runtime.tags import LanguageTag

__all__ = ["LanguageMatcher"]

logger = logging.getLogger(__name__)


class LanguageMatcher:
    """Selects the supported tag that best fits a ranked preference list.

    Preferences are tried in rank order and the first one that matches at any
    level wins, so a user's first choice is never beaten by a closer match
    for a lower-ranked language. For one preference the levels are:

        EXACT  the preference itself is supported
        HIGH   a truncation of it is supported (en-US -> en)
        LOW    another tag with the same base language is supported

    Ties at LOW go to the tag sharing most subtags with the preference, then
    the least specific tag, then the canonical string. Registration order never
    influences the result.

    When no preference matches, the default language is returned if it is
    supported (MatchConfidence.DEFAULT); otherwise NoMatchError is raised.

    Example:
        >>> matcher = LanguageMatcher(
        ...     [LanguageTag.parse("tr"), LanguageTag.parse("en-GB")],
        ...     LanguageTag.parse("tr"),
        ... )
        >>> matcher.match([LanguageTag.parse("en-US")])
        (LanguageTag(language='en', script=None, territory='GB', variant=None), <MatchConfidence.LOW: 'low'>)
    """

    __slots__ = ("_by_language", "_country_code", "_default_language", "_supported")

    def __init__(
        self,
        supported: Iterable[LanguageTag],
        default_language: LanguageTag,
        *,
        country_code: str = "",
    ) -> None:
        self._supported: frozenset[LanguageTag] = frozenset(supported)
        self._default_language = default_language
        self._country_code = country_code

        by_language: dict[str, list[LanguageTag]] = {}
        for tag in self._supported:
            by_language.setdefault(tag.language, []).append(tag)
        self._by_language = {
            language: tuple(sorted(tags, key=lambda t: (t.specificity, str(t))))
            for language, tags in by_language.items()
        }

    @property
    def supported(self) -> frozenset[LanguageTag]:
        return self._supported

    def match(self, preferences: Sequence[LanguageTag]) -> tuple[LanguageTag, MatchConfidence]:
        """Pick the best supported tag for preferences.

        Args:
            preferences: Requested tags, highest priority first

        Returns:
            (matched tag, confidence)

        Raises:
            NoMatchError: If nothing matches and the default language is unsupported
        """
        for preference in preferences:
            result = self._match_one(preference)
            if result is not None:
                logger.debug(
                    "Matched %s -> %s (%s) for country %r",
                    preference,
                    result[0],
                    result[1],
                    self._country_code,
                )
                return result

        if self._default_language in self._supported:
            return self._default_language, MatchConfidence.DEFAULT

        requested = tuple(str(p) for p in preferences)
        raise NoMatchError(
            ErrorTemplate.no_language_match(
                self._country_code, requested, str(self._default_language)
            ),
            country_code=self._country_code,
            preferences=requested,
        )

    def _match_one(self, preference: LanguageTag) -> tuple[LanguageTag, MatchConfidence] | None:
        if preference in self._supported:
            return preference, MatchConfidence.EXACT

        for parent in preference.parents():
            if parent in self._supported:
                return parent, MatchConfidence.HIGH

        candidates = self._by_language.get(preference.language)
        if not candidates:
            return None
        best = min(candidates, key=lambda tag: -_shared_subtags(tag, preference))
        return best, MatchConfidence.LOW


def _shared_subtags(a: LanguageTag, b: LanguageTag) -> int:
    return sum(
        1
        for x, y in ((a.script, b.script), (a.territory, b.territory), (a.variant, b.variant))
        if x is not None and x == y
    )
