"""CLDR plural rules implementation using Babel.

Provides the plural rule table consulted when a message has plural variants.
Explicit registrations take precedence; every other language falls through to
Babel's CLDR data, so the default table covers all locales Babel ships.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation

from babel.core import UnknownLocaleError
from babel.plural import PluralRule as BabelPluralRule

from i18nbundle.constants import CONSTRUCTED_LANGUAGE_TAG
from i18nbundle.diagnostics import (
    ErrorTemplate,
    InvalidPluralCategoryError,
    InvalidPluralCountError,
    NoPluralRuleError,
)
from i18nbundle.enums import PluralCategory
from i18nbundle.locale_utils import get_babel_locale
from i18nbundle.runtime.tags import LanguageTag

__all__ = [
    "PluralCount",
    "PluralRule",
    "PluralRules",
    "RuleSpec",
    "default_rules",
    "to_plural_operand",
]

logger = logging.getLogger(__name__)

type PluralCount = int | float | Decimal | str
"""Values accepted as a plural count. Strings are read as decimals."""

type PluralRule = Callable[[int | float | Decimal], PluralCategory]
"""Maps a numeric operand to its CLDR plural category."""

type RuleSpec = Callable[[int | float | Decimal], str] | Mapping[str, str]
"""A callable returning a category name, or CLDR rule strings per category."""


def to_plural_operand(count: PluralCount) -> int | float | Decimal:
    """Convert a plural count to a number Babel can evaluate.

    Strings become Decimal so visible fraction digits survive:
    ``"1.0"`` is "other" in English while ``1`` is "one".

    Raises:
        InvalidPluralCountError: For bool, non-numeric strings, NaN and other types
    """
    match count:
        case bool():
            pass
        case int():
            return count
        case float():
            if math.isfinite(count):
                return count
        case Decimal():
            if count.is_finite():
                return count
        case str():
            try:
                operand = Decimal(count.strip())
            except InvalidOperation:
                pass
            else:
                if operand.is_finite():
                    return operand
    raise InvalidPluralCountError(ErrorTemplate.invalid_plural_count(count), count=count)


def _compile(rule: RuleSpec) -> PluralRule:
    """Wrap a rule spec so it always yields a PluralCategory."""
    func = BabelPluralRule(rule) if isinstance(rule, Mapping) else rule

    def select(operand: int | float | Decimal) -> PluralCategory:
        category = func(operand)
        try:
            return PluralCategory(category)
        except ValueError as e:
            raise InvalidPluralCategoryError(
                ErrorTemplate.invalid_plural_category(category, operand), category=category
            ) from e

    return select


class PluralRules:
    """Registry mapping language tags to plural rules.

    Lookup order for a tag:
        1. Explicit registration for the tag, then for each truncation
           (en-US -> en)
        2. Babel CLDR data for the tag, then for each truncation
    A tag unknown at every level has no rule.

    Only registrations are stored; Babel locales are cached by
    get_babel_locale().

    Examples:
        >>> rules = PluralRules()
        >>> rules.select(LanguageTag.parse("en"), 1)
        <PluralCategory.ONE: 'one'>
        >>> rules.select(LanguageTag.parse("ru"), 5)
        <PluralCategory.MANY: 'many'>
        >>> rules.rule_for(LanguageTag.parse("xx")) is None
        True
    """

    __slots__ = ("_registered",)

    def __init__(self, rules: Mapping[str | LanguageTag, RuleSpec] | None = None) -> None:
        self._registered: dict[LanguageTag, PluralRule] = {}
        for tag, rule in (rules or {}).items():
            self.register(tag, rule)

    def register(self, tag: str | LanguageTag, rule: RuleSpec) -> None:
        """Add or replace the rule for a tag.

        Args:
            tag: Language tag the rule applies to (and to its more specific tags)
            rule: Callable returning a category name, or a mapping of
                CLDR rule strings such as ``{"one": "n is 1"}``
        """
        language_tag = LanguageTag.parse(tag)
        self._registered[language_tag] = _compile(rule)
        logger.debug("Registered plural rule for %s", language_tag)

    def alias(self, tag: str | LanguageTag, source: str | LanguageTag) -> None:
        """Register ``tag`` with whatever rule currently applies to ``source``.

        Raises:
            NoPluralRuleError: If source has no rule
        """
        source_tag = LanguageTag.parse(source)
        rule = self.rule_for(source_tag)
        if rule is None:
            raise NoPluralRuleError(
                ErrorTemplate.no_plural_rule(str(source_tag)), tag=str(source_tag)
            )
        self._registered[LanguageTag.parse(tag)] = rule

    def rule_for(self, tag: LanguageTag) -> PluralRule | None:
        """Return the rule for the most specific matching tag, or None."""
        candidates = (tag, *tag.parents())
        for candidate in candidates:
            if candidate in self._registered:
                return self._registered[candidate]
        for candidate in candidates:
            rule = self._babel_rule(candidate)
            if rule is not None:
                return rule
        return None

    def select(self, tag: LanguageTag, count: PluralCount) -> PluralCategory:
        """Select the plural category of count for tag.

        Raises:
            NoPluralRuleError: If no rule applies to tag
            InvalidPluralCountError: If count is not numeric
            InvalidPluralCategoryError: If a registered rule returns an unknown category
        """
        rule = self.rule_for(tag)
        if rule is None:
            raise NoPluralRuleError(ErrorTemplate.no_plural_rule(str(tag)), tag=str(tag))
        return rule(to_plural_operand(count))

    def _babel_rule(self, tag: LanguageTag) -> PluralRule | None:
        try:
            locale = get_babel_locale(tag.babel_identifier)
        except (UnknownLocaleError, ValueError):
            return None
        return _compile(locale.plural_form)


def default_rules() -> PluralRules:
    """Build the default table: CLDR data plus the constructed-language alias.

    Constructed languages have no natural plural system; they borrow English.
    """
    rules = PluralRules()
    rules.alias(CONSTRUCTED_LANGUAGE_TAG, "en")
    return rules
