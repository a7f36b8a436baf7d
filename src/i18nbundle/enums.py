"""Enumerations for i18nbundle type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PluralCategory(StrEnum):
    """CLDR plural category.

    StrEnum provides automatic string conversion: str(PluralCategory.ONE) == "one".
    Values match the category names returned by Babel's PluralRule.
    """

    ZERO = "zero"
    """Zero quantity (Arabic, Latvian, Welsh)"""

    ONE = "one"
    """Singular: 1 item"""

    TWO = "two"
    """Dual (Arabic, Slovenian, Welsh)"""

    FEW = "few"
    """Paucal (Polish, Russian, Czech)"""

    MANY = "many"
    """Large quantities or fractions (Polish, Russian, Arabic)"""

    OTHER = "other"
    """General form. Every message defines it."""


class MissingDataPolicy(StrEnum):
    """What the renderer does with a placeholder absent from the template data.

    StrEnum provides automatic string conversion: str(MissingDataPolicy.ERROR) == "error"
    """

    ERROR = "error"
    """Fail with MissingTemplateDataError (default)"""

    EMPTY = "empty"
    """Render the placeholder as an empty string"""


class MatchConfidence(StrEnum):
    """How closely a matched language tag fits the requested preference.

    StrEnum provides automatic string conversion: str(MatchConfidence.EXACT) == "exact"
    """

    EXACT = "exact"
    """Requested tag is registered verbatim: en-US -> en-US"""

    HIGH = "high"
    """A truncation of the requested tag is registered: en-US -> en"""

    LOW = "low"
    """Another tag with the same base language is registered: en-AU -> en-GB"""

    DEFAULT = "default"
    """Nothing matched; the bundle's default language was used"""


__all__ = [
    "MatchConfidence",
    "MissingDataPolicy",
    "PluralCategory",
]
