"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating Localizer call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "CountryCode",
    "MessageId",
    "TemplateData",
]

type MessageId = str
"""Identifier for a message (e.g., 'HelloPerson', 'menu.open')."""

type CountryCode = str
"""Opaque market/deployment key grouping a set of languages (e.g., 'tr', 'gb')."""

type TemplateData = Mapping[str, object]
"""Placeholder values keyed by name; nested mappings serve dotted paths."""
