"""Runtime: message store, language matching, plural rules and rendering.

Exports:
    Bundle: Message template store with per-country language matching
    LanguageMatcher: Best-tag selection over a set of registered tags
    LanguageTag: Canonical language tag
    Message: Source message record
    MessageTemplate: Compiled message
    PluralRules: Plural rule table backed by Babel CLDR data

Python 3.13+. External dependency: Babel.
"""

from .bundle import Bundle
from .matcher import LanguageMatcher
from .message import Message, MessageTemplate
from .plural_rules import PluralRules, default_rules
from .tags import LanguageTag, parse_accept_language
from .template import CompiledTemplate, compile_template

__all__ = [
    "Bundle",
    "CompiledTemplate",
    "LanguageMatcher",
    "LanguageTag",
    "Message",
    "MessageTemplate",
    "PluralRules",
    "compile_template",
    "default_rules",
    "parse_accept_language",
]
