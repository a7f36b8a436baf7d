"""Source messages and their compiled templates.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from i18nbundle.diagnostics import ErrorTemplate, TemplateCompileError
from i18nbundle.enums import PluralCategory
from i18nbundle.runtime.template import CompiledTemplate, compile_template

__all__ = ["Message", "MessageTemplate"]


@dataclass(frozen=True, slots=True)
class Message:
    """A translatable string with optional plural forms.

    ``other`` is mandatory. The remaining plural fields are overrides used
    only when the language's plural rule selects that category. An empty
    string means "no override".

    Attributes:
        id: Unique key within a language
        description: Context for translators (not rendered)
        hash: Identifies the source text a translation was made from
        left_delim: Placeholder opening delimiter (empty means ``{{``)
        right_delim: Placeholder closing delimiter (empty means ``}}``)
        zero, one, two, few, many, other: Text per plural category

    Example:
        >>> Message(id="Cats", one="{{Count}} cat", other="{{Count}} cats")
    """

    id: str
    description: str = ""
    hash: str = ""
    left_delim: str = ""
    right_delim: str = ""
    zero: str = ""
    one: str = ""
    two: str = ""
    few: str = ""
    many: str = ""
    other: str = ""

    def text_for(self, category: PluralCategory) -> str:
        """Text declared for category (may be empty)."""
        return getattr(self, category.value)


@dataclass(frozen=True, slots=True)
class MessageTemplate:
    """Compiled, immutable form of a Message.

    Attributes:
        message: Source message
        plural_templates: Compiled text per declared category; always has OTHER
    """

    message: Message
    # Read-only proxies are unhashable; the source message determines the hash
    plural_templates: Mapping[PluralCategory, CompiledTemplate] = field(hash=False)

    @classmethod
    def compile(cls, message: Message) -> MessageTemplate:
        """Compile every declared plural form of message.

        Raises:
            TemplateCompileError: If the ID or 'other' text is missing, or any
                text has malformed placeholder syntax
        """
        if not message.id:
            raise TemplateCompileError(ErrorTemplate.message_no_id())
        if not message.other:
            raise TemplateCompileError(
                ErrorTemplate.message_no_other(message.id), message_id=message.id
            )

        templates = {
            category: compile_template(
                text,
                left_delim=message.left_delim,
                right_delim=message.right_delim,
                message_id=message.id,
            )
            for category in PluralCategory
            if (text := message.text_for(category))
        }
        return cls(message=message, plural_templates=MappingProxyType(templates))

    @property
    def id(self) -> str:
        return self.message.id

    @property
    def has_plural_forms(self) -> bool:
        """True when any category besides OTHER has its own text."""
        return len(self.plural_templates) > 1

    def template_for(self, category: PluralCategory) -> CompiledTemplate:
        """Compiled text for category, falling back to OTHER."""
        return self.plural_templates.get(category, self.plural_templates[PluralCategory.OTHER])
