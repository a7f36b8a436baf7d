"""Per-request message resolution.

A Localizer binds a caller's language preferences and country code to a
populated Bundle and resolves messages through the pipeline:

    match language -> look up template -> select plural form -> interpolate

Error handling follows the (result, errors) convention: ``localize`` never
raises for resolution failures and returns a placeholder instead, while
``must_localize`` raises for use at startup and in tests.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from i18nbundle.constants import FALLBACK_INVALID, FALLBACK_MISSING_MESSAGE
from i18nbundle.diagnostics import (
    ErrorTemplate,
    I18nError,
    InvalidLocalizeConfigError,
    MessageNotFoundError,
    NoMatchError,
)
from i18nbundle.enums import PluralCategory
from i18nbundle.locale_utils import get_system_preferences
from i18nbundle.localization.types import CountryCode, MessageId, TemplateData
from i18nbundle.runtime.message import Message, MessageTemplate
from i18nbundle.runtime.plural_rules import PluralCount
from i18nbundle.runtime.tags import LanguageTag, parse_preferences

if TYPE_CHECKING:
    from i18nbundle.runtime.bundle import Bundle

__all__ = ["LocalizeConfig", "Localizer"]

logger = logging.getLogger(__name__)

# Template data keys that receive the plural count unless the caller sets them
_COUNT_KEYS: tuple[str, ...] = ("PluralCount", "Count")


@dataclass(frozen=True, slots=True)
class LocalizeConfig:
    """One localization request.

    Attributes:
        message_id: Message to resolve. Defaults to default_message.id.
        default_message: Used when the bundle has no template for the
            resolved language. Compiled per call and never stored.
        plural_count: Selects the plural form; also exposed to the template
            as ``PluralCount`` and ``Count`` unless template_data sets them
        template_data: Placeholder values
        country_code: Overrides the Localizer's country for this call only
    """

    message_id: MessageId = ""
    default_message: Message | None = None
    plural_count: PluralCount | None = None
    template_data: TemplateData | None = None
    country_code: CountryCode | None = None

    @property
    def effective_message_id(self) -> MessageId:
        if self.message_id:
            return self.message_id
        if self.default_message is not None:
            return self.default_message.id
        return ""


class Localizer:
    """Resolves messages for one set of language preferences.

    Lightweight: create one per request. Holds only a bundle reference, the
    parsed preferences and a country code; never mutates the bundle.

    Country Precedence:
        ``LocalizeConfig.country_code`` (this call only) >
        the country bound at construction. Use with_country_code() to derive
        a localizer bound to another country; localizers are immutable.

    Examples:
        >>> bundle = Bundle("en")
        >>> bundle.add_messages("gb", "en", Message(id="HelloPerson", other="Hello {{Name}}"))
        >>> localizer = Localizer(bundle, "tr, en;q=0.8", country_code="gb")
        >>> localizer.localize(LocalizeConfig("HelloPerson", template_data={"Name": "Bob"}))
        ('Hello Bob', ())
    """

    __slots__ = ("_bundle", "_country_code", "_preferences")

    def __init__(
        self,
        bundle: Bundle,
        *preferences: str | LanguageTag,
        country_code: CountryCode,
    ) -> None:
        """Initialize a localizer.

        Args:
            bundle: Populated bundle (treated as read-only)
            *preferences: Language preferences in priority order. Strings may be
                single tags or Accept-Language values; malformed entries are skipped.
            country_code: Country used when a request does not name one
        """
        self._bundle = bundle
        self._preferences: tuple[LanguageTag, ...] = parse_preferences(preferences)
        self._country_code = country_code

    @classmethod
    def for_system_locale(cls, bundle: Bundle, *, country_code: CountryCode) -> Localizer:
        """Create a localizer from the user's LANGUAGE list and system locale."""
        return cls(bundle, *get_system_preferences(), country_code=country_code)

    @property
    def preferences(self) -> tuple[LanguageTag, ...]:
        return self._preferences

    @property
    def country_code(self) -> CountryCode:
        return self._country_code

    def __repr__(self) -> str:
        preferences = ", ".join(str(tag) for tag in self._preferences)
        return f"Localizer(preferences=[{preferences}], country_code={self._country_code!r})"

    def with_country_code(self, country_code: CountryCode) -> Localizer:
        """Return a localizer with the same preferences bound to country_code."""
        return Localizer(self._bundle, *self._preferences, country_code=country_code)

    def localize(self, config: LocalizeConfig) -> tuple[str, tuple[I18nError, ...]]:
        """Resolve and render a message.

        Never raises for resolution failures. On failure the result is a
        ``{message-id}`` placeholder and errors holds the cause.

        Returns:
            (text, errors)
        """
        text, _, errors = self.localize_with_tag(config)
        return text, errors

    def localize_with_tag(
        self, config: LocalizeConfig
    ) -> tuple[str, LanguageTag | None, tuple[I18nError, ...]]:
        """Like localize() but also returns the language the text resolved in.

        When no registered language matches and config carries a default
        message, that message renders in the bundle's default language.

        Returns:
            (text, tag, errors); tag is None if no language matched and there
            was no default message
        """
        message_id = config.effective_message_id
        country_code = (
            config.country_code if config.country_code is not None else self._country_code
        )
        tag: LanguageTag | None = None
        try:
            if not message_id:
                raise InvalidLocalizeConfigError(
                    ErrorTemplate.invalid_config("message_id or default_message.id is required")
                )
            try:
                tag, _ = self._bundle.match(country_code, self._preferences)
            except NoMatchError:
                if config.default_message is None:
                    raise
                # Nothing registered fits: the default message speaks the default language
                tag = self._bundle.default_language
                logger.debug(
                    "No language matched for country %r, rendering default message %r in %s",
                    country_code,
                    message_id,
                    tag,
                )
                template = MessageTemplate.compile(config.default_message)
            else:
                template = self._template(country_code, tag, message_id, config.default_message)
            text = self._render(template, tag, config)
        except I18nError as e:
            logger.warning("Failed to localize %r for country %r: %s", message_id, country_code, e)
            fallback = (
                FALLBACK_MISSING_MESSAGE.format(id=message_id) if message_id else FALLBACK_INVALID
            )
            return fallback, tag, (e,)

        logger.debug("Localized %r in %s/%s", message_id, country_code, tag)
        return text, tag, ()

    def localize_message(self, message: Message) -> tuple[str, tuple[I18nError, ...]]:
        """Resolve message.id, falling back to message itself."""
        return self.localize(LocalizeConfig(default_message=message))

    def must_localize(self, config: LocalizeConfig) -> str:
        """Resolve and render a message, raising on any failure.

        Intended for startup-time and test code where a missing translation is
        a programming error. Request-serving code should call localize().

        Raises:
            I18nError: The resolution failure
        """
        text, _, errors = self.localize_with_tag(config)
        if errors:
            raise errors[0]
        return text

    def _template(
        self,
        country_code: CountryCode,
        tag: LanguageTag,
        message_id: MessageId,
        default_message: Message | None,
    ) -> MessageTemplate:
        template = self._bundle.get_message_template(country_code, tag, message_id)
        if template is not None:
            return template
        if default_message is not None:
            logger.debug("Using default message for %r in %s/%s", message_id, country_code, tag)
            return MessageTemplate.compile(default_message)
        raise MessageNotFoundError(
            ErrorTemplate.message_not_found(message_id, str(tag), country_code),
            message_id=message_id,
            tag=str(tag),
            country_code=country_code,
        )

    def _render(self, template: MessageTemplate, tag: LanguageTag, config: LocalizeConfig) -> str:
        category = PluralCategory.OTHER
        if config.plural_count is not None and template.has_plural_forms:
            category = self._bundle.plural_category(tag, config.plural_count)

        data = dict(config.template_data or {})
        if config.plural_count is not None:
            for key in _COUNT_KEYS:
                data.setdefault(key, config.plural_count)

        return template.template_for(category).render(
            data, missing=self._bundle.missing_data, message_id=template.id
        )
