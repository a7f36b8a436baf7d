"""Bundle - message template store with per-country language matching.

Python 3.13+. External dependency: Babel (CLDR plural rules).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from i18nbundle.diagnostics import ErrorTemplate, NoPluralRuleError
from i18nbundle.enums import MatchConfidence, MissingDataPolicy, PluralCategory
from i18nbundle.locale_utils import get_system_locale
from i18nbundle.localization.loading import (
    MessageFile,
    MessageLoader,
    UnmarshalFunc,
    default_unmarshal_funcs,
    parse_message_file_bytes,
)
from i18nbundle.localization.types import CountryCode, MessageId
from i18nbundle.runtime.matcher import LanguageMatcher
from i18nbundle.runtime.message import Message, MessageTemplate
from i18nbundle.runtime.plural_rules import PluralCount, PluralRules, RuleSpec, default_rules
from i18nbundle.runtime.tags import LanguageTag, parse_preferences

__all__ = ["Bundle"]

logger = logging.getLogger(__name__)


class Bundle:
    """Message templates and plural rules for every country and language served.

    Most applications need a single bundle, created and populated at startup.

    Thread Safety:
        Bundles are NOT locked. Populate the bundle fully (add_messages,
        register_*, load_*) before sharing it; afterwards any number of
        Localizers may read it concurrently. Mutating a bundle while
        Localizers read from it is unsupported; callers that need incremental
        updates must quiesce readers themselves.

    Country Scoping:
        Every country code has its own set of registered languages and its
        own matcher. A language registered under one country never satisfies
        a lookup for another.

    Examples:
        >>> bundle = Bundle("en")
        >>> bundle.add_messages("gb", "en", Message(id="HelloPerson", other="Hello {{Name}}"))
        >>> bundle.language_tags("gb")
        (LanguageTag(language='en', script=None, territory=None, variant=None),)
        >>> bundle.get_message_template("gb", "en", "HelloPerson").id
        'HelloPerson'
        >>> bundle.get_message_template("tr", "en", "HelloPerson") is None
        True
    """

    __slots__ = (
        "_country_tags",
        "_default_language",
        "_matchers",
        "_missing_data",
        "_plural_rules",
        "_templates",
        "_unmarshal_funcs",
    )

    def __init__(
        self,
        default_language: str | LanguageTag,
        /,
        *,
        missing_data: MissingDataPolicy = MissingDataPolicy.ERROR,
        plural_rules: PluralRules | None = None,
        unmarshal_funcs: Mapping[str, UnmarshalFunc] | None = None,
    ) -> None:
        """Initialize an empty bundle.

        Args:
            default_language: Language used when no preference matches
                (only for countries where it is registered) [positional-only]
            missing_data: How placeholders without template data render.
                One policy per bundle: ERROR (default) or EMPTY.
            plural_rules: Plural rule table (default: CLDR rules from Babel
                with the constructed-language tag aliased to English)
            unmarshal_funcs: Extra decoders keyed by file format, added to
                the built-in json and toml decoders

        Raises:
            InvalidLanguageTagError: If default_language is malformed
        """
        self._default_language = LanguageTag.parse(default_language)
        self._missing_data = MissingDataPolicy(missing_data)
        self._plural_rules = plural_rules if plural_rules is not None else default_rules()
        self._unmarshal_funcs: dict[str, UnmarshalFunc] = default_unmarshal_funcs()
        self._unmarshal_funcs.update(unmarshal_funcs or {})

        self._templates: dict[
            tuple[CountryCode, LanguageTag], dict[MessageId, MessageTemplate]
        ] = {}
        # Insertion-ordered: language_tags() reports tags in registration order
        self._country_tags: dict[CountryCode, list[LanguageTag]] = {}
        self._matchers: dict[CountryCode, LanguageMatcher] = {}

        logger.info(
            "Bundle initialized (default_language=%s, missing_data=%s)",
            self._default_language,
            self._missing_data,
        )

    @classmethod
    def for_system_locale(cls, **kwargs: object) -> Bundle:
        """Create a bundle whose default language is the system locale.

        Raises:
            RuntimeError: If the system locale cannot be determined
        """
        system_locale = get_system_locale(raise_on_failure=True)
        return cls(system_locale, **kwargs)  # type: ignore[arg-type]

    @property
    def default_language(self) -> LanguageTag:
        return self._default_language

    @property
    def missing_data(self) -> MissingDataPolicy:
        return self._missing_data

    @property
    def plural_rules(self) -> PluralRules:
        return self._plural_rules

    def __repr__(self) -> str:
        message_count = sum(len(templates) for templates in self._templates.values())
        return (
            f"Bundle(default_language={str(self._default_language)!r}, "
            f"countries={len(self._country_tags)}, messages={message_count})"
        )

    # ------------------------------------------------------------------
    # Setup phase
    # ------------------------------------------------------------------

    def register_plural_rule(self, tag: str | LanguageTag, rule: RuleSpec) -> None:
        """Add or replace the plural rule for a language.

        Args:
            tag: Language the rule applies to
            rule: Callable returning a category name, or CLDR rule strings
                such as ``{"one": "n is 1"}``
        """
        self._plural_rules.register(tag, rule)

    def register_unmarshal_func(self, file_format: str, func: UnmarshalFunc) -> None:
        """Register a decoder for message files ending in ``.{file_format}``.

        Example:
            >>> import yaml
            >>> bundle.register_unmarshal_func("yaml", yaml.safe_load)
        """
        self._unmarshal_funcs[file_format] = func
        logger.debug("Registered unmarshal function for format: %s", file_format)

    def add_messages(
        self, country_code: CountryCode, tag: str | LanguageTag, *messages: Message
    ) -> None:
        """Add messages for a language within a country.

        All-or-nothing: every message is compiled before anything is stored,
        so a failure leaves the bundle unchanged. Re-adding an ID replaces the
        earlier template.

        Args:
            country_code: Market/deployment key
            tag: Language the messages are written in
            *messages: Messages to add

        Raises:
            InvalidLanguageTagError: If tag is malformed
            NoPluralRuleError: If no plural rule applies to tag
            TemplateCompileError: If any message is malformed
        """
        language_tag = LanguageTag.parse(tag)
        if self._plural_rules.rule_for(language_tag) is None:
            raise NoPluralRuleError(
                ErrorTemplate.no_plural_rule(str(language_tag)), tag=str(language_tag)
            )

        compiled = [MessageTemplate.compile(message) for message in messages]
        if not compiled:
            return

        key = (country_code, language_tag)
        templates = self._templates.get(key)
        if templates is None:
            templates = self._templates[key] = {}
            self._add_tag(country_code, language_tag)

        for template in compiled:
            if template.id in templates:
                logger.debug(
                    "Replacing message %s for %s/%s", template.id, country_code, language_tag
                )
            templates[template.id] = template

        logger.debug(
            "Added %d messages for %s/%s", len(compiled), country_code, language_tag
        )

    def _add_tag(self, country_code: CountryCode, tag: LanguageTag) -> None:
        tags = self._country_tags.setdefault(country_code, [])
        tags.append(tag)
        self._matchers[country_code] = LanguageMatcher(
            tags, self._default_language, country_code=country_code
        )
        logger.debug("Registered language %s for country %s", tag, country_code)

    # ------------------------------------------------------------------
    # Message files
    # ------------------------------------------------------------------

    def parse_message_file_bytes(
        self, data: bytes, path: str, country_code: CountryCode
    ) -> MessageFile:
        """Parse message-file bytes and add their messages.

        The language comes from the file name (``active.en.toml`` -> ``en``)
        and the format from its extension.

        Raises:
            InvalidLanguageTagError: If the file name does not name a language
            NoUnmarshalFuncError: If the format has no registered decoder
            MessageFileFormatError: If decoded content has an unsupported shape
            NoPluralRuleError: If the language has no plural rule
            TemplateCompileError: If any message is malformed
        """
        message_file = parse_message_file_bytes(data, path, self._unmarshal_funcs)
        self.add_messages(country_code, message_file.tag, *message_file.messages)
        return message_file

    def load_message_file(self, path: str | Path, country_code: CountryCode) -> MessageFile:
        """Read a message file from disk and add its messages.

        Raises:
            OSError: If the file cannot be read
            I18nError: As parse_message_file_bytes
        """
        data = Path(path).read_bytes()
        message_file = self.parse_message_file_bytes(data, str(path), country_code)
        logger.info(
            "Loaded %d messages from %s for country %s",
            len(message_file.messages),
            path,
            country_code,
        )
        return message_file

    def load_message_files(
        self,
        loader: MessageLoader,
        country_code: CountryCode,
        file_names: Iterable[str],
    ) -> tuple[MessageFile, ...]:
        """Load several files for one country through a loader.

        Stops at the first failure; files loaded before it stay loaded.

        Example:
            >>> loader = PathMessageLoader("lang/{country}")
            >>> bundle.load_message_files(loader, "tr", ["active.tr.toml", "active.en.toml"])
        """
        loaded: list[MessageFile] = []
        for file_name in file_names:
            path = loader.describe_path(country_code, file_name)
            data = loader.load(country_code, file_name)
            loaded.append(self.parse_message_file_bytes(data, path, country_code))
            logger.info("Loaded %s for country %s", path, country_code)
        return tuple(loaded)

    # ------------------------------------------------------------------
    # Read phase
    # ------------------------------------------------------------------

    def get_message_template(
        self, country_code: CountryCode, tag: str | LanguageTag, message_id: MessageId
    ) -> MessageTemplate | None:
        """Look up a compiled template. Absence is not an error here."""
        templates = self._templates.get((country_code, LanguageTag.parse(tag)))
        if templates is None:
            return None
        return templates.get(message_id)

    def has_message(
        self, country_code: CountryCode, tag: str | LanguageTag, message_id: MessageId
    ) -> bool:
        return self.get_message_template(country_code, tag, message_id) is not None

    def get_message_ids(self, country_code: CountryCode, tag: str | LanguageTag) -> list[str]:
        """IDs registered for a country and language, in insertion order."""
        return list(self._templates.get((country_code, LanguageTag.parse(tag)), {}))

    def language_tags(self, country_code: CountryCode) -> tuple[LanguageTag, ...]:
        """Languages registered for a country, in registration order."""
        return tuple(self._country_tags.get(country_code, ()))

    def country_codes(self) -> tuple[CountryCode, ...]:
        return tuple(self._country_tags)

    def match(
        self, country_code: CountryCode, preferences: Iterable[str | LanguageTag]
    ) -> tuple[LanguageTag, MatchConfidence]:
        """Best registered language of a country for ranked preferences.

        Raises:
            NoMatchError: If nothing matches and the default language is not
                registered for country_code
        """
        matcher = self._matchers.get(country_code)
        if matcher is None:
            matcher = LanguageMatcher((), self._default_language, country_code=country_code)
        return matcher.match(parse_preferences(preferences))

    def plural_category(self, tag: str | LanguageTag, count: PluralCount) -> PluralCategory:
        """CLDR plural category of count in a language.

        Raises:
            NoPluralRuleError: If no rule applies to tag
            InvalidPluralCountError: If count is not numeric
            InvalidPluralCategoryError: If a registered rule returns an unknown category
        """
        return self._plural_rules.select(LanguageTag.parse(tag), count)
