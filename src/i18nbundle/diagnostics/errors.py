"""Exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object and keep
the Diagnostic for tools that want more than the rendered text.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class I18nError(Exception):
    """Base exception for all i18nbundle errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class NoPluralRuleError(I18nError):
    """No plural rule is registered for a language.

    Raised by Bundle.add_messages before anything is written.

    Attributes:
        tag: Canonical language tag without a rule
    """

    def __init__(self, message: str | Diagnostic, *, tag: str = "") -> None:
        super().__init__(message)
        self.tag = tag


class NoMatchError(I18nError):
    """No registered language satisfies the caller's preferences.

    Only raised when the bundle's default language is not registered for the
    country code either.

    Attributes:
        country_code: Country code whose tags were searched
        preferences: Requested tags in rank order
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        country_code: str = "",
        preferences: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.country_code = country_code
        self.preferences = preferences


class MessageNotFoundError(I18nError):
    """Message ID absent for the resolved language and no default supplied.

    Attributes:
        message_id: Requested message identifier
        tag: Language tag that was searched
        country_code: Country code that was searched
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        message_id: str = "",
        tag: str = "",
        country_code: str = "",
    ) -> None:
        super().__init__(message)
        self.message_id = message_id
        self.tag = tag
        self.country_code = country_code


class TemplateCompileError(I18nError):
    """A message cannot be compiled into a template.

    Covers malformed placeholder syntax and messages without 'other' text.

    Attributes:
        message_id: Message being compiled
    """

    def __init__(self, message: str | Diagnostic, *, message_id: str = "") -> None:
        super().__init__(message)
        self.message_id = message_id


class MissingTemplateDataError(I18nError):
    """A placeholder has no corresponding entry in the template data.

    Attributes:
        name: Placeholder path
        message_id: Message being rendered
    """

    def __init__(
        self, message: str | Diagnostic, *, name: str = "", message_id: str = ""
    ) -> None:
        super().__init__(message)
        self.name = name
        self.message_id = message_id


class InvalidPluralCountError(I18nError):
    """Plural count is not numeric.

    Attributes:
        count: The rejected value
    """

    def __init__(self, message: str | Diagnostic, *, count: object = None) -> None:
        super().__init__(message)
        self.count = count


class InvalidPluralCategoryError(I18nError):
    """A registered plural rule returned an unknown category name.

    Attributes:
        category: The value the rule returned
    """

    def __init__(self, message: str | Diagnostic, *, category: object = None) -> None:
        super().__init__(message)
        self.category = category


class NoUnmarshalFuncError(I18nError):
    """No unmarshal function is registered for a message file's format.

    Attributes:
        format_name: Format derived from the file extension
        path: Message file path
    """

    def __init__(
        self, message: str | Diagnostic, *, format_name: str = "", path: str = ""
    ) -> None:
        super().__init__(message)
        self.format_name = format_name
        self.path = path


class MessageFileFormatError(I18nError):
    """Decoded message file content has an unsupported shape.

    Attributes:
        path: Message file path
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class InvalidLanguageTagError(I18nError, ValueError):
    """String cannot be parsed as a language tag.

    Subclasses ValueError so callers validating user input can catch either.

    Attributes:
        value: The rejected string
    """

    def __init__(self, message: str | Diagnostic, *, value: str = "") -> None:
        super().__init__(message)
        self.value = value


class InvalidLocalizeConfigError(I18nError, ValueError):
    """LocalizeConfig names neither a message ID nor a default message."""
