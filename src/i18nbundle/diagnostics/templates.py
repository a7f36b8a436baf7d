"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def message_not_found(message_id: str, tag: str, country_code: str) -> Diagnostic:
        """Message ID absent for the resolved language and no default supplied.

        Args:
            message_id: The message identifier that was not found
            tag: Language tag the lookup used
            country_code: Country code the lookup used

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        msg = f"Message '{message_id}' not found for '{tag}' in country '{country_code}'"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=msg,
            hint="Add the message to a loaded message file or pass a default message",
            location=message_id,
        )

    @staticmethod
    def no_language_match(
        country_code: str, preferences: tuple[str, ...], default_language: str
    ) -> Diagnostic:
        """No registered tag satisfies the preferences and the default is unregistered.

        Args:
            country_code: Country code whose tags were searched
            preferences: Requested tags in rank order
            default_language: The bundle's default language

        Returns:
            Diagnostic for NO_LANGUAGE_MATCH
        """
        requested = ", ".join(preferences) if preferences else "<none>"
        msg = (
            f"No language registered for country '{country_code}' matches "
            f"[{requested}] and default language '{default_language}' is not registered"
        )
        return Diagnostic(
            code=DiagnosticCode.NO_LANGUAGE_MATCH,
            message=msg,
            hint=f"Add messages for '{default_language}' under country '{country_code}'",
        )

    @staticmethod
    def template_data_missing(name: str, message_id: str) -> Diagnostic:
        """Placeholder references a key absent from the template data.

        Args:
            name: Placeholder path (e.g., "Name" or "User.Name")
            message_id: Message whose template referenced it

        Returns:
            Diagnostic for TEMPLATE_DATA_MISSING
        """
        msg = f"No template data for placeholder '{name}'"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_DATA_MISSING,
            message=msg,
            hint=f"Pass '{name}' in template_data",
            location=message_id or None,
        )

    @staticmethod
    def no_plural_rule(tag: str) -> Diagnostic:
        """No plural rule registered for a language.

        Args:
            tag: Language tag without a rule

        Returns:
            Diagnostic for NO_PLURAL_RULE
        """
        msg = f"No plural rule registered for '{tag}'"
        return Diagnostic(
            code=DiagnosticCode.NO_PLURAL_RULE,
            message=msg,
            hint="Register one with Bundle.register_plural_rule()",
        )

    @staticmethod
    def invalid_plural_count(count: object) -> Diagnostic:
        """Plural count is not a number or numeric string.

        Args:
            count: The rejected value

        Returns:
            Diagnostic for INVALID_PLURAL_COUNT
        """
        msg = f"Invalid plural count {count!r} ({type(count).__name__})"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_COUNT,
            message=msg,
            hint="Use an int, float, Decimal, or numeric string",
        )

    @staticmethod
    def invalid_plural_category(category: object, operand: object) -> Diagnostic:
        """Registered plural rule returned something that is not a category name.

        Args:
            category: The value the rule returned
            operand: The count the rule was evaluated for

        Returns:
            Diagnostic for INVALID_PLURAL_CATEGORY
        """
        msg = f"Plural rule returned {category!r} for {operand!r}, not a plural category"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_CATEGORY,
            message=msg,
            hint="Rules must return one of: zero, one, two, few, many, other",
        )

    @staticmethod
    def template_syntax(reason: str, text: str, position: int, message_id: str) -> Diagnostic:
        """Malformed interpolation syntax in a message text.

        Args:
            reason: What is wrong
            text: The template text being compiled
            position: Character offset of the problem
            message_id: Message the text belongs to

        Returns:
            Diagnostic for TEMPLATE_SYNTAX
        """
        msg = f"Invalid template {text!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_SYNTAX,
            message=msg,
            hint="Placeholders look like {{Name}} or {{.User.Name}}",
            location=message_id or None,
            position=position,
        )

    @staticmethod
    def message_no_other(message_id: str) -> Diagnostic:
        """Message has no 'other' text.

        Args:
            message_id: The incomplete message

        Returns:
            Diagnostic for MESSAGE_NO_OTHER
        """
        msg = f"Message '{message_id}' has no 'other' text"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_OTHER,
            message=msg,
            hint="Every message must define 'other'; plural forms are optional overrides",
            location=message_id,
        )

    @staticmethod
    def message_no_id() -> Diagnostic:
        """Message has an empty ID."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_ID,
            message="Message has no ID",
            hint="Set Message.id or use a nested key in the message file",
        )

    @staticmethod
    def no_unmarshal_func(format_name: str, path: str) -> Diagnostic:
        """No decoder registered for a message file format.

        Args:
            format_name: Format derived from the path extension
            path: Message file path

        Returns:
            Diagnostic for NO_UNMARSHAL_FUNC
        """
        msg = f"No unmarshal function registered for format '{format_name}'"
        return Diagnostic(
            code=DiagnosticCode.NO_UNMARSHAL_FUNC,
            message=msg,
            hint="Register one with Bundle.register_unmarshal_func()",
            location=path,
        )

    @staticmethod
    def message_file_invalid(reason: str, path: str) -> Diagnostic:
        """Decoded message file has an unsupported shape.

        Args:
            reason: What is wrong
            path: Message file path

        Returns:
            Diagnostic for MESSAGE_FILE_INVALID
        """
        msg = f"Invalid message file: {reason}"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_FILE_INVALID,
            message=msg,
            location=path,
        )

    @staticmethod
    def invalid_language_tag(value: str, reason: str) -> Diagnostic:
        """String cannot be parsed as a language tag.

        Args:
            value: The rejected string
            reason: Parser explanation

        Returns:
            Diagnostic for INVALID_LANGUAGE_TAG
        """
        msg = f"Invalid language tag {value!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_LANGUAGE_TAG,
            message=msg,
            hint="Use a BCP-47 tag such as 'en', 'en-US' or 'zh-Hans-CN'",
        )

    @staticmethod
    def invalid_config(reason: str) -> Diagnostic:
        """LocalizeConfig cannot be resolved.

        Args:
            reason: What is wrong

        Returns:
            Diagnostic for INVALID_CONFIG
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_CONFIG,
            message=f"Invalid localize config: {reason}",
        )
