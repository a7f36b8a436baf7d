"""Interpolation templates: compile message text once, render many times.

Template syntax:
    Hello {{Name}}            plain placeholder
    Hello {{ .Name }}         leading dot and surrounding spaces are allowed
    Hi {{.User.Name}}         dotted path through nested mappings

Delimiters default to ``{{``/``}}`` and can be replaced per message.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from i18nbundle.constants import DEFAULT_LEFT_DELIM, DEFAULT_RIGHT_DELIM, MAX_PLACEHOLDER_DEPTH
from i18nbundle.diagnostics import ErrorTemplate, MissingTemplateDataError, TemplateCompileError
from i18nbundle.enums import MissingDataPolicy

__all__ = [
    "CompiledTemplate",
    "Placeholder",
    "compile_template",
]

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Named slot in a template. ``path`` has one entry per dotted segment."""

    path: tuple[str, ...]

    @property
    def name(self) -> str:
        return ".".join(self.path)

    def lookup(self, data: Mapping[str, object]) -> object:
        """Walk path through nested mappings. Returns _MISSING when absent."""
        current: object = data
        for key in self.path:
            if not isinstance(current, Mapping) or key not in current:
                return _MISSING
            current = current[key]
        return current


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """Parsed template text: literal strings interleaved with placeholders.

    Attributes:
        source: Original text
        segments: Literal ``str`` pieces and ``Placeholder`` slots in order
    """

    source: str
    segments: tuple[str | Placeholder, ...]

    @property
    def placeholders(self) -> frozenset[str]:
        """Names of all placeholders referenced by this template."""
        return frozenset(seg.name for seg in self.segments if isinstance(seg, Placeholder))

    @property
    def is_literal(self) -> bool:
        return not any(isinstance(seg, Placeholder) for seg in self.segments)

    def render(
        self,
        data: Mapping[str, object] | None = None,
        *,
        missing: MissingDataPolicy = MissingDataPolicy.ERROR,
        message_id: str = "",
    ) -> str:
        """Substitute data into the template.

        Values render with ``str()``; ``None`` renders as an empty string.

        Args:
            data: Placeholder values keyed by name (nested mappings for dotted paths)
            missing: What to do with placeholders absent from data
            message_id: Reported in errors

        Returns:
            Rendered text

        Raises:
            MissingTemplateDataError: If a placeholder is absent and policy is ERROR
        """
        if self.is_literal:
            return self.source

        values = data if data is not None else {}
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, str):
                parts.append(segment)
                continue
            value = segment.lookup(values)
            if value is _MISSING:
                if missing is MissingDataPolicy.ERROR:
                    raise MissingTemplateDataError(
                        ErrorTemplate.template_data_missing(segment.name, message_id),
                        name=segment.name,
                        message_id=message_id,
                    )
                continue
            if value is not None:
                parts.append(str(value))
        return "".join(parts)


def compile_template(
    text: str,
    *,
    left_delim: str = DEFAULT_LEFT_DELIM,
    right_delim: str = DEFAULT_RIGHT_DELIM,
    message_id: str = "",
) -> CompiledTemplate:
    """Parse text into a CompiledTemplate.

    Args:
        text: Template text
        left_delim: Placeholder opening delimiter (empty means default)
        right_delim: Placeholder closing delimiter (empty means default)
        message_id: Reported in errors

    Returns:
        CompiledTemplate

    Raises:
        TemplateCompileError: On unterminated or empty placeholders and on
            path segments that are not identifiers

    Example:
        >>> compile_template("Hello {{Name}}!").render({"Name": "Bob"})
        'Hello Bob!'
    """
    left = left_delim or DEFAULT_LEFT_DELIM
    right = right_delim or DEFAULT_RIGHT_DELIM

    segments: list[str | Placeholder] = []
    pos = 0
    while pos < len(text):
        start = text.find(left, pos)
        if start == -1:
            segments.append(text[pos:])
            break
        if start > pos:
            segments.append(text[pos:start])

        inner_start = start + len(left)
        end = text.find(right, inner_start)
        if end == -1:
            raise _syntax_error("unterminated placeholder", text, start, message_id)

        segments.append(_parse_placeholder(text[inner_start:end], text, start, message_id))
        pos = end + len(right)

    return CompiledTemplate(source=text, segments=tuple(segments))


def _parse_placeholder(inner: str, text: str, position: int, message_id: str) -> Placeholder:
    name = inner.strip().removeprefix(".")
    if not name:
        raise _syntax_error("empty placeholder", text, position, message_id)

    path = tuple(name.split("."))
    if len(path) > MAX_PLACEHOLDER_DEPTH:
        raise _syntax_error(
            f"placeholder path deeper than {MAX_PLACEHOLDER_DEPTH}", text, position, message_id
        )
    for key in path:
        if not key.isidentifier():
            raise _syntax_error(f"invalid placeholder name {name!r}", text, position, message_id)
    return Placeholder(path)


def _syntax_error(reason: str, text: str, position: int, message_id: str) -> TemplateCompileError:
    return TemplateCompileError(
        ErrorTemplate.template_syntax(reason, text, position, message_id),
        message_id=message_id,
    )
