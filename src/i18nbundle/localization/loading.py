"""Message file loading infrastructure.

Turns raw message-file bytes into Message records. The bundle stays free of
I/O and format knowledge: formats are decoded by registered unmarshal
functions and files are read by loaders.

Components:
    UnmarshalFunc - Decoder signature (bytes -> plain Python data)
    MessageFile - Immutable result of parsing one message file
    MessageLoader - Protocol for fetching message-file bytes
    PathMessageLoader - Disk-based loader with path-traversal prevention

File naming convention (``lang/gb/active.en.toml``):
    format   text after the last "."                       -> "toml"
    language text after the second-to-last "." or the last
             path separator, before the format             -> "en"

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Protocol

from i18nbundle.constants import MESSAGE_ID_SEPARATOR
from i18nbundle.diagnostics import (
    ErrorTemplate,
    MessageFileFormatError,
    NoUnmarshalFuncError,
)
from i18nbundle.localization.types import CountryCode
from i18nbundle.runtime.message import Message
from i18nbundle.runtime.tags import LanguageTag

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Decoding
    "UnmarshalFunc",
    "default_unmarshal_funcs",
    # Parsing
    "MessageFile",
    "parse_message_file_bytes",
    "parse_path",
    "messages_from_raw",
    # Loaders
    "MessageLoader",
    "PathMessageLoader",
]

logger = logging.getLogger(__name__)

type UnmarshalFunc = Callable[[bytes], object]
"""Decodes raw file bytes into dicts, lists and strings."""

# Keys that mark a mapping as a single message rather than a namespace.
# Matched case-insensitively ("Other" and "other" are the same key).
_FIELD_KEYS: dict[str, str] = {
    f.name.replace("_", ""): f.name for f in fields(Message)
}


def _unmarshal_json(data: bytes) -> object:
    return json.loads(data)


def _unmarshal_toml(data: bytes) -> object:
    return tomllib.loads(data.decode("utf-8"))


def default_unmarshal_funcs() -> dict[str, UnmarshalFunc]:
    """Decoders available without registration: json and toml."""
    return {"json": _unmarshal_json, "toml": _unmarshal_toml}


def parse_path(path: str) -> tuple[str, str]:
    """Split a message file path into (language, format).

    Examples:
        >>> parse_path("lang/tr/active.en.toml")
        ('en', 'toml')
        >>> parse_path("en-US.json")
        ('en-US', 'json')
        >>> parse_path("messages")
        ('', '')
    """
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, file_format = name.rpartition(".")
    if not dot:
        return "", ""
    return stem.rsplit(".", 1)[-1], file_format


@dataclass(frozen=True, slots=True)
class MessageFile:
    """Parsed contents of one message file.

    Attributes:
        path: Path the bytes came from (used for tag and format detection)
        tag: Language the messages are written in
        format: Format name the bytes were decoded with
        messages: Messages in file order
    """

    path: str
    tag: LanguageTag
    format: str
    messages: tuple[Message, ...] = ()


def parse_message_file_bytes(
    data: bytes,
    path: str,
    unmarshal_funcs: Mapping[str, UnmarshalFunc],
) -> MessageFile:
    """Decode message-file bytes using the format implied by path.

    Args:
        data: Raw file content
        path: File path; its name determines language tag and format
        unmarshal_funcs: Decoders keyed by format name

    Returns:
        MessageFile (with no messages when data is empty)

    Raises:
        InvalidLanguageTagError: If the path does not name a valid language
        NoUnmarshalFuncError: If no decoder is registered for the format
        MessageFileFormatError: If the decoded content has an unsupported shape
        Exception: Whatever the decoder raises for malformed input
    """
    language, file_format = parse_path(path)
    tag = LanguageTag.parse(language)

    if not data:
        return MessageFile(path=path, tag=tag, format=file_format)

    unmarshal = unmarshal_funcs.get(file_format)
    if unmarshal is None:
        raise NoUnmarshalFuncError(
            ErrorTemplate.no_unmarshal_func(file_format, path),
            format_name=file_format,
            path=path,
        )

    messages = messages_from_raw(unmarshal(data), path=path)
    logger.debug("Parsed %d messages from %s", len(messages), path)
    return MessageFile(path=path, tag=tag, format=file_format, messages=messages)


def messages_from_raw(raw: object, *, path: str = "") -> tuple[Message, ...]:
    """Convert decoded message-file data into Message records.

    Accepted shapes:
        {"Hello": "Hello {{Name}}"}                       string -> other text
        {"Cats": {"one": "a cat", "other": "cats"}}        message mapping
        {"menu": {"open": "Open"}}                         nested -> "menu.open"
        [{"id": "Hello", "other": "Hello"}]                list with explicit IDs
        {"id": "Hello", "other": "Hello"}                  single message

    Raises:
        MessageFileFormatError: For any other shape
    """
    match raw:
        case None:
            return ()
        case list():
            return tuple(_message_from_item(item, path) for item in raw)
        case Mapping() if _is_message(raw):
            return (_build_message(raw, "", path),)
        case Mapping():
            return tuple(_walk(raw, (), path))
        case _:
            raise MessageFileFormatError(
                ErrorTemplate.message_file_invalid(
                    f"unsupported top-level value of type {type(raw).__name__}", path
                ),
                path=path,
            )


def _is_message(value: Mapping[object, object]) -> bool:
    """A mapping is a message if any field key holds a string."""
    return any(
        isinstance(key, str) and key.lower() in _FIELD_KEYS and isinstance(item, str)
        for key, item in value.items()
    )


def _walk(
    namespace: Mapping[object, object], prefix: tuple[str, ...], path: str
) -> list[Message]:
    messages: list[Message] = []
    for key, value in namespace.items():
        id_path = (*prefix, str(key))
        message_id = MESSAGE_ID_SEPARATOR.join(id_path)
        match value:
            case str():
                messages.append(Message(id=message_id, other=value))
            case Mapping() if _is_message(value):
                messages.append(_build_message(value, message_id, path))
            case Mapping():
                messages.extend(_walk(value, id_path, path))
            case _:
                raise MessageFileFormatError(
                    ErrorTemplate.message_file_invalid(
                        f"value of {message_id!r} has unsupported type {type(value).__name__}",
                        path,
                    ),
                    path=path,
                )
    return messages


def _message_from_item(item: object, path: str) -> Message:
    if not isinstance(item, Mapping) or not _is_message(item):
        raise MessageFileFormatError(
            ErrorTemplate.message_file_invalid("list entries must be message mappings", path),
            path=path,
        )
    return _build_message(item, "", path)


def _build_message(value: Mapping[object, object], message_id: str, path: str) -> Message:
    """Build a Message from a field mapping.

    A nested key path wins over an explicit "id" field.
    """
    kwargs: dict[str, str] = {}
    for key, item in value.items():
        name = _FIELD_KEYS.get(str(key).lower())
        if name is None:
            continue
        if not isinstance(item, str):
            raise MessageFileFormatError(
                ErrorTemplate.message_file_invalid(
                    f"field {key!r} must be a string, got {type(item).__name__}", path
                ),
                path=path,
            )
        kwargs[name] = item
    if message_id:
        kwargs["id"] = message_id
    kwargs.setdefault("id", "")
    return Message(**kwargs)


class MessageLoader(Protocol):
    """Protocol for fetching message-file bytes for a country.

    Implementations only do I/O; parsing happens in the bundle.

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, files: dict[str, bytes]) -> None:
        ...         self.files = files
        ...     def load(self, country_code: str, file_name: str) -> bytes:
        ...         return self.files[f"{country_code}/{file_name}"]
        ...     def describe_path(self, country_code: str, file_name: str) -> str:
        ...         return f"{country_code}/{file_name}"
    """

    def load(self, country_code: CountryCode, file_name: str) -> bytes:
        """Return raw bytes of file_name for country_code.

        Raises:
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """

    def describe_path(self, country_code: CountryCode, file_name: str) -> str:
        """Return the path the bundle uses for tag and format detection."""
        return f"{country_code}/{file_name}"


@dataclass(frozen=True, slots=True)
class PathMessageLoader:
    """File system loader using a ``{country}`` path template.

    Security:
        Country codes containing path separators or ".." are rejected, as are
        absolute or escaping file names. Resolved paths must stay inside
        root_dir.

    Example:
        >>> loader = PathMessageLoader("lang/{country}")
        >>> data = loader.load("tr", "active.en.toml")
        # Reads: lang/tr/active.en.toml

    Attributes:
        base_path: Path template with {country} placeholder
        root_dir: Fixed root directory for traversal validation.
                  Defaults to the static prefix of base_path.
    """

    base_path: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the resolved root directory.

        Raises:
            ValueError: If base_path has no {country} placeholder
        """
        if "{country}" not in self.base_path:
            msg = f"base_path must contain '{{country}}' placeholder, got: '{self.base_path}'"
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{country}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    def describe_path(self, country_code: CountryCode, file_name: str) -> str:
        country_path = self.base_path.replace("{country}", country_code)
        return f"{country_path}/{file_name}"

    def load(self, country_code: CountryCode, file_name: str) -> bytes:
        """Read a message file from disk.

        Raises:
            ValueError: If country_code or file_name would escape root_dir
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        if not country_code or ".." in country_code or "/" in country_code or "\\" in country_code:
            msg = f"Unsafe country code for path lookup: '{country_code}'"
            raise ValueError(msg)
        if not file_name or Path(file_name).is_absolute() or ".." in file_name:
            msg = f"Unsafe message file name: '{file_name}'"
            raise ValueError(msg)

        country_dir = Path(self.base_path.replace("{country}", country_code)).resolve()
        full_path = (country_dir / file_name).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"country='{country_code}', file_name='{file_name}'"
            )
            raise ValueError(msg)

        return full_path.read_bytes()
