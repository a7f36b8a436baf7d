"""Tests for localization.loading: path conventions, decoding and loaders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from i18nbundle.diagnostics import (
    DiagnosticCode,
    InvalidLanguageTagError,
    MessageFileFormatError,
    NoUnmarshalFuncError,
)
from i18nbundle.localization.loading import (
    PathMessageLoader,
    default_unmarshal_funcs,
    messages_from_raw,
    parse_message_file_bytes,
    parse_path,
)
from i18nbundle.runtime.message import Message
from i18nbundle.runtime.tags import LanguageTag


class TestParsePath:
    """File naming convention."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("lang/tr/active.en.toml", ("en", "toml")),
            ("en-US.json", ("en-US", "json")),
            ("active.zh-Hans.json", ("zh-Hans", "json")),
            ("C:\\lang\\gb\\active.en.json", ("en", "json")),
            ("lang/v1.2/en.json", ("en", "json")),
            ("messages", ("", "")),
        ],
    )
    def test_parse_path(self, path: str, expected: tuple[str, str]) -> None:
        assert parse_path(path) == expected


class TestMessagesFromRaw:
    """Decoded data shapes."""

    def test_flat_strings(self) -> None:
        assert messages_from_raw({"Hi": "Hello", "Bye": "Goodbye"}) == (
            Message(id="Hi", other="Hello"),
            Message(id="Bye", other="Goodbye"),
        )

    def test_message_mapping(self) -> None:
        raw = {"Cats": {"description": "cat count", "one": "a cat", "other": "cats"}}
        assert messages_from_raw(raw) == (
            Message(id="Cats", description="cat count", one="a cat", other="cats"),
        )

    def test_nested_namespaces_join_ids(self) -> None:
        raw = {"menu": {"file": {"open": "Open", "close": {"other": "Close"}}}}
        assert [m.id for m in messages_from_raw(raw)] == ["menu.file.open", "menu.file.close"]

    def test_field_keys_case_insensitive(self) -> None:
        raw = {"Cats": {"One": "a cat", "Other": "cats", "LeftDelim": "<", "RightDelim": ">"}}
        (message,) = messages_from_raw(raw)
        assert message == Message(
            id="Cats", one="a cat", other="cats", left_delim="<", right_delim=">"
        )

    def test_unknown_keys_ignored_in_message(self) -> None:
        (message,) = messages_from_raw({"Hi": {"other": "Hello", "translator": "Ada"}})
        assert message == Message(id="Hi", other="Hello")

    def test_key_path_wins_over_explicit_id(self) -> None:
        (message,) = messages_from_raw({"Hi": {"id": "Other", "other": "Hello"}})
        assert message.id == "Hi"

    def test_list_of_messages(self) -> None:
        raw = [{"id": "Hi", "other": "Hello"}, {"id": "Bye", "one": "Bye", "other": "Byes"}]
        assert [m.id for m in messages_from_raw(raw)] == ["Hi", "Bye"]

    def test_single_top_level_message(self) -> None:
        assert messages_from_raw({"id": "Hi", "other": "Hello"}) == (
            Message(id="Hi", other="Hello"),
        )

    def test_none_is_empty(self) -> None:
        assert messages_from_raw(None) == ()

    @pytest.mark.parametrize(
        "raw",
        [
            "just a string",
            42,
            [1, 2],
            [{"unrelated": 1}],
            {"Hi": 3},
            {"Hi": {"other": 3}},
        ],
    )
    def test_unsupported_shapes(self, raw: object) -> None:
        with pytest.raises(MessageFileFormatError) as exc_info:
            messages_from_raw(raw, path="active.en.json")
        assert exc_info.value.path == "active.en.json"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.MESSAGE_FILE_INVALID


class TestParseMessageFileBytes:
    """parse_message_file_bytes end to end."""

    def test_json(self) -> None:
        data = json.dumps({"Hi": "Hello"}).encode()
        message_file = parse_message_file_bytes(data, "active.en.json", default_unmarshal_funcs())
        assert message_file.tag == LanguageTag.parse("en")
        assert message_file.format == "json"
        assert message_file.path == "active.en.json"
        assert message_file.messages == (Message(id="Hi", other="Hello"),)

    def test_toml_nested_tables(self) -> None:
        data = b'[menu]\nopen = "Open"\n\n[menu.close]\nother = "Close"\n'
        unmarshal_funcs = default_unmarshal_funcs()
        message_file = parse_message_file_bytes(data, "tr/active.de.toml", unmarshal_funcs)
        assert [m.id for m in message_file.messages] == ["menu.open", "menu.close"]

    def test_empty_bytes_skip_decoder(self) -> None:
        """Empty content needs no decoder, even for an unknown format."""
        message_file = parse_message_file_bytes(b"", "active.en.yaml", {})
        assert message_file.messages == ()
        assert message_file.format == "yaml"

    def test_missing_decoder(self) -> None:
        with pytest.raises(NoUnmarshalFuncError) as exc_info:
            parse_message_file_bytes(b"{}", "active.en.json", {})
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.NO_UNMARSHAL_FUNC

    def test_invalid_language_in_name(self) -> None:
        with pytest.raises(InvalidLanguageTagError):
            parse_message_file_bytes(b"{}", "active.123.json", default_unmarshal_funcs())

    def test_no_language_in_name(self) -> None:
        with pytest.raises(InvalidLanguageTagError):
            parse_message_file_bytes(b"{}", "messages", default_unmarshal_funcs())


class TestPathMessageLoader:
    """Disk loader and traversal checks."""

    @pytest.fixture
    def lang_dir(self, tmp_path: Path) -> Path:
        country_dir = tmp_path / "lang" / "gb"
        country_dir.mkdir(parents=True)
        (country_dir / "active.en.json").write_bytes(b'{"Hi": "Hello"}')
        (tmp_path / "secret.en.json").write_bytes(b'{"Secret": "x"}')
        return tmp_path / "lang"

    def test_requires_country_placeholder(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="country"):
            PathMessageLoader(str(tmp_path))

    def test_load(self, lang_dir: Path) -> None:
        loader = PathMessageLoader(str(lang_dir / "{country}"))
        assert loader.load("gb", "active.en.json") == b'{"Hi": "Hello"}'

    def test_describe_path(self) -> None:
        loader = PathMessageLoader("lang/{country}")
        assert loader.describe_path("gb", "active.en.json") == "lang/gb/active.en.json"

    def test_missing_file(self, lang_dir: Path) -> None:
        loader = PathMessageLoader(str(lang_dir / "{country}"))
        with pytest.raises(FileNotFoundError):
            loader.load("gb", "active.fr.json")

    @pytest.mark.parametrize("country_code", ["", "..", "../gb", "gb/..", "a\\b"])
    def test_unsafe_country_code(self, lang_dir: Path, country_code: str) -> None:
        loader = PathMessageLoader(str(lang_dir / "{country}"))
        with pytest.raises(ValueError, match="Unsafe country code"):
            loader.load(country_code, "active.en.json")

    @pytest.mark.parametrize("file_name", ["", "../../secret.en.json", "/etc/passwd"])
    def test_unsafe_file_name(self, lang_dir: Path, file_name: str) -> None:
        loader = PathMessageLoader(str(lang_dir / "{country}"))
        with pytest.raises(ValueError, match="Unsafe message file name"):
            loader.load("gb", file_name)

    def test_symlink_escape_rejected(self, lang_dir: Path) -> None:
        link = lang_dir / "gb" / "escape.en.json"
        link.symlink_to(lang_dir.parent / "secret.en.json")
        loader = PathMessageLoader(str(lang_dir / "{country}"))
        with pytest.raises(ValueError, match="Path traversal"):
            loader.load("gb", "escape.en.json")

    def test_explicit_root_dir(self, lang_dir: Path) -> None:
        loader = PathMessageLoader(str(lang_dir / "{country}"), root_dir=str(lang_dir / "gb"))
        assert loader.load("gb", "active.en.json") == b'{"Hi": "Hello"}'
