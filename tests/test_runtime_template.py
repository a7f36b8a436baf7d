"""Tests for runtime.template: placeholder compilation and rendering."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nbundle.diagnostics import (
    DiagnosticCode,
    MissingTemplateDataError,
    TemplateCompileError,
)
from i18nbundle.enums import MissingDataPolicy
from i18nbundle.runtime.template import Placeholder, compile_template

# Text that can never contain a placeholder delimiter
_plain_text = st.text(alphabet=st.characters(blacklist_characters="{}"), max_size=40)


class TestCompile:
    """compile_template parsing."""

    def test_literal(self) -> None:
        template = compile_template("Hello world")
        assert template.is_literal
        assert template.segments == ("Hello world",)
        assert template.placeholders == frozenset()

    def test_single_placeholder(self) -> None:
        template = compile_template("Hello {{Name}}!")
        assert template.segments == ("Hello ", Placeholder(("Name",)), "!")
        assert template.placeholders == frozenset({"Name"})

    def test_leading_dot_and_spaces(self) -> None:
        template = compile_template("Hi {{ .Name }}")
        assert template.placeholders == frozenset({"Name"})

    def test_dotted_path(self) -> None:
        template = compile_template("{{.User.Name}}")
        assert template.segments == (Placeholder(("User", "Name")),)
        assert template.placeholders == frozenset({"User.Name"})

    def test_adjacent_placeholders(self) -> None:
        template = compile_template("{{A}}{{B}}")
        assert template.render({"A": 1, "B": 2}) == "12"

    def test_custom_delimiters(self) -> None:
        template = compile_template("Hi <<Name>> {{literal}}", left_delim="<<", right_delim=">>")
        assert template.render({"Name": "Ada"}) == "Hi Ada {{literal}}"

    def test_empty_delimiters_mean_default(self) -> None:
        template = compile_template("Hi {{Name}}", left_delim="", right_delim="")
        assert template.placeholders == frozenset({"Name"})

    def test_lone_right_delimiter_is_literal(self) -> None:
        assert compile_template("a }} b").is_literal

    @pytest.mark.parametrize(
        ("text", "position"),
        [
            ("Hello {{Name", 6),
            ("{{}}", 0),
            ("ab {{ . }}", 3),
            ("{{1abc}}", 0),
            ("x {{User..Name}}", 2),
            ("{{Name-With-Dashes}}", 0),
        ],
    )
    def test_syntax_errors(self, text: str, position: int) -> None:
        with pytest.raises(TemplateCompileError) as exc_info:
            compile_template(text, message_id="Greeting")
        error = exc_info.value
        assert error.message_id == "Greeting"
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.TEMPLATE_SYNTAX
        assert error.diagnostic.position == position
        assert error.diagnostic.location == "Greeting"

    def test_path_depth_limit(self) -> None:
        text = "{{" + ".".join(["a"] * 17) + "}}"
        with pytest.raises(TemplateCompileError, match="deeper"):
            compile_template(text)


class TestRender:
    """CompiledTemplate.render."""

    def test_values_use_str(self) -> None:
        template = compile_template("{{Count}} items at {{Price}}")
        assert template.render({"Count": 3, "Price": 1.5}) == "3 items at 1.5"

    def test_none_renders_empty(self) -> None:
        assert compile_template("[{{Name}}]").render({"Name": None}) == "[]"

    def test_nested_lookup(self) -> None:
        template = compile_template("Hi {{.User.Name}}")
        assert template.render({"User": {"Name": "Ada"}}) == "Hi Ada"

    def test_missing_raises_by_default(self) -> None:
        template = compile_template("Hello {{Name}}")
        with pytest.raises(MissingTemplateDataError) as exc_info:
            template.render({}, message_id="HelloPerson")
        assert exc_info.value.name == "Name"
        assert exc_info.value.message_id == "HelloPerson"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.TEMPLATE_DATA_MISSING

    def test_missing_nested_key_raises(self) -> None:
        template = compile_template("{{User.Name}}")
        with pytest.raises(MissingTemplateDataError) as exc_info:
            template.render({"User": "not a mapping"})
        assert exc_info.value.name == "User.Name"

    def test_missing_renders_empty_under_empty_policy(self) -> None:
        template = compile_template("Hello {{Name}}!")
        assert template.render(None, missing=MissingDataPolicy.EMPTY) == "Hello !"

    def test_literal_ignores_data(self) -> None:
        assert compile_template("Hello").render({"Unused": 1}) == "Hello"

    def test_extra_data_ignored(self) -> None:
        assert compile_template("{{A}}").render({"A": "x", "B": "y"}) == "x"

    @given(text=_plain_text)
    def test_text_without_delimiters_renders_verbatim(self, text: str) -> None:
        template = compile_template(text)
        assert template.is_literal
        assert template.render() == text

    @given(prefix=_plain_text, value=_plain_text, suffix=_plain_text)
    def test_single_placeholder_substitution(self, prefix: str, value: str, suffix: str) -> None:
        template = compile_template(f"{prefix}{{{{Name}}}}{suffix}")
        assert template.render({"Name": value}) == f"{prefix}{value}{suffix}"
