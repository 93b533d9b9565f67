from __future__ import annotations

import pytest

from htmlsmith.core.exceptions import ConfigurationError
from htmlsmith.core.patterns import CATCH_ALL, FilePattern, compile_pattern, matches


def test_catch_all_matches_every_file_name() -> None:
    pattern = compile_pattern("*")

    assert pattern.is_catch_all
    assert pattern.matches("paragraph.xyz")
    assert pattern.matches("image")
    assert pattern.matches(".hidden")
    assert str(pattern) == CATCH_ALL


def test_extension_pattern_matches_suffix_only() -> None:
    pattern = compile_pattern("*.xyz")

    assert not pattern.is_catch_all
    assert pattern.matches("paragraph.xyz")
    assert pattern.matches("inline_anchor.html.xyz")
    assert not pattern.matches("image.tpl")
    assert not pattern.matches("xyz")
    assert not pattern.matches("paragraph.xyzw")


def test_compound_extension_pattern() -> None:
    pattern = compile_pattern("*.html.j2")

    assert pattern.matches("image.html.j2")
    assert not pattern.matches("image.j2")


def test_surrounding_whitespace_is_ignored() -> None:
    assert compile_pattern("  *.jinja ").matches("section.jinja")
    assert compile_pattern(" * ").is_catch_all


def test_compiled_patterns_pass_through() -> None:
    pattern = FilePattern(source="*.py", suffix=".py")

    assert compile_pattern(pattern) is pattern


@pytest.mark.parametrize(
    "pattern",
    ["", "image", "*.", "*.[ch]", "**.jinja", "*.j?", "image.*", "*jinja", "?.py"],
)
def test_unsupported_patterns_are_rejected(pattern: str) -> None:
    with pytest.raises(ConfigurationError, match="Unsupported template pattern"):
        compile_pattern(pattern)


def test_non_string_patterns_are_rejected() -> None:
    with pytest.raises(ConfigurationError, match="must be a string"):
        compile_pattern(42)  # type: ignore[arg-type]


def test_matches_helper_compiles_on_the_fly() -> None:
    assert matches("*.tpl", "image.tpl")
    assert not matches("*.tpl", "image.jinja")
    assert matches("*", "anything.at.all")
