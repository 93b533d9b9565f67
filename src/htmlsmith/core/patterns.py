"""File name patterns used to bind template files to engines.

Only two shapes are understood: the catch-all ``"*"`` and extension patterns
such as ``"*.jinja"`` or ``"*.html.j2"``. Anything else is rejected when the
pattern is compiled so a broken registry never reaches the rendering stage.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ConfigurationError


CATCH_ALL = "*"

_GLOB_METACHARACTERS = frozenset("*?[]")


@dataclass(frozen=True, slots=True)
class FilePattern:
    """Compiled file name pattern."""

    source: str
    suffix: str | None = None

    @property
    def is_catch_all(self) -> bool:
        """Return True when the pattern matches every file name."""
        return self.suffix is None

    def matches(self, file_name: str) -> bool:
        """Return True when ``file_name`` is selected by the pattern."""
        if self.suffix is None:
            return True
        return file_name.endswith(self.suffix)

    def __str__(self) -> str:
        return self.source


def compile_pattern(pattern: str | FilePattern) -> FilePattern:
    """Validate ``pattern`` and return its compiled form."""
    if isinstance(pattern, FilePattern):
        return pattern
    if not isinstance(pattern, str):
        raise ConfigurationError(f"Template pattern must be a string, got {pattern!r}.")

    candidate = pattern.strip()
    if candidate == CATCH_ALL:
        return FilePattern(source=CATCH_ALL)

    if not candidate.startswith("*."):
        raise ConfigurationError(
            f"Unsupported template pattern '{pattern}'. Use '*' or '*.<extension>'."
        )
    extension = candidate[2:]
    if not extension or any(char in _GLOB_METACHARACTERS for char in extension):
        raise ConfigurationError(
            f"Unsupported template pattern '{pattern}'. Use '*' or '*.<extension>'."
        )
    return FilePattern(source=candidate, suffix=f".{extension}")


def matches(pattern: str | FilePattern, file_name: str) -> bool:
    """Return True when ``pattern`` selects ``file_name``."""
    return compile_pattern(pattern).matches(file_name)


__all__ = ["CATCH_ALL", "FilePattern", "compile_pattern", "matches"]
