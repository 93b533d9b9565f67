"""CLI command implementations exposed via `htmlsmith.ui.cli`."""

from __future__ import annotations

from .render import render
from .templates import templates


__all__ = ["render", "templates"]
