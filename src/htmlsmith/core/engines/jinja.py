"""Jinja2 engine compiling template files into render functions."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError as JinjaTemplateError
from markupsafe import escape

from ..exceptions import TemplateCompileError
from .base import CompileOptions, RenderFunction


def _build_environment(template_dir: Path) -> Environment:
    environment = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    environment.filters.setdefault("html_escape", escape)
    return environment


class _NodeContent:
    """Render the node children the first time the template prints them."""

    __slots__ = ("_node", "_value")

    def __init__(self, node) -> None:
        self._node = node
        self._value: str | None = None

    def __str__(self) -> str:
        if self._value is None:
            self._value = self._node.content
        return self._value

    def __html__(self) -> str:
        return str(self)


class JinjaEngine:
    """Compile templates with Jinja2, one environment per template directory.

    Templates receive ``node`` (the node view), ``content`` (the rendered
    children), ``next`` (the chain delegate) and ``ctx`` (the full invocation
    context). Partials living next to the templates can be pulled in with
    ``{% include %}``.
    """

    name = "jinja"

    def __init__(self, **environment_options: object) -> None:
        self._environment_options = environment_options
        self._environments: dict[Path, Environment] = {}

    def environment_for(self, template_dir: Path) -> Environment:
        """Return the cached environment rooted at ``template_dir``."""
        key = template_dir.resolve()
        environment = self._environments.get(key)
        if environment is None:
            environment = _build_environment(key)
            for option, value in self._environment_options.items():
                setattr(environment, option, value)
            self._environments[key] = environment
        return environment

    def __call__(self, source: str, options: CompileOptions) -> RenderFunction:
        environment = self.environment_for(options.template_dir)
        try:
            template = environment.from_string(source)
        except JinjaTemplateError as exc:
            raise TemplateCompileError(
                f"Invalid Jinja template '{options.path}': {exc}"
            ) from exc
        template.name = options.path.name

        def render(ctx) -> str:
            return template.render(
                ctx=ctx, node=ctx.node, content=_NodeContent(ctx.node), next=ctx.next
            )

        render.__name__ = f"jinja:{options.path.name}"
        return render


__all__ = ["JinjaEngine"]
