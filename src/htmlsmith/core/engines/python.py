"""Engine loading render functions from Python template modules.

A template module must define ``render(ctx) -> str``::

    # image.py
    def render(ctx):
        if ctx.node.has_role("hidden"):
            return ""
        return ctx.next()
"""

from __future__ import annotations

import sys
import types

from ..exceptions import TemplateCompileError
from .base import CompileOptions, RenderFunction


class PythonEngine:
    """Run the template source as a module named after its file; return ``render``."""

    name = "python"

    def __call__(self, source: str, options: CompileOptions) -> RenderFunction:
        module_name = f"htmlsmith_template_{abs(hash(options.path.resolve()))}_{options.node_type}"
        module = types.ModuleType(module_name)
        module.__file__ = str(options.path)
        sys.modules[module_name] = module
        try:
            code = compile(source, str(options.path), "exec")
            exec(code, module.__dict__)  # noqa: S102
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise TemplateCompileError(
                f"Failed to import template module at '{options.path}': {exc}"
            ) from exc

        render = getattr(module, "render", None)
        if not callable(render):
            raise TemplateCompileError(
                f"Template module '{options.path}' does not define render(ctx)."
            )
        return render


__all__ = ["PythonEngine"]
