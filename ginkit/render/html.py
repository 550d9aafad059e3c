"""HTML template renderers backed by Jinja2."""

from __future__ import annotations

import glob as _glob
import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

import jinja2

from ginkit.render.base import Render

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True)
class Delims:
    """Left and right delimiters of template expressions."""

    left: str = "{{"
    right: str = "}}"


def _template_set(
    sources: Mapping[str, str],
    delims: Delims,
    func_map: Mapping[str, Callable[..., Any]],
) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.DictLoader(dict(sources)),
        variable_start_string=delims.left,
        variable_end_string=delims.right,
        autoescape=True,
    )
    env.globals.update(func_map)
    env.filters.update(func_map)
    return env


def _load_files(
    files: Sequence[str],
    delims: Delims,
    func_map: Mapping[str, Callable[..., Any]],
) -> jinja2.Environment:
    sources = {os.path.basename(f): Path(f).read_text(encoding="utf-8") for f in files}
    env = _template_set(sources, delims, func_map)
    for name in sources:
        env.get_template(name)
    return env


def _load_glob(
    pattern: str,
    delims: Delims,
    func_map: Mapping[str, Callable[..., Any]],
) -> jinja2.Environment:
    files = sorted(_glob.glob(pattern))
    if not files:
        raise ValueError(f"html template: pattern matches no files: {pattern!r}")
    return _load_files(files, delims, func_map)


@dataclass
class HTML(Render):
    """One template execution: a template (or template set), a name and the data.

    ``template`` is a ``jinja2.Environment`` looked up by ``name``, or a
    ``jinja2.Template`` rendered directly when ``name`` is empty or its own.
    Mapping data supplies the template variables; other data is exposed as
    ``data``.
    """

    template: Any
    name: str = ""
    data: Any = None
    content_type: ClassVar[str] = HTML_CONTENT_TYPE

    def _resolve(self) -> jinja2.Template:
        template = self.template
        if isinstance(template, jinja2.Environment):
            if not self.name:
                raise ValueError('html template: "" is an incomplete or empty template')
            return template.get_template(self.name)
        if self.name and self.name != template.name:
            return template.environment.get_template(self.name)
        return template

    def _execute(self) -> str:
        template = self._resolve()
        if self.data is None:
            return template.render()
        if isinstance(self.data, Mapping):
            return template.render(dict(self.data))
        return template.render(data=self.data)

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(self._execute().encode("utf-8"))


@dataclass
class HTMLProduction:
    """Renders from a template set loaded once."""

    template: Any
    delims: Delims = field(default_factory=Delims)

    def instance(self, name: str, data: Any) -> HTML:
        """Return a renderer for template ``name`` with ``data``."""
        return HTML(template=self.template, name=name, data=data)


@dataclass
class HTMLDebug:
    """Reloads its templates from disk on every instance, for development."""

    files: list[str] = field(default_factory=list)
    glob: str = ""
    delims: Delims = field(default_factory=Delims)
    func_map: dict[str, Callable[..., Any]] | None = None

    def _load(self) -> jinja2.Environment:
        func_map = self.func_map or {}
        if self.files:
            return _load_files(self.files, self.delims, func_map)
        if self.glob:
            return _load_glob(self.glob, self.delims, func_map)
        raise ValueError("the HTML debug render was created without files or glob pattern")

    def instance(self, name: str, data: Any) -> HTML:
        """Reload the templates and return a renderer for ``name`` with ``data``."""
        return HTML(template=self._load(), name=name, data=data)