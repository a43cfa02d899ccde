"""Jinja environment setup and low-level block rendering.

Every top-level call builds its own environment with caching disabled, so
templates edited on disk are picked up by the next call. Rendering goes
through the block tables Jinja compiles for each template: a template set is
a mapping of block names to :class:`NamedBlock` entries, and rendering a
template pushes that set in front of the template's own blocks, the same way
Jinja wires parent blocks during ``{% extends %}``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    Undefined,
    nodes,
)
from jinja2.ext import Extension

from .exceptions import TemplateExecutionError


if TYPE_CHECKING:
    from jinja2.parser import Parser
    from jinja2.runtime import Context

    from .config import TemplaterConfig


RenderFunc = Callable[["Context"], Iterator[str]]


_ENCODED_PREFIX = "define_x"


def block_identifier(name: str) -> str:
    """Return the Jinja block name that stores the definition ``name``.

    Jinja compiles every block into a Python function named after it, so a
    name that is not an identifier (``my-def``) is hex encoded.
    """
    if name.isidentifier() and not name.startswith(_ENCODED_PREFIX):
        return name
    return _ENCODED_PREFIX + name.encode("utf-8").hex()


def definition_name(identifier: str) -> str:
    """Invert :func:`block_identifier`."""
    if identifier.startswith(_ENCODED_PREFIX):
        return bytes.fromhex(identifier[len(_ENCODED_PREFIX) :]).decode("utf-8")
    return identifier


class DefineExtension(Extension):
    """Extension for ``{% define name %}...{% enddefine %}`` named blocks.

    A defined block is registered in the template's block table like any
    ``{% block %}`` but is not rendered where it is written. It can be
    rendered by name (slot content) or override a layout block (``head``).
    The name is an identifier or a string literal (``{% define "my-def" %}``).

    Example:
        {% define page_header %}
          <h1>{{ title }}</h1>
        {% enddefine %}
        {{ component("card", "#header", "page_header") }}
    """

    tags = {"define"}

    def parse(self, parser: Parser) -> nodes.Node:
        lineno = next(parser.stream).lineno
        if parser.stream.current.type == "string":
            name = next(parser.stream).value
        else:
            name = parser.parse_assign_target(name_only=True).name
        body = parser.parse_statements(("name:enddefine",), drop_needle=True)
        closing = parser.stream.current
        if closing.type in ("name", "string") and closing.value == name:
            next(parser.stream)

        block = nodes.Block(lineno=lineno)
        block.name = block_identifier(name)
        block.body = body
        block.scoped = False
        block.required = False

        # The block is reachable through the block table only.
        hidden = nodes.If(lineno=lineno)
        hidden.test = nodes.Const(False)
        hidden.body = [block]
        hidden.elif_ = []
        hidden.else_ = []
        return hidden


def create_environment(config: TemplaterConfig) -> Environment:
    """Create the Jinja environment used by one top-level call."""
    return Environment(
        loader=FileSystemLoader(str(config.dirs.base)),
        autoescape=config.autoescape,
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        cache_size=0,
        trim_blocks=True,
        lstrip_blocks=True,
        extensions=[DefineExtension],
    )


def load_template(environment: Environment, path: str) -> Template:
    """Read and parse the template at ``path`` (relative to the loader root)."""
    try:
        return environment.get_template(path)
    except TemplateSyntaxError as exc:
        raise TemplateExecutionError("parse", path, str(exc)) from exc
    except TemplateNotFound as exc:
        raise TemplateExecutionError("read", path, "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateExecutionError("read", path, str(exc)) from exc


@dataclass(frozen=True, slots=True)
class NamedBlock:
    """One renderable unit of a template set.

    Attributes:
        template: Parsed template owning the unit.
        block: Name of a block of ``template``, or ``None`` for its root.
    """

    template: Template
    block: str | None = None

    @property
    def render_func(self) -> RenderFunc:
        if self.block is None:
            return self.template.root_render_func
        return self.template.blocks[self.block]


TemplateSet = dict[str, NamedBlock]


def template_blocks(template: Template) -> TemplateSet:
    """Return the named blocks declared by ``template``."""
    return {definition_name(name): NamedBlock(template, name) for name in template.blocks}


def render_named(
    entry: NamedBlock,
    namespace: Mapping[str, Any],
    blocks: Mapping[str, NamedBlock] | None = None,
) -> str:
    """Execute ``entry`` against ``namespace`` with ``blocks`` in scope.

    Entries of ``blocks`` take precedence over the template's own blocks of
    the same name, which stay reachable through ``super()``.
    """
    template = entry.template
    context = template.new_context(dict(namespace))
    for name, named in (blocks or {}).items():
        stack = context.blocks.setdefault(block_identifier(name), [])
        func = named.render_func
        if func not in stack:
            stack.insert(0, func)

    environment = template.environment
    try:
        return environment.concat(entry.render_func(context))  # type: ignore[attr-defined]
    except Exception:
        environment.handle_exception()


__all__ = [
    "DefineExtension",
    "NamedBlock",
    "TemplateSet",
    "block_identifier",
    "create_environment",
    "definition_name",
    "load_template",
    "render_named",
    "template_blocks",
]
