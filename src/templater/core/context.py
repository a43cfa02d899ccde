"""Execution contexts and the composition protocol.

An :class:`ExecutionContext` is created for every page, component, slot or
head fragment rendered during a call. It resolves its template, derives the
typed path parameters, parses the template and executes it. While executing,
templates call back into the context through its function table
(``component``, ``slot``, ``componentHead``), each call spawning a child
context that renders synchronously before the caller resumes.

Props flow downward by copy: a child starts from its parent's props extended
with the call arguments, so overriding a key never leaks back to the parent or
to siblings. Named blocks flow downward the same way: a child receives a
snapshot of the blocks its parent parsed, which is how a slot finds content
defined by the page that called the component.

Nothing detects runaway recursion: a component that renders itself without
changing its name recurses until the interpreter's recursion limit is hit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import posixpath
from typing import TYPE_CHECKING, Any
import weakref

from markupsafe import Markup

from .engine import NamedBlock, TemplateSet, load_template, render_named, template_blocks
from .exceptions import (
    SlotContextError,
    SlotError,
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplaterError,
)
from .functions import FunctionKind, FunctionTable, Scope, build_function_table
from .heads import HeadCache
from .props import extend_props, flatten_kvs, new_kvs_props
from .resolver import TemplateMatch, resolve_template
from .wildcards import coerce_path_parameters


if TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from .config import TemplaterConfig


logger = logging.getLogger(__name__)

PATH_PARAMS_KEY = "PathParams"
BODY_BLOCK = "body"
SLOT_PREFIX = "#"


class Phase(str, Enum):
    """Lifecycle of an execution context."""

    CREATED = "created"
    RESOLVING = "resolving"
    PARSING = "parsing"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class RenderSession:
    """State shared by every context of one top-level call."""

    config: TemplaterConfig
    environment: Environment
    heads: HeadCache = field(default_factory=HeadCache)


class ExecutionContext:
    """Scope of a single resolve-and-render operation."""

    def __init__(
        self,
        session: RenderSession,
        scope: Scope,
        name: str,
        props: dict[str, Any],
        parent: ExecutionContext | None = None,
    ) -> None:
        self.session = session
        self.scope = scope
        self.name = name
        self.props = dict(props)
        self.phase = Phase.CREATED
        self._parent = weakref.ref(parent) if parent is not None else None
        self.imported: TemplateSet = dict(parent.blocks or {}) if parent is not None else {}
        self.blocks: TemplateSet | None = None

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(scope={self.scope.value!r}, name={self.name!r}, "
            f"phase={self.phase.value!r})"
        )

    @property
    def parent(self) -> ExecutionContext | None:
        return self._parent() if self._parent is not None else None

    @property
    def config(self) -> TemplaterConfig:
        return self.session.config

    def _enter(self, phase: Phase) -> None:
        self.phase = phase
        logger.debug("%s %s %r", phase.value, self.scope.value, self.name)

    def functions(self) -> FunctionTable:
        """Return the function table exposed to this context's templates."""
        handlers = {
            FunctionKind.COMPONENT: self.component,
            FunctionKind.SLOT: self.slot,
            FunctionKind.COMPONENT_HEAD: self.component_head,
        }
        return build_function_table(
            self.scope, handlers, self.name, self.props, self.config.functions
        )

    def namespace(self) -> dict[str, Any]:
        """Return the variables visible to templates; functions shadow props."""
        return {**self.props, **self.functions()}

    # Template-callable composition operations

    def component(self, name: str, *args: Any, **kwargs: Any) -> Markup:
        """Render the component ``name`` with extra key/value props."""
        props = extend_props(self.props, new_kvs_props(*args, **kwargs))
        child = ExecutionContext(self.session, Scope.COMPONENT, name, props, parent=self)
        return Markup(child.render_component())

    def slot(self, name: str, *args: Any, **kwargs: Any) -> Markup:
        """Render the content a caller supplied for the slot ``name``."""
        props = extend_props(self.props, new_kvs_props(*args, **kwargs))
        child = ExecutionContext(self.session, Scope.SLOT, name, props, parent=self)
        return Markup(child.render_slot())

    def component_head(self, name: str, *args: Any, **kwargs: Any) -> Markup:
        """Render the head fragment of ``name`` once per distinct argument list."""
        props = extend_props(self.props, new_kvs_props(*args, **kwargs))
        if not self.session.heads.claim(name, flatten_kvs(args, kwargs)):
            return Markup("")
        child = ExecutionContext(self.session, Scope.HEAD, name, props, parent=self)
        return Markup(child.render_head())

    # Rendering

    def _resolve(self, directory: str) -> TemplateMatch:
        self._enter(Phase.RESOLVING)
        root: Path = self.config.dirs.base / directory
        try:
            match = resolve_template(self.name, self.config.file_ext, root)
            params = coerce_path_parameters(match.raw_parameters)
        except TemplaterError:
            self.phase = Phase.FAILED
            raise
        if params:
            logger.debug("path parameters of %r: %s", self.name, params)
        self.props = extend_props(self.props, {PATH_PARAMS_KEY: params})
        return match

    def _execute(self, entry: NamedBlock, path: str) -> str:
        self._enter(Phase.EXECUTING)
        try:
            output = render_named(entry, self.namespace(), self.blocks)
        except Exception as exc:
            self.phase = Phase.FAILED
            raise TemplateExecutionError("execute", path, str(exc)) from exc
        self._enter(Phase.DONE)
        return output

    def _load(self, path: str) -> NamedBlock:
        try:
            return NamedBlock(load_template(self.session.environment, path))
        except TemplateExecutionError:
            self.phase = Phase.FAILED
            raise

    def render_page(self) -> str:
        """Render the page ``name`` inside the layout."""
        match = self._resolve(self.config.dirs.pages)
        path = posixpath.join(self.config.dirs.pages, match.path)

        self._enter(Phase.PARSING)
        layout = self._load(self.config.layout_filename)
        body = self._load(path)
        self.blocks = {
            **self.imported,
            **template_blocks(layout.template),
            **template_blocks(body.template),
            BODY_BLOCK: body,
        }
        return self._execute(layout, path)

    def render_component(self) -> str:
        """Render the component ``name``."""
        match = self._resolve(self.config.dirs.components)
        path = posixpath.join(self.config.dirs.components, match.path)

        self._enter(Phase.PARSING)
        template = self._load(path)
        self.blocks = {**self.imported, **template_blocks(template.template)}
        return self._execute(template, path)

    def render_head(self) -> str:
        """Render the head fragment of component ``name``; missing fragments are empty."""
        try:
            match = self._resolve(self.config.dirs.heads)
        except TemplateNotFoundError:
            logger.debug("no head fragment for %r", self.name)
            self._enter(Phase.DONE)
            return ""
        path = posixpath.join(self.config.dirs.heads, match.path)

        self._enter(Phase.PARSING)
        template = self._load(path)
        self.blocks = {**self.imported, **template_blocks(template.template)}
        return self._execute(template, path)

    def render_slot(self) -> str:
        """Render the block a caller named under the ``#<slot>`` prop."""
        parent = self.parent
        if parent is None or parent.blocks is None:
            raise SlotContextError(
                f"slot {self.name!r} rendered without a parent template set; "
                "slots can only be rendered from inside a component"
            )

        key = SLOT_PREFIX + self.name
        if key not in self.props:
            raise SlotError(self.name, "slot content not defined")
        definition = self.props[key]
        if not isinstance(definition, str):
            raise SlotError(
                self.name,
                f"slot definition name is not a string: got {type(definition).__name__}",
            )
        entry = parent.blocks.get(definition)
        if entry is None:
            raise SlotError(self.name, f"no block named {definition!r} is defined")

        self.blocks = dict(parent.blocks)
        return self._execute(entry, f"{SLOT_PREFIX}{self.name} ({definition})")


__all__ = [
    "BODY_BLOCK",
    "PATH_PARAMS_KEY",
    "SLOT_PREFIX",
    "ExecutionContext",
    "Phase",
    "RenderSession",
]
