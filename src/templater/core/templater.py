"""Public entry points of the templater.

The template directory is laid out as follows (names configurable)::

    templates/
      layout.html.tmpl          # renders a "body" block, optionally a "head" block
      pages/
        index.html.tmpl         # page "" or "/"
        products/
          {id.int}/
            reviews.html.tmpl   # page "products/42/reviews", PathParams.id == 42
      components/
        card.html.tmpl
      heads/
        card.html.tmpl          # rendered by componentHead("card")

Pages are rendered inside the layout: the page file becomes the layout's
``body`` block and any block the page declares with ``{% define %}``
overrides the layout block of the same name. Components are rendered on
their own. Both receive the caller's props plus a ``PathParams`` mapping of
the typed wildcard values captured while resolving the name.

Inside templates the following functions are available:

- ``component(name, key, value, ...)`` renders a component with extra props;
- ``slot(name, key, value, ...)`` (components only) renders the block whose
  name the caller passed under the ``"#<name>"`` prop;
- ``componentHead(name, key, value, ...)`` (pages and head fragments) renders
  ``heads/<name>`` once per distinct argument list;
- ``props(key, value, ...)`` builds a mapping.

Example::

    {{ component("card", "title", "Hello", "#footer", "card_footer") }}
    {% define card_footer %}<small>{{ title }}</small>{% enddefine %}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import TemplaterConfig
from .context import ExecutionContext, RenderSession
from .engine import create_environment
from .exceptions import ExecuteError, TemplateNotFoundError, TemplaterError
from .functions import Scope
from .props import new_kvs_props
from .resolver import TemplateMatch, resolve_template


logger = logging.getLogger(__name__)


class Templater:
    """Resolve and render pages and components from a template directory."""

    def __init__(self, config: TemplaterConfig | None = None, **overrides: Any) -> None:
        if config is None:
            config = TemplaterConfig(**overrides)
        elif overrides:
            config = TemplaterConfig.model_validate({**dict(config), **overrides})
        self.config = config

    def __repr__(self) -> str:
        return f"Templater(base={str(self.config.dirs.base)!r})"

    def _context(
        self, scope: Scope, name: str, kvs: tuple[Any, ...], props: dict[str, Any]
    ) -> ExecutionContext:
        session = RenderSession(self.config, create_environment(self.config))
        return ExecutionContext(session, scope, name, new_kvs_props(*kvs, **props))

    def execute_page(self, name: str, /, *kvs: Any, **props: Any) -> str:
        """Render the page ``name`` wrapped in the layout.

        Props are given as alternating key/value arguments, keyword arguments,
        or both.

        Raises:
            TemplateNotFoundError: No page file matches ``name``.
            TemplateExecutionError: The layout or the page failed to read, parse
                or execute.
        """
        logger.debug("executing page %r", name)
        return self._context(Scope.PAGE, name, kvs, props).render_page()

    def execute_component(self, name: str, /, *kvs: Any, **props: Any) -> str:
        """Render the component ``name`` on its own."""
        logger.debug("executing component %r", name)
        return self._context(Scope.COMPONENT, name, kvs, props).render_component()

    def execute(self, name: str, /, *kvs: Any, **props: Any) -> str:
        """Render ``name`` as a page, or as a component when no page matches.

        Only a missing page falls back to the component lookup; any other page
        failure is raised as is.

        Raises:
            ExecuteError: Neither a page nor a component could be rendered.
        """
        try:
            return self.execute_page(name, *kvs, **props)
        except TemplateNotFoundError as page_error:
            logger.debug("no page matches %r, trying components", name)
            try:
                return self.execute_component(name, *kvs, **props)
            except TemplaterError as component_error:
                raise ExecuteError(page_error, component_error) from component_error

    def root_dir(self, root: str) -> Path:
        """Return the directory searched for ``root`` (``pages``, ``components`` or ``heads``)."""
        dirs = self.config.dirs
        roots = {
            "pages": dirs.pages_dir,
            "components": dirs.components_dir,
            "heads": dirs.heads_dir,
        }
        try:
            return roots[root]
        except KeyError:
            raise ValueError(f"unknown template root {root!r}") from None

    def resolve(self, name: str, root: str = "pages") -> TemplateMatch:
        """Resolve ``name`` without rendering it."""
        return resolve_template(name, self.config.file_ext, self.root_dir(root))


__all__ = ["Templater"]
