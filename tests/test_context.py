from __future__ import annotations

from pathlib import Path

import pytest

from templater.core.config import TemplaterConfig
from templater.core.context import PATH_PARAMS_KEY, ExecutionContext, Phase, RenderSession
from templater.core.engine import create_environment
from templater.core.exceptions import TemplateNotFoundError
from templater.core.functions import Scope


def _session(base: Path) -> RenderSession:
    config = TemplaterConfig(dirs={"base": base})
    return RenderSession(config, create_environment(config))


def test_context_lifecycle(site: Path) -> None:
    context = ExecutionContext(_session(site), Scope.COMPONENT, "badge", {"label": "x"})
    assert context.phase is Phase.CREATED
    assert context.render_component() == "<span>x</span>"
    assert context.phase is Phase.DONE
    assert context.props[PATH_PARAMS_KEY] == {}
    assert context.blocks == {}


def test_failed_resolution_marks_context(site: Path) -> None:
    context = ExecutionContext(_session(site), Scope.COMPONENT, "nope", {})
    with pytest.raises(TemplateNotFoundError):
        context.render_component()
    assert context.phase is Phase.FAILED


def test_children_snapshot_parent_blocks(site: Path) -> None:
    session = _session(site)
    parent = ExecutionContext(session, Scope.PAGE, "titled", {"title": "T"})
    parent.render_page()
    child = ExecutionContext(session, Scope.COMPONENT, "badge", {}, parent=parent)
    assert child.parent is parent
    assert set(child.imported) == set(parent.blocks or {})
    assert "head" in child.imported


def test_namespace_layers_functions_over_props(site: Path) -> None:
    context = ExecutionContext(_session(site), Scope.HEAD, "card", {"props": 1, "x": 2})
    namespace = context.namespace()
    assert callable(namespace["props"])
    assert namespace["x"] == 2
    assert "componentHead" in namespace
    assert "component" not in namespace


def test_component_head_claims_in_the_session(site: Path) -> None:
    session = _session(site)
    context = ExecutionContext(session, Scope.PAGE, "about", {})
    assert context.component_head("card") == '<link href="card.css">'
    assert context.component_head("card") == ""
    assert session.heads.contains("card", ())
