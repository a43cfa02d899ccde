from __future__ import annotations

from pathlib import Path

from jinja2 import DictLoader, Environment
import pytest

from templater.core.config import TemplaterConfig
from templater.core.engine import (
    DefineExtension,
    block_identifier,
    definition_name,
    NamedBlock,
    create_environment,
    load_template,
    render_named,
    template_blocks,
)
from templater.core.exceptions import TemplateExecutionError


def _environment(**templates: str) -> Environment:
    return Environment(loader=DictLoader(templates), extensions=[DefineExtension])


def test_defined_blocks_are_not_rendered_in_place() -> None:
    env = _environment(page="a{% define note %}N{% enddefine %}b")
    template = env.get_template("page")
    assert template.render() == "ab"
    assert "note" in template.blocks


def test_enddefine_may_repeat_the_name() -> None:
    env = _environment(page="{% define note %}N{% enddefine note %}x")
    assert env.get_template("page").render() == "x"


def test_render_named_block() -> None:
    env = _environment(page="{% define note %}{{ who }}{% enddefine %}")
    template = env.get_template("page")
    assert render_named(NamedBlock(template, "note"), {"who": "me"}) == "me"


def test_imported_blocks_override_template_blocks() -> None:
    env = _environment(
        layout="<{% block body %}default{% endblock %}>",
        page="from page {{ who }}",
    )
    layout = env.get_template("layout")
    page = env.get_template("page")
    output = render_named(NamedBlock(layout), {"who": "me"}, {"body": NamedBlock(page)})
    assert output == "<from page me>"
    assert render_named(NamedBlock(layout), {}) == "<default>"


def test_template_blocks_lists_every_block() -> None:
    env = _environment(page="{% block a %}{% endblock %}{% define b %}{% enddefine %}")
    blocks = template_blocks(env.get_template("page"))
    assert set(blocks) == {"a", "b"}
    assert blocks["b"] == NamedBlock(blocks["b"].template, "b")


def test_define_accepts_a_string_name() -> None:
    env = _environment(page='a{% define "my-def" %}{{ who }}{% enddefine "my-def" %}b')
    template = env.get_template("page")
    assert template.render() == "ab"
    blocks = template_blocks(template)
    assert set(blocks) == {"my-def"}
    assert render_named(blocks["my-def"], {"who": "me"}) == "me"


@pytest.mark.parametrize("name", ["note", "my-def", "a.b", "define_xfoo", "été"])
def test_block_identifier_round_trips(name: str) -> None:
    identifier = block_identifier(name)
    assert identifier.isidentifier()
    assert definition_name(identifier) == name


def test_engine_errors_are_reraised() -> None:
    env = _environment(page="{{ 1 // 0 }}")
    with pytest.raises(ZeroDivisionError):
        render_named(NamedBlock(env.get_template("page")), {})


def test_create_environment_follows_config(tmp_path: Path) -> None:
    config = TemplaterConfig(dirs={"base": tmp_path}, strict_undefined=True)
    env = create_environment(config)
    assert env.autoescape is True
    assert env.cache is None
    assert DefineExtension.identifier in env.extensions


def test_load_template_errors(tmp_path: Path) -> None:
    (tmp_path / "bad.tmpl").write_text("{% for %}", encoding="utf-8")
    env = create_environment(TemplaterConfig(dirs={"base": tmp_path}))

    with pytest.raises(TemplateExecutionError) as excinfo:
        load_template(env, "bad.tmpl")
    assert excinfo.value.phase == "parse"

    with pytest.raises(TemplateExecutionError) as excinfo:
        load_template(env, "missing.tmpl")
    assert excinfo.value.phase == "read"
