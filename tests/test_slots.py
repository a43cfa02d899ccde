from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from templater import SlotContextError, SlotError, Templater, TemplateExecutionError, find_cause
from templater.core.config import TemplaterConfig
from templater.core.context import ExecutionContext, RenderSession
from templater.core.engine import create_environment
from templater.core.functions import Scope


Writer = Callable[[Mapping[str, str]], Path]


def _slot_error(excinfo: pytest.ExceptionInfo[TemplateExecutionError]) -> SlotError:
    error = find_cause(excinfo.value, SlotError)
    assert error is not None
    return error


def test_slot_renders_block_defined_by_caller(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates(
        {
            "pages/framed.html.tmpl": (
                "{% define top %}<h1>{{ title }}</h1>{% enddefine %}\n"
                '{{ component("panel", "#header", "top") }}\n'
            )
        }
    )
    html = templater.execute_page("framed", title="Welcome")
    assert "<body><section><h1>Welcome</h1></section></body>" in html


def test_slot_renders_block_with_hyphenated_name(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates(
        {
            "pages/hyphen.html.tmpl": (
                '{% define "page-top" %}<h1>{{ title }}</h1>{% enddefine %}\n'
                '{{ component("panel", "#header", "page-top") }}\n'
            )
        }
    )
    html = templater.execute_page("hyphen", title="Welcome")
    assert "<body><section><h1>Welcome</h1></section></body>" in html


def test_slot_arguments_extend_props(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates(
        {
            "components/greeter.html.tmpl": '{{ slot("body", "who", "World") }}',
            "pages/greet.html.tmpl": (
                "{% define hello %}Hello {{ who }}{% enddefine %}\n"
                '{{ component("greeter", "#body", "hello") }}\n'
            ),
        }
    )
    assert "<body>Hello World</body>" in templater.execute_page("greet")


def test_component_can_fill_slots_with_its_own_blocks(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates(
        {
            "components/wrapper.html.tmpl": (
                "{% define inner %}own{% enddefine %}\n"
                '{{ component("panel", "#header", "inner") }}\n'
            )
        }
    )
    assert templater.execute_component("wrapper") == "<section>own</section>"


def test_slot_content_may_render_components(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates(
        {
            "pages/badged.html.tmpl": (
                '{% define top %}{{ component("badge", "label", "in-slot") }}{% enddefine %}\n'
                '{{ component("panel", "#header", "top") }}\n'
            )
        }
    )
    html = templater.execute_page("badged")
    assert "<section><span>in-slot</span></section>" in html


def test_missing_slot_definition(
    write_templates: Writer, templater: Templater
) -> None:
    write_templates({"pages/bare.html.tmpl": '{{ component("panel") }}'})
    with pytest.raises(TemplateExecutionError) as excinfo:
        templater.execute_page("bare")
    error = _slot_error(excinfo)
    assert error.name == "header"
    assert "slot content not defined" in str(error)


def test_slot_definition_must_be_a_string(templater: Templater) -> None:
    with pytest.raises(TemplateExecutionError) as excinfo:
        templater.execute_component("panel", "#header", 3)
    assert "slot definition name is not a string: got int" in str(_slot_error(excinfo))


def test_slot_definition_must_name_a_block(templater: Templater) -> None:
    with pytest.raises(TemplateExecutionError) as excinfo:
        templater.execute_component("panel", "#header", "nowhere")
    assert "no block named 'nowhere'" in str(_slot_error(excinfo))


def test_slot_without_parent_is_an_internal_error(site: Path) -> None:
    config = TemplaterConfig(dirs={"base": site})
    session = RenderSession(config, create_environment(config))
    context = ExecutionContext(session, Scope.SLOT, "header", {"#header": "top"})
    with pytest.raises(SlotContextError):
        context.render_slot()
