from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import logging
from pathlib import Path

import pytest

from templater import Templater


LAYOUT = (
    "<html><head>{% block head %}{% endblock %}</head>"
    "<body>{% block body %}{% endblock %}</body></html>\n"
)

SITE: dict[str, str] = {
    "layout.html.tmpl": LAYOUT,
    "pages/index.html.tmpl": "Home\n",
    "pages/about.html.tmpl": "About {{ title }}\n",
    "pages/docs.html.tmpl": "Docs page\n",
    "pages/docs/index.html.tmpl": "Docs index\n",
    "pages/products/index.html.tmpl": "All products\n",
    "pages/products/featured.html.tmpl": "Featured\n",
    "pages/products/{id.int}/reviews.html.tmpl": "Reviews for {{ PathParams.id + 1 }}\n",
    "pages/titled.html.tmpl": (
        "{% define head %}<title>{{ title }}</title>{% enddefine %}\n"
        "Titled\n"
    ),
    "components/badge.html.tmpl": "<span>{{ label }}</span>\n",
    "components/card.html.tmpl": (
        "<div>{{ component(\"badge\", \"label\", title) }}{{ slot(\"footer\") }}</div>\n"
    ),
    "components/panel.html.tmpl": "<section>{{ slot(\"header\") }}</section>\n",
    "components/icon/{name}.html.tmpl": "<i class=\"{{ PathParams.name }}\"></i>\n",
    "heads/card.html.tmpl": "<link href=\"card{{ variant }}.css\">\n",
}


@pytest.fixture(autouse=True)
def _restore_templater_logger() -> Iterator[None]:
    logger = logging.getLogger("templater")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def write_templates(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Return a helper writing ``{relative path: content}`` under a template base."""
    base = tmp_path / "templates"

    def write(files: Mapping[str, str]) -> Path:
        for relative, content in files.items():
            target = base / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return base

    return write


@pytest.fixture
def site(write_templates: Callable[[Mapping[str, str]], Path]) -> Path:
    return write_templates(SITE)


@pytest.fixture
def templater(site: Path) -> Templater:
    return Templater(dirs={"base": site})
