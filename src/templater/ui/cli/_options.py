"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
TEMPLATE_PANEL = "Template Tree"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"


class RenderKind(str, Enum):
    """How the ``render`` command looks a name up."""

    PAGE = "page"
    COMPONENT = "component"
    AUTO = "auto"


class TemplateRoot(str, Enum):
    """Template trees a name can be resolved against."""

    PAGES = "pages"
    COMPONENTS = "components"
    HEADS = "heads"


NameArgument = Annotated[
    str,
    typer.Argument(
        metavar="NAME",
        help="Logical template name such as 'products/42/reviews'.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

AssignmentsArgument = Annotated[
    list[str] | None,
    typer.Argument(
        metavar="KEY=VALUE...",
        help="Props passed to the template; values are strings.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

KindOption = Annotated[
    RenderKind,
    typer.Option(
        "--kind",
        "-k",
        case_sensitive=False,
        help="Render as a page, a component, or a page falling back to a component.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

RootOption = Annotated[
    TemplateRoot,
    typer.Option(
        "--root",
        case_sensitive=False,
        help="Template tree the name is resolved against.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        help="TOML configuration file.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

BaseDirOption = Annotated[
    Path | None,
    typer.Option(
        "--base",
        "-b",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Template base directory (overrides the configuration).",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

ExtensionOption = Annotated[
    str | None,
    typer.Option(
        "--ext",
        help="Template file extension (overrides the configuration), e.g. '.html.tmpl'.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        dir_okay=False,
        resolve_path=True,
        help="Write the rendered output to this file instead of stdout.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
