"""Implementation of the ``templater render`` command."""

from __future__ import annotations

import click
import typer

from templater.core.exceptions import TemplaterError
from templater.core.templater import Templater

from .._options import (
    AssignmentsArgument,
    BaseDirOption,
    ConfigOption,
    DebugOption,
    ExtensionOption,
    KindOption,
    NameArgument,
    OutputOption,
    RenderKind,
    VerboseOption,
)
from ..state import debug_enabled, emit_error, set_cli_state
from ..utils import load_config, parse_assignments


def render(
    name: NameArgument,
    assignments: AssignmentsArgument = None,
    kind: KindOption = RenderKind.AUTO,
    config: ConfigOption = None,
    base: BaseDirOption = None,
    ext: ExtensionOption = None,
    output: OutputOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render a page or a component and print the result."""

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)

    props = parse_assignments(assignments or [])

    try:
        templater = Templater(load_config(config, base, ext))
        if kind is RenderKind.PAGE:
            result = templater.execute_page(name, **props)
        elif kind is RenderKind.COMPONENT:
            result = templater.execute_component(name, **props)
        else:
            result = templater.execute(name, **props)
    except TemplaterError as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(result, nl=False)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
    except OSError as exc:
        if debug_enabled():
            raise
        emit_error(f"Failed to write '{output}': {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    if state.verbosity >= 1:
        state.err_console.print(f"[green]Wrote[/] {output}")


__all__ = ["render"]
