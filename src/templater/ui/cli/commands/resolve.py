"""Implementation of the ``templater resolve`` command."""

from __future__ import annotations

import click
from rich import box
from rich.table import Table
import typer

from templater.core.exceptions import TemplaterError
from templater.core.templater import Templater
from templater.core.wildcards import coerce_wildcard, split_wildcard

from .._options import (
    BaseDirOption,
    ConfigOption,
    DebugOption,
    ExtensionOption,
    NameArgument,
    RootOption,
    TemplateRoot,
    VerboseOption,
)
from ..state import debug_enabled, emit_error, set_cli_state
from ..utils import load_config


def resolve(
    name: NameArgument,
    root: RootOption = TemplateRoot.PAGES,
    config: ConfigOption = None,
    base: BaseDirOption = None,
    ext: ExtensionOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Show which template file a name resolves to and the parameters it captures."""

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)

    table = Table(
        title="Path Parameters",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="magenta")
    table.add_column("Type", style="green")
    table.add_column("Segment")
    table.add_column("Value")

    try:
        templater = Templater(load_config(config, base, ext))
        match = templater.resolve(name, root.value)
        for spec, raw in match.raw_parameters.items():
            key, value = coerce_wildcard(spec, raw)
            _, type_name = split_wildcard(spec)
            table.add_row(key, type_name or "string", raw, repr(value))
    except TemplaterError as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    console = state.console
    console.print(f"[bold]Root:[/] {match.root}")
    console.print(f"[bold]Template:[/] {match.path}")
    console.print(f"[bold]Index:[/] {'yes' if match.is_index else 'no'}")
    if table.row_count:
        console.print(table)


__all__ = ["resolve"]
