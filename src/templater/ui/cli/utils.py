"""Helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import typer

from templater.core.config import TemplaterConfig

from .state import emit_warning


def load_config(
    config_path: Path | None,
    base: Path | None = None,
    extension: str | None = None,
) -> TemplaterConfig:
    """Load the configuration file, if any, and apply command-line overrides."""
    config = TemplaterConfig.load(config_path) if config_path is not None else TemplaterConfig()
    if base is None and extension is None:
        return config

    data = config.model_dump()
    if base is not None:
        data["dirs"]["base"] = base
    if extension is not None:
        data["file_ext"] = extension
    return TemplaterConfig.model_validate(data)


def parse_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` arguments into props."""
    props: dict[str, str] = {}
    for assignment in assignments:
        key, separator, value = assignment.partition("=")
        if not separator or not key:
            raise typer.BadParameter(
                f"Expected KEY=VALUE, got {assignment!r}.", param_hint="KEY=VALUE"
            )
        if key in props:
            emit_warning(f"Prop '{key}' given several times; the last value wins.")
        props[key] = value
    return props


__all__ = ["load_config", "parse_assignments"]
