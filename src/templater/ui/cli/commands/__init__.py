"""CLI command implementations exposed via `templater.ui.cli`."""

from __future__ import annotations

from .render import render
from .resolve import resolve


__all__ = ["render", "resolve"]
