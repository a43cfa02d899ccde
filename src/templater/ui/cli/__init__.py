"""Public CLI exports for templater."""

from __future__ import annotations

from .app import app, main
from .commands import render, resolve
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
    "render",
    "resolve",
]
