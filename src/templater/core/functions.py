"""Template function tables.

Each execution scope exposes a fixed set of composition functions to its
templates. Callers extend the table with *function builders*: callables that
receive the template name and its props and return extra functions.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from .props import new_kvs_props


FunctionTable = dict[str, Callable[..., Any]]
FunctionBuilder = Callable[[str, Mapping[str, Any]], Mapping[str, Callable[..., Any]]]


class FunctionKind(str, Enum):
    """Composition operations callable from templates."""

    COMPONENT = "component"
    SLOT = "slot"
    COMPONENT_HEAD = "componentHead"
    PROPS = "props"


class Scope(str, Enum):
    """Kinds of execution contexts."""

    PAGE = "page"
    COMPONENT = "component"
    SLOT = "slot"
    HEAD = "head"


SCOPE_FUNCTIONS: Mapping[Scope, tuple[FunctionKind, ...]] = {
    Scope.PAGE: (FunctionKind.COMPONENT, FunctionKind.COMPONENT_HEAD, FunctionKind.PROPS),
    Scope.COMPONENT: (FunctionKind.COMPONENT, FunctionKind.SLOT, FunctionKind.PROPS),
    Scope.SLOT: (FunctionKind.COMPONENT, FunctionKind.SLOT, FunctionKind.PROPS),
    Scope.HEAD: (FunctionKind.COMPONENT_HEAD, FunctionKind.PROPS),
}


def default_functions(name: str, props: Mapping[str, Any]) -> FunctionTable:
    """Return the functions available to every template."""
    return {FunctionKind.PROPS.value: new_kvs_props}


def chain_functions(*builders: FunctionBuilder) -> FunctionBuilder:
    """Merge several builders; later builders override earlier ones."""

    def build(name: str, props: Mapping[str, Any]) -> FunctionTable:
        table: FunctionTable = {}
        for builder in builders:
            table.update(builder(name, props))
        return table

    return build


def build_function_table(
    scope: Scope,
    handlers: Mapping[FunctionKind, Callable[..., Any]],
    name: str,
    props: Mapping[str, Any],
    extra: FunctionBuilder | None = None,
) -> FunctionTable:
    """Assemble the function table of one execution scope.

    ``handlers`` supplies the bound composition operations; only those listed
    for ``scope`` are exposed. Functions returned by ``extra`` win over the
    defaults.
    """
    table: FunctionTable = {
        kind.value: handlers[kind] for kind in SCOPE_FUNCTIONS[scope] if kind in handlers
    }
    table.update(default_functions(name, props))
    if extra is not None:
        table.update(extra(name, props))
    return table


__all__ = [
    "SCOPE_FUNCTIONS",
    "FunctionBuilder",
    "FunctionKind",
    "FunctionTable",
    "Scope",
    "build_function_table",
    "chain_functions",
    "default_functions",
]
