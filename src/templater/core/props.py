"""Props construction from template-side key/value argument lists."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .exceptions import MalformedPropsError


def flatten_kvs(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> tuple[Any, ...]:
    """Return positional key/value pairs followed by the keyword arguments."""
    if not kwargs:
        return tuple(args)
    flattened = list(args)
    for key, value in kwargs.items():
        flattened.extend((key, value))
    return tuple(flattened)


def new_kvs_props(*args: Any, **kwargs: Any) -> dict[str, Any]:
    """Build a props mapping from alternating keys and values.

    This is the implementation of the ``props`` template function; keyword
    arguments are accepted as well and are applied after the positional pairs.
    """
    if len(args) % 2 == 1:
        raise MalformedPropsError(
            "the props function expects an even number of arguments, key-value pairs: "
            f"received {len(args)} arguments"
        )

    props: dict[str, Any] = {}
    for index in range(0, len(args), 2):
        key = args[index]
        if not isinstance(key, str):
            raise MalformedPropsError(
                "props expected odd arguments to be key strings: "
                f"argument {index + 1} was a {type(key).__name__}"
            )
        props[key] = args[index + 1]
    props.update(kwargs)
    return props


def extend_props(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``base`` overridden by ``extra``."""
    merged = dict(base)
    merged.update(extra)
    return merged


__all__ = ["extend_props", "flatten_kvs", "new_kvs_props"]
