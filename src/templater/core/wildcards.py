"""Typed coercion of values captured by ``{name.type}`` path wildcards.

A wildcard without a type suffix captures the raw string. With a suffix the
captured text is parsed with the converter registered for that type name:

`bool`
: ``1 t T TRUE true True`` or ``0 f F FALSE false False``.

`int`, `int8`, `int16`, `int32`, `int64`
: Signed decimal integers checked against the width (``int`` is 64 bits).

`uint`, `uint8`, `uint16`, `uint32`, `uint64`, `uintptr`
: Unsigned decimal integers; no sign is accepted.

`float32`, `float64`
: Floating point numbers; ``float32`` values are rounded to single precision.

`complex64`, `complex128`
: Complex numbers written ``1+2j`` or ``1+2i``.

`byte`
: A decimal integer in ``0..255``.

`rune`
: Exactly one character.

`string`
: The raw text, unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import math
import re
import struct
from typing import Any

from .exceptions import InvalidWildcardValueError, UnrecognizedWildcardTypeError


_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_bool(value: str) -> bool:
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid syntax for a boolean: {value!r}")


def _signed(bits: int) -> Callable[[str], int]:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def parse(value: str) -> int:
        if not _SIGNED_RE.fullmatch(value):
            raise ValueError(f"invalid syntax for a signed integer: {value!r}")
        number = int(value)
        if not low <= number <= high:
            raise ValueError(f"value out of range for {bits}-bit signed integer")
        return number

    return parse


def _unsigned(bits: int) -> Callable[[str], int]:
    high = (1 << bits) - 1

    def parse(value: str) -> int:
        if not _UNSIGNED_RE.fullmatch(value):
            raise ValueError(f"invalid syntax for an unsigned integer: {value!r}")
        number = int(value)
        if number > high:
            raise ValueError(f"value out of range for {bits}-bit unsigned integer")
        return number

    return parse


def _to_float32(number: float) -> float:
    if math.isnan(number) or math.isinf(number):
        return number
    try:
        rounded = struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError as exc:
        raise ValueError("value out of range for 32-bit float") from exc
    if math.isinf(rounded):
        raise ValueError("value out of range for 32-bit float")
    return rounded


def _parse_float64(value: str) -> float:
    if value != value.strip() or "_" in value:
        raise ValueError(f"invalid syntax for a float: {value!r}")
    number = float(value)
    if math.isinf(number) and "inf" not in value.lower():
        raise ValueError("value out of range for 64-bit float")
    return number


def _parse_float32(value: str) -> float:
    return _to_float32(_parse_float64(value))


def _parse_complex128(value: str) -> complex:
    if value != value.strip() or "_" in value:
        raise ValueError(f"invalid syntax for a complex number: {value!r}")
    text = value[:-1] + "j" if value.endswith("i") else value
    return complex(text)


def _parse_complex64(value: str) -> complex:
    number = _parse_complex128(value)
    return complex(_to_float32(number.real), _to_float32(number.imag))


def _parse_rune(value: str) -> str:
    if len(value) != 1:
        raise ValueError(f"expected exactly one character, got {len(value)}")
    return value


WILDCARD_TYPES: Mapping[str, Callable[[str], Any]] = {
    "bool": _parse_bool,
    "int": _signed(64),
    "int8": _signed(8),
    "int16": _signed(16),
    "int32": _signed(32),
    "int64": _signed(64),
    "uint": _unsigned(64),
    "uint8": _unsigned(8),
    "uint16": _unsigned(16),
    "uint32": _unsigned(32),
    "uint64": _unsigned(64),
    "uintptr": _unsigned(64),
    "float32": _parse_float32,
    "float64": _parse_float64,
    "complex64": _parse_complex64,
    "complex128": _parse_complex128,
    "byte": _unsigned(8),
    "rune": _parse_rune,
    "string": str,
}


def split_wildcard(spec: str) -> tuple[str, str | None]:
    """Split ``name.type`` into its name and optional type suffix."""
    name, dot, type_name = spec.rpartition(".")
    if not dot:
        return spec, None
    return name, type_name


def coerce_wildcard(spec: str, value: str) -> tuple[str, Any]:
    """Return the parameter key and typed value for one captured segment."""
    name, type_name = split_wildcard(spec)
    if type_name is None:
        return name, value

    parser = WILDCARD_TYPES.get(type_name)
    if parser is None:
        raise UnrecognizedWildcardTypeError(type_name)
    try:
        return name, parser(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidWildcardValueError(value, type_name, exc) from exc


def coerce_path_parameters(raw: Mapping[str, str]) -> dict[str, Any]:
    """Coerce every captured wildcard value of a resolved pattern."""
    params: dict[str, Any] = {}
    for spec, value in raw.items():
        key, typed = coerce_wildcard(spec, value)
        params[key] = typed
    return params


__all__ = [
    "WILDCARD_TYPES",
    "coerce_path_parameters",
    "coerce_wildcard",
    "split_wildcard",
]
