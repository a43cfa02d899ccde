"""Custom exception hierarchy for template resolution and composition."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar


_E = TypeVar("_E", bound=BaseException)


class TemplaterError(RuntimeError):
    """Base exception for template resolution and rendering failures."""


class ConfigError(TemplaterError):
    """Raised when a templater configuration cannot be loaded or validated."""


class TemplateNotFoundError(TemplaterError):
    """Raised when no template file matches a logical name."""

    def __init__(self, directory: str, filename: str) -> None:
        self.directory = directory
        self.filename = filename
        super().__init__(
            f"no template file found in the directory {directory} matching the filename {filename}"
        )


class AmbiguousTemplateError(TemplaterError):
    """Raised when sibling wildcard entries compete for one path segment.

    This is a defect of the template tree, not of the requested name.
    """

    def __init__(self, directory: str, position: int, candidates: Sequence[str]) -> None:
        self.directory = directory
        self.position = position
        self.candidates = tuple(candidates)
        listed = ", ".join(self.candidates)
        super().__init__(
            f"ambiguous templates in {directory}: segment {position} matches several "
            f"wildcards ({listed})"
        )


class MalformedPropsError(TemplaterError, ValueError):
    """Raised when a key/value argument list cannot be turned into props."""


class InvalidWildcardValueError(TemplaterError):
    """Raised when a captured path segment cannot be coerced to its declared type."""

    def __init__(self, value: str, type_name: str, reason: object | None = None) -> None:
        self.value = value
        self.type_name = type_name
        self.reason = reason
        message = f"invalid wildcard value {value!r} of type {type_name}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnrecognizedWildcardTypeError(TemplaterError):
    """Raised when a wildcard declares a type outside the supported vocabulary."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"unrecognized wildcard type {type_name!r}")


class TemplateExecutionError(TemplaterError):
    """Raised when reading, parsing or executing a template fails."""

    def __init__(self, phase: str, path: str, detail: str | None = None) -> None:
        self.phase = phase
        self.path = path
        message = f"failed to {phase} template {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SlotError(TemplaterError):
    """Raised when a slot has no usable content definition."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"slot {name!r}: {message}")


class SlotContextError(TemplaterError):
    """Raised when a slot is rendered outside of a component render."""


class ExecuteError(TemplaterError):
    """Raised when a name resolves neither to a page nor to a component."""

    def __init__(self, page_error: BaseException, component_error: BaseException) -> None:
        self.page_error = page_error
        self.component_error = component_error
        super().__init__(
            f"page execution failed: {page_error}; component execution failed: {component_error}"
        )


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def find_cause(exc: BaseException, kind: type[_E]) -> _E | None:
    """Return the first exception of ``kind`` along the cause chain of ``exc``."""
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        if isinstance(current, kind):
            return current
        current = current.__cause__ or current.__context__
    return None


__all__ = [
    "AmbiguousTemplateError",
    "ConfigError",
    "ExecuteError",
    "InvalidWildcardValueError",
    "MalformedPropsError",
    "SlotContextError",
    "SlotError",
    "TemplateExecutionError",
    "TemplateNotFoundError",
    "TemplaterError",
    "UnrecognizedWildcardTypeError",
    "exception_messages",
    "find_cause",
]
