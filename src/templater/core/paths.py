"""Path segmentation helpers shared by the resolver and the wildcard coercer."""

from __future__ import annotations

import posixpath


INDEX_SEGMENT = "index"


def path_segments(path: str) -> list[str]:
    """Split ``path`` into its non-empty segments.

    The path is normalised first (``.``/``..`` resolved, repeated slashes
    collapsed); one leading and one trailing slash are ignored. An empty or
    root path yields no segments.
    """
    cleaned = posixpath.normpath(path or ".")
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if cleaned == ".":
        return []
    if cleaned.startswith("/"):
        cleaned = cleaned[1:]
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    if not cleaned:
        return []
    return cleaned.split("/")


def extended_extension(path: str) -> str:
    """Return every trailing dot suffix of the final component of ``path``.

    ``pages/index.html.tmpl`` yields ``.html.tmpl``. A suffix containing a
    brace belongs to a wildcard (``{id.int}``) and stops the scan.
    """
    base = posixpath.basename(path)
    extension = ""
    while True:
        dot = base.rfind(".")
        if dot <= 0:
            return extension
        suffix = base[dot:]
        if "{" in suffix or "}" in suffix:
            return extension
        base = base[:dot]
        extension = suffix + extension


def is_wildcard(segment: str) -> bool:
    """Return whether ``segment`` is a ``{name}`` or ``{name.type}`` wildcard."""
    return len(segment) > 2 and segment[0] == "{" and segment[-1] == "}"


def wildcard_spec(segment: str) -> str:
    """Return the text between the braces of a wildcard segment."""
    return segment[1:-1]


def strip_extension(path: str, extension: str) -> str:
    """Drop ``extension`` from the end of ``path`` when present."""
    if extension and path.endswith(extension) and len(path) > len(extension):
        return path[: -len(extension)]
    return path


def path_parameters(pattern: str, target: str) -> dict[str, str] | None:
    """Match ``target`` against ``pattern`` and capture the raw wildcard values.

    A trailing ``index`` segment of the pattern is ignored when the target has
    one segment less, so ``docs/{v}/index.html`` matches ``docs/2.html``.

    Returns ``None`` when the extensions differ, the segment counts differ, or a
    literal segment of the pattern does not equal the target segment.
    """
    extension = extended_extension(pattern)
    if extension != extended_extension(target):
        return None

    pattern_segments = path_segments(pattern[: len(pattern) - len(extension)])
    target_segments = path_segments(target[: len(target) - len(extension)])
    if (
        pattern_segments
        and pattern_segments[-1] == INDEX_SEGMENT
        and len(pattern_segments) == len(target_segments) + 1
    ):
        pattern_segments = pattern_segments[:-1]
    if len(pattern_segments) != len(target_segments):
        return None

    params: dict[str, str] = {}
    for segment, value in zip(pattern_segments, target_segments):
        if is_wildcard(segment):
            params[wildcard_spec(segment)] = value
        elif segment != value:
            return None
    return params


__all__ = [
    "INDEX_SEGMENT",
    "extended_extension",
    "is_wildcard",
    "path_parameters",
    "path_segments",
    "strip_extension",
    "wildcard_spec",
]
