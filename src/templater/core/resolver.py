"""Resolve logical names to template files in a wildcard-aware directory tree.

Every directory or file segment under a root is either a literal, a
``{name}``/``{name.type}`` wildcard, or (in last position) an ``index`` file
standing for its directory. Resolution happens in two passes:

1. A pruned walk collects the candidate files whose segments structurally
   match the query: the same number of segments, or one more when the extra
   segment is an ``index`` file. Branches whose segment is neither the queried
   literal nor a wildcard are never descended into.
2. The candidates are folded into a segment tree that is walked with the
   query. A literal child equal to the queried segment always wins; otherwise
   the node must hold exactly one (wildcard) child. Several competing
   wildcards at one position is a defect of the template tree and raises
   :class:`AmbiguousTemplateError`.

When the query is exhausted, a file matching the full query wins over an
``index`` file of a directory with the same name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
import logging
from pathlib import Path

from .exceptions import AmbiguousTemplateError, TemplateExecutionError, TemplateNotFoundError
from .paths import (
    INDEX_SEGMENT,
    is_wildcard,
    path_segments,
    strip_extension,
    wildcard_spec,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A template file structurally matching a query."""

    segments: tuple[str, ...]
    is_index: bool = False


@dataclass(frozen=True, slots=True)
class TemplateMatch:
    """Outcome of a successful resolution.

    Attributes:
        root: Directory the name was resolved against.
        path: Matched file, relative to ``root`` in POSIX form, extension included.
        segments: Segments of the matched pattern without the ``index`` segment.
        query: Segments of the requested logical name.
        is_index: Whether the match is the ``index`` file of a directory.
    """

    root: Path
    path: str
    segments: tuple[str, ...]
    query: tuple[str, ...]
    is_index: bool = False

    @property
    def raw_parameters(self) -> dict[str, str]:
        """Map every wildcard of the pattern to the segment it captured."""
        return {
            wildcard_spec(segment): value
            for segment, value in zip(self.segments, self.query)
            if is_wildcard(segment)
        }

    @property
    def file(self) -> Path:
        """Absolute location of the matched template."""
        return self.root / self.path


@dataclass(slots=True)
class SegmentNode:
    """Prefix tree of candidate segments."""

    children: dict[str, SegmentNode] = field(default_factory=dict)
    terminal: bool = False

    def insert(self, segments: tuple[str, ...]) -> None:
        node = self
        for segment in segments:
            node = node.children.setdefault(segment, SegmentNode())
        node.terminal = True

    @classmethod
    def build(cls, candidates: list[Candidate]) -> SegmentNode:
        tree = cls()
        for candidate in candidates:
            tree.insert(candidate.segments)
        return tree


def _segment_matches(segment: str, wanted: str) -> bool:
    return segment == wanted or is_wildcard(segment)


def _iter_entries(directory: Path) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise TemplateExecutionError("read", str(directory), str(exc)) from exc
    yield from entries


def _walk(
    directory: Path,
    prefix: tuple[str, ...],
    query: tuple[str, ...],
    extension: str,
    candidates: list[Candidate],
) -> None:
    depth = len(prefix)
    arity = len(query)
    for entry in _iter_entries(directory):
        name = entry.name
        if entry.is_dir():
            if depth < arity and _segment_matches(name, query[depth]):
                _walk(entry, (*prefix, name), query, extension, candidates)
            continue

        if not name.endswith(extension) or len(name) == len(extension):
            continue
        stem = name[: -len(extension)]
        if depth == arity - 1 and _segment_matches(stem, query[depth]):
            candidates.append(Candidate((*prefix, stem)))
        elif depth == arity and stem == INDEX_SEGMENT:
            candidates.append(Candidate((*prefix, stem), is_index=True))


def collect_candidates(root: Path, query: tuple[str, ...], extension: str) -> list[Candidate]:
    """Walk ``root`` and return the files structurally matching ``query``."""
    candidates: list[Candidate] = []
    if root.is_dir():
        _walk(root, (), query, extension, candidates)
    return candidates


def resolve_template(name: str, extension: str, root_dir: str | Path) -> TemplateMatch:
    """Return the template file under ``root_dir`` that best matches ``name``.

    Raises:
        TemplateNotFoundError: No file matches the name.
        AmbiguousTemplateError: Sibling wildcards compete for one segment.
    """
    root = Path(root_dir)
    query = tuple(path_segments(strip_extension(name, extension)))
    expected = "/".join(query) + extension

    candidates = collect_candidates(root, query, extension)
    if not candidates:
        raise TemplateNotFoundError(str(root), expected)

    node = SegmentNode.build(candidates)
    resolved: list[str] = []
    for position, wanted in enumerate(query):
        segment, child = wanted, node.children.get(wanted)
        if child is None:
            if len(node.children) > 1:
                raise AmbiguousTemplateError(str(root), position, sorted(node.children))
            if not node.children:
                raise TemplateNotFoundError(str(root), expected)
            ((segment, child),) = node.children.items()
        resolved.append(segment)
        node = child

    is_index = False
    if not node.terminal:
        index = node.children.get(INDEX_SEGMENT)
        if index is None or not index.terminal:
            raise TemplateNotFoundError(str(root), expected)
        is_index = True

    parts = [*resolved, INDEX_SEGMENT] if is_index else resolved
    match = TemplateMatch(
        root=root,
        path="/".join(parts) + extension,
        segments=tuple(resolved),
        query=query,
        is_index=is_index,
    )
    logger.debug("resolved %r in %s to %s", name, root, match.path)
    return match


__all__ = [
    "INDEX_SEGMENT",
    "Candidate",
    "SegmentNode",
    "TemplateMatch",
    "collect_candidates",
    "resolve_template",
]
