"""De-duplication of component head fragments within one page render."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Any


logger = logging.getLogger(__name__)


def _same_arguments(left: Sequence[Any], right: Sequence[Any]) -> bool:
    if len(left) != len(right):
        return False
    return all(a is b or a == b for a, b in zip(left, right))


@dataclass(slots=True)
class HeadCache:
    """Argument lists already rendered per component head name."""

    seen: dict[str, list[tuple[Any, ...]]] = field(default_factory=dict)

    def contains(self, name: str, arguments: Sequence[Any]) -> bool:
        return any(_same_arguments(arguments, previous) for previous in self.seen.get(name, ()))

    def claim(self, name: str, arguments: Sequence[Any]) -> bool:
        """Record ``(name, arguments)`` and return whether it is new."""
        if self.contains(name, arguments):
            logger.debug("skipping duplicate head fragment %r", name)
            return False
        self.seen.setdefault(name, []).append(tuple(arguments))
        return True


__all__ = ["HeadCache"]
