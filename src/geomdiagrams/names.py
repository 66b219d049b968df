"""
names.py
--------

Named local points: labeled anchor locations in a diagram's local frame.

A `NameSet` is an immutable mapping from name to point. Merging two sets
keeps every key; when both define the same name the right operand wins.
"""

from __future__ import annotations

__all__ = ["NameSet"]

import logging
from collections.abc import Mapping
from typing import Callable, Iterator, Optional

from .errors import UnknownName
from .transforms import Transformation
from .vectors import Vector, VectorLike, VectorSpace

logger = logging.getLogger(__name__)


class NameSet(Mapping):
    """
    Immutable mapping of names to points of one vector space.

    Example:
        >>> names = NameSet(R2, {"center": (0, 0), "top": (0, 1)})
        >>> names["top"]
        array([0., 1.])
    """

    __slots__ = ("space", "_points")

    def __init__(self, space: VectorSpace, points: Optional[Mapping[str, VectorLike]] = None) -> None:
        self.space = space
        self._points = {}
        for name, point in (points or {}).items():
            if not isinstance(name, str):
                raise TypeError(f"Point names must be str, not {type(name).__name__}")
            self._points[name] = space.vector(point)

    @classmethod
    def empty(cls, space: VectorSpace) -> NameSet:
        return cls(space)

    # -------------------------------------------------------------------------
    # Mapping interface
    # -------------------------------------------------------------------------
    def __getitem__(self, name: str) -> Vector:
        try:
            return self._points[name]
        except KeyError:
            known = ", ".join(sorted(self._points)) or "<none>"
            raise UnknownName(f"No point named {name!r} (known: {known})") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameSet):
            return NotImplemented
        return (self.space == other.space
                and self._points.keys() == other._points.keys()
                and all((self._points[k] == other._points[k]).all() for k in self._points))

    __hash__ = None

    # -------------------------------------------------------------------------
    # Derived sets
    # -------------------------------------------------------------------------
    def map(self, fn: Callable[[Vector], VectorLike]) -> NameSet:
        """Apply `fn` to every point."""
        return NameSet(self.space, {name: fn(p) for name, p in self._points.items()})

    def union(self, other: NameSet) -> NameSet:
        """Merge two sets; on a name collision the point from `other` is kept."""
        self.space.check(other.space, "Merged names")
        if not other:
            return self
        if not self:
            return other
        collisions = self._points.keys() & other._points.keys()
        if collisions:
            logger.debug(f"Name collision on {sorted(collisions)}; right operand wins")
        merged = dict(self._points)
        merged.update(other._points)
        return NameSet(self.space, merged)

    def with_point(self, name: str, point: VectorLike) -> NameSet:
        """Copy with `name` bound to `point` (replacing any previous binding)."""
        return self.union(NameSet(self.space, {name: point}))

    def qualify(self, prefix: str) -> NameSet:
        """Copy with every name rewritten as "prefix.name"."""
        return NameSet(self.space, {f"{prefix}.{name}": p for name, p in self._points.items()})

    def transform(self, t: Transformation) -> NameSet:
        self.space.check(t.space, "Transformation")
        return self.map(t.apply)

    def translate(self, offset: VectorLike) -> NameSet:
        offset = self.space.vector(offset)
        return self.map(lambda p: p + offset)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v.tolist()}" for k, v in self._points.items())
        return f"NameSet({self.space}, {{{items}}})"
