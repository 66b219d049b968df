"""
expressions.py
--------------

Local-point expressions.

An `LExpr` describes a point in terms of a diagram's named points and is
resolved against a `NameSet` when needed (for instance by `rebase`). The
same expression can therefore be reused across diagrams: it means "the point
called 'center'", not a fixed coordinate.

Expressions are built from leaves (`Origin`, `Const`, `Named`) with the usual
arithmetic operators:

    >>> e = Named("top") - Named("bottom")
    >>> mid = Between("left", "right")
    >>> shifted = 0.5 * Named("center") + Const((1, 0))
"""

from __future__ import annotations

__all__ = [
    "LExpr", "Origin", "Const", "Named", "Sum", "Difference", "Scaled", "Between",
    "ExprLike", "as_expr", "evaluate",
]

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Real
from typing import Sequence, Tuple, Union

import numpy as np

from .names import NameSet
from .vectors import Vector, freeze


class LExpr(ABC):
    """Abstract local-point expression."""

    __slots__ = ()

    @abstractmethod
    def evaluate(self, names: NameSet) -> Vector:
        """Resolve the expression to a point of `names.space`."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------
    def __add__(self, other: ExprLike) -> LExpr:
        return Sum(self, as_expr(other))

    def __radd__(self, other: ExprLike) -> LExpr:
        return Sum(as_expr(other), self)

    def __sub__(self, other: ExprLike) -> LExpr:
        return Difference(self, as_expr(other))

    def __rsub__(self, other: ExprLike) -> LExpr:
        return Difference(as_expr(other), self)

    def __neg__(self) -> LExpr:
        return Scaled(-1.0, self)

    def __mul__(self, factor: float) -> LExpr:
        if not isinstance(factor, Real):
            return NotImplemented
        return Scaled(float(factor), self)

    __rmul__ = __mul__

    def __truediv__(self, factor: float) -> LExpr:
        if not isinstance(factor, Real):
            return NotImplemented
        if factor == 0:
            raise ZeroDivisionError("Cannot divide a point expression by zero")
        return Scaled(1.0 / float(factor), self)


@dataclass(frozen=True)
class Origin(LExpr):
    """The local origin."""

    def evaluate(self, names: NameSet) -> Vector:
        return names.space.zero()


@dataclass(frozen=True)
class Const(LExpr):
    """A fixed point given by coordinates."""
    coords: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, "coords", tuple(float(c) for c in np.ravel(self.coords)))

    def evaluate(self, names: NameSet) -> Vector:
        return names.space.vector(self.coords)


@dataclass(frozen=True)
class Named(LExpr):
    """The point bound to `name`."""
    name: str

    def evaluate(self, names: NameSet) -> Vector:
        return names[self.name]


@dataclass(frozen=True)
class Sum(LExpr):
    left: LExpr
    right: LExpr

    def evaluate(self, names: NameSet) -> Vector:
        return freeze(self.left.evaluate(names) + self.right.evaluate(names))


@dataclass(frozen=True)
class Difference(LExpr):
    left: LExpr
    right: LExpr

    def evaluate(self, names: NameSet) -> Vector:
        return freeze(self.left.evaluate(names) - self.right.evaluate(names))


@dataclass(frozen=True)
class Scaled(LExpr):
    factor: float
    expr: LExpr

    def evaluate(self, names: NameSet) -> Vector:
        return freeze(self.factor * self.expr.evaluate(names))


@dataclass(frozen=True)
class Between(LExpr):
    """Point at parameter `t` on the segment from `start` (t=0) to `end` (t=1)."""
    start: LExpr
    end: LExpr
    t: float = field(default=0.5)

    def __post_init__(self):
        object.__setattr__(self, "start", as_expr(self.start))
        object.__setattr__(self, "end", as_expr(self.end))
        object.__setattr__(self, "t", float(self.t))

    def evaluate(self, names: NameSet) -> Vector:
        a = self.start.evaluate(names)
        b = self.end.evaluate(names)
        return freeze(a + self.t * (b - a))


ExprLike = Union[LExpr, str, Sequence[float], np.ndarray]


def as_expr(value: ExprLike) -> LExpr:
    """Coerce a name, coordinate sequence or expression to an LExpr."""
    if isinstance(value, LExpr):
        return value
    if isinstance(value, str):
        return Named(value)
    if isinstance(value, (Sequence, np.ndarray)):
        return Const(tuple(value))
    raise TypeError(f"Cannot interpret {type(value).__name__} as a point expression")


def evaluate(expr: ExprLike, names: NameSet) -> Vector:
    """Resolve `expr` against `names`."""
    return as_expr(expr).evaluate(names)
