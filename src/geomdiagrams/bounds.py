"""
bounds.py
---------

Bounding functions: a functional representation of convex bounding regions.

Given a direction v, a bounding function returns the smallest scalar s such
that every point u of the region satisfies

    (u · v) / (v · v) <= s,

i.e. the projection of u onto v is at most s·v. For a disc of radius r
centered at the origin this is r / |v|, so r for every unit direction.

Bounding functions form a commutative monoid: the empty region (zero
everywhere) is the identity and composition is the pointwise maximum.
Internally a bounding function keeps a flat tuple of component functions, so
composing many diagrams does not build a deep chain of closures.

Evaluation is total. At a zero direction the projection is undefined and the
identity contribution 0.0 is returned.
"""

from __future__ import annotations

__all__ = ["Bounds", "SupportFunction"]

from typing import Callable, Iterable, Sequence, Tuple, Union

import numpy as np

from .config import get_config
from .errors import NonInvertibleTransform
from .transforms import Transformation
from .vectors import Vector, VectorLike, VectorSpace

SupportFunction = Callable[[Vector], float]  # v -> max over the region of u · v


class Bounds:
    """
    Bounding function of a region in one vector space.

    Attributes:
        space (VectorSpace): Space of the directions accepted.
    """

    __slots__ = ("space", "_parts")

    def __init__(self, space: VectorSpace,
                 fn: Union[Callable[[Vector], float], Sequence[Callable[[Vector], float]], None] = None
                 ) -> None:
        """
        Args:
            space: Vector space of the region.
            fn:    Function direction -> scalar, or a sequence of such functions
                   combined by maximum. None (or an empty sequence) is the
                   empty region.
        """
        self.space = space
        if fn is None:
            parts: Tuple[Callable[[Vector], float], ...] = ()
        elif callable(fn):
            parts = (fn,)
        else:
            parts = tuple(fn)
            if not all(callable(p) for p in parts):
                raise TypeError("Bounds components must be callables")
        self._parts = parts

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def empty(cls, space: VectorSpace) -> Bounds:
        """Identity element: the empty region."""
        return cls(space)

    @classmethod
    def from_support(cls, space: VectorSpace, support: SupportFunction) -> Bounds:
        """Build from a support function h(v) = max u·v over the region."""
        return cls(space, lambda v: support(v) / space.norm_sq(v))

    @classmethod
    def from_points(cls, space: VectorSpace, points: Union[np.ndarray, Sequence[VectorLike]]) -> Bounds:
        """Bounding function of the convex hull of a finite point set."""
        pts = space.points(points)
        if len(pts) == 0:
            return cls.empty(space)
        return cls.from_support(space, lambda v: float(np.max(pts @ v)))

    @classmethod
    def concat(cls, space: VectorSpace, items: Iterable[Bounds]) -> Bounds:
        """Fold `combine` over `items`, starting from the identity."""
        acc = cls.empty(space)
        for b in items:
            acc = acc.combine(b)
        return acc

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not self._parts

    def _eval(self, v: Vector) -> float:
        # v is a non-zero direction here
        if not self._parts:
            return 0.0
        return max(float(part(v)) for part in self._parts)

    def __call__(self, direction: VectorLike) -> float:
        v = self.space.vector(direction)
        if self.space.is_zero(v):
            return 0.0
        return self._eval(v)

    def sample(self, directions: Union[np.ndarray, Sequence[VectorLike]]) -> np.ndarray:
        """Evaluate at every row of an (N, n) direction array."""
        dirs = self.space.points(directions)
        return np.array([self(v) for v in dirs], dtype=np.float64)

    def boundary(self, direction: VectorLike) -> Vector:
        """The point s·v where the bounding hyperplane meets the ray along v."""
        v = self.space.vector(direction)
        return self.space.vector(self(v) * v)

    # -------------------------------------------------------------------------
    # Monoid
    # -------------------------------------------------------------------------
    def combine(self, other: Bounds) -> Bounds:
        """Pointwise maximum of the two bounding functions."""
        self.space.check(other.space, "Combined bounds")
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return Bounds(self.space, self._parts + other._parts)

    # -------------------------------------------------------------------------
    # Moving the region or the frame
    # -------------------------------------------------------------------------
    def rebase(self, u: VectorLike) -> Bounds:
        """
        Measure the same region relative to a new origin `u`.

            f'(v) = f(v) - (u · v) / (v · v)

        Rebasing at the zero vector, or rebasing the empty region, returns
        the function unchanged.
        """
        u = self.space.vector(u)
        if self.is_empty or not np.any(u):
            return self
        space, base = self.space, self._eval
        return Bounds(space, lambda v: base(v) - space.inner(u, v) / space.norm_sq(v))

    def translate(self, offset: VectorLike) -> Bounds:
        """Bounding function of the region moved by `offset`."""
        offset = self.space.vector(offset)
        return self.rebase(-offset)

    def transform(self, t: Transformation) -> Bounds:
        """
        Bounding function of the region's image under an invertible affine map.

        For t(x) = A x + b:

            f'(v) = (f(Aᵀ v) · |Aᵀ v|² + b · v) / (v · v)

        Raises:
            NonInvertibleTransform: if A is singular.
        """
        self.space.check(t.space, "Transformation")
        if not t.is_invertible:
            raise NonInvertibleTransform(
                f"Cannot transform bounds by a singular map (det={t.det:.3g})"
            )
        if self.is_empty:
            return self
        space, base = self.space, self._eval
        linear_t, offset = t.linear.T, t.offset
        tol = get_config().zero_tol

        def transformed(v: Vector) -> float:
            w = linear_t @ v
            ww = space.inner(w, w)
            extent = base(w) * ww if ww > tol else 0.0
            return (extent + space.inner(offset, v)) / space.norm_sq(v)

        return Bounds(space, transformed)

    def __repr__(self) -> str:
        if self.is_empty:
            return f"Bounds({self.space}, empty)"
        return f"Bounds({self.space}, parts={len(self._parts)})"
