"""
diagram.py
----------

The Diagram type and its primitive operations.

A diagram is the triple

    (ordered primitives, bounding function, named local points)

built for one backend and therefore living in that backend's vector space.
Diagrams are immutable; every operation below returns a new diagram.

  - `atop(d1, d2)`:         d1 placed over d2, local origins aligned.
  - `beside(v, d1, d2)`:    d2 moved along v until it touches d1, then `atop`.
  - `rebase(e, d)`:         local origin moved to the point denoted by e.
  - `transform(t, d)`:      d mapped by an invertible affine transformation.

With the empty diagram as identity, `atop` makes diagrams a monoid.
"""

from __future__ import annotations

__all__ = ["Diagram", "empty", "atop", "beside", "rebase", "transform"]

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Type, Union

from .backend import Backend
from .bounds import Bounds
from .errors import IncompatibleBackend
from .expressions import ExprLike, as_expr
from .names import NameSet
from .primitive import Prim
from .transforms import Transformation
from .vectors import Vector, VectorLike, VectorSpace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Diagram:
    """
    Composable diagram for backend `backend`.

    Attributes:
        backend (type[Backend]): Backend class the diagram is built for.
        prims (tuple[Prim]):     Primitives in paint order; earlier ones are on top.
        bounds (Bounds):         Bounding function in the local frame.
        names (NameSet):         Named points in the local frame.
    """
    backend: Type[Backend]
    prims: Tuple[Prim, ...] = ()
    bounds: Optional[Bounds] = None
    names: Optional[NameSet] = None

    def __post_init__(self):
        backend = self.backend
        if not (isinstance(backend, type) and issubclass(backend, Backend)):
            raise TypeError(f"backend must be a Backend subclass, not {backend!r}")
        space = backend.space

        prims = tuple(self.prims)
        for prim in prims:
            if not isinstance(prim, Prim):
                raise TypeError(f"Diagram primitives must be Prim instances, not {type(prim).__name__}")
            if not issubclass(backend, prim.backend):
                raise IncompatibleBackend(
                    f"Primitive wrapped for {prim.backend.__name__} cannot join a {backend.__name__} diagram"
                )
        object.__setattr__(self, "prims", prims)

        bounds = self.bounds if self.bounds is not None else Bounds.empty(space)
        space.check(bounds.space, "Diagram bounds")
        object.__setattr__(self, "bounds", bounds)

        names = self.names if self.names is not None else NameSet.empty(space)
        if not isinstance(names, NameSet):
            names = NameSet(space, names)
        space.check(names.space, "Diagram names")
        object.__setattr__(self, "names", names)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    @classmethod
    def empty(cls, backend: Type[Backend]) -> Diagram:
        """Identity element: no primitives, empty bounds, no names."""
        return cls(backend)

    @classmethod
    def lift(cls, backend: Type[Backend], value: Any, bounds: Bounds,
             names: Union[NameSet, Mapping[str, VectorLike], None] = None) -> Diagram:
        """Single-primitive diagram wrapping `value`."""
        return cls(backend, (Prim(backend, value),), bounds, names)

    @classmethod
    def concat(cls, backend: Type[Backend], diagrams: Iterable[Diagram]) -> Diagram:
        """Fold `atop` over `diagrams`; the first one ends up on top."""
        acc = cls.empty(backend)
        for d in diagrams:
            acc = acc.atop(d)
        return acc

    @property
    def space(self) -> VectorSpace:
        return self.backend.space

    def _check_partner(self, other: Diagram) -> None:
        if not isinstance(other, Diagram):
            raise TypeError(f"Expected a Diagram, not {type(other).__name__}")
        if other.backend is not self.backend:
            raise IncompatibleBackend(
                f"Cannot combine a {self.backend.__name__} diagram with a {other.backend.__name__} diagram"
            )

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------
    def atop(self, other: Diagram) -> Diagram:
        """This diagram placed on top of `other`, local origins aligned."""
        self._check_partner(other)
        return Diagram(self.backend,
                       self.prims + other.prims,
                       self.bounds.combine(other.bounds),
                       self.names.union(other.names))

    combine = atop

    def beside(self, direction: VectorLike, other: Diagram) -> Diagram:
        """
        Place `other` next to this diagram along `direction`, touching its boundary.

        `other` is translated by (f1(v) + f2(-v))·v, where f1 and f2 are the
        bounding functions of this diagram and `other`, so that the far side of
        this diagram and the near side of `other` share one hyperplane.
        """
        self._check_partner(other)
        v = self.space.vector(direction)
        if self.space.is_zero(v):
            raise ValueError("beside() needs a non-zero direction")
        shift = self.bounds(v) + other.bounds(-v)
        logger.debug(f"beside: moving right operand by {shift:.6g} along {v.tolist()}")
        return self.atop(other.translate(shift * v))

    # -------------------------------------------------------------------------
    # Frames and transformations
    # -------------------------------------------------------------------------
    def rebase(self, expr: ExprLike) -> Diagram:
        """
        Same diagram with the local origin moved to the point `expr` denotes.

        Primitives and named points are shifted by -u and the bounding function
        is rebased at u, so nothing moves relative to the new origin's old
        position.
        """
        u = as_expr(expr).evaluate(self.names)
        if not u.any():
            return self
        logger.debug(f"rebase: new local origin at {u.tolist()}")
        shift = Transformation.translation(-u, self.space)
        return Diagram(self.backend,
                       tuple(p.transform(shift) for p in self.prims),
                       self.bounds.rebase(u),
                       self.names.translate(-u))

    def transform(self, t: Transformation) -> Diagram:
        """
        Image of the diagram under `t`.

        Raises:
            NonInvertibleTransform: if `t` is singular (bounds need the inverse).
        """
        self.space.check(t.space, "Transformation")
        bounds = self.bounds.transform(t)
        return Diagram(self.backend,
                       tuple(p.transform(t) for p in self.prims),
                       bounds,
                       self.names.transform(t))

    def translate(self, offset: VectorLike) -> Diagram:
        offset = self.space.vector(offset)
        return self.transform(Transformation.translation(offset, self.space))

    # -------------------------------------------------------------------------
    # Queries and names
    # -------------------------------------------------------------------------
    def extent(self, direction: VectorLike) -> float:
        """Bounding function evaluated at `direction`."""
        return self.bounds(direction)

    def point(self, expr: ExprLike) -> Vector:
        """Resolve a local-point expression against this diagram's names."""
        return as_expr(expr).evaluate(self.names)

    def with_name(self, name: str, expr: ExprLike) -> Diagram:
        """Copy with `name` bound to the point `expr` denotes."""
        return Diagram(self.backend, self.prims, self.bounds,
                       self.names.with_point(name, self.point(expr)))

    def qualify(self, prefix: str) -> Diagram:
        """Copy with every name prefixed, e.g. "center" -> "left.center"."""
        return Diagram(self.backend, self.prims, self.bounds, self.names.qualify(prefix))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def render(self, backend: Backend, options: Sequence[Any] = ()) -> Any:
        return backend.render_diagram(options, self)

    def __repr__(self) -> str:
        return (f"Diagram[{self.backend.__name__}](prims={len(self.prims)}, "
                f"names={list(self.names)})")


# -----------------------------------------------------------------------------
# Functional spelling of the primitive operations
# -----------------------------------------------------------------------------
def empty(backend: Type[Backend]) -> Diagram:
    return Diagram.empty(backend)


def atop(d1: Diagram, d2: Diagram) -> Diagram:
    return d1.atop(d2)


def beside(direction: VectorLike, d1: Diagram, d2: Diagram) -> Diagram:
    return d1.beside(direction, d2)


def rebase(expr: ExprLike, diagram: Diagram) -> Diagram:
    return diagram.rebase(expr)


def transform(t: Transformation, diagram: Diagram) -> Diagram:
    return diagram.transform(t)
