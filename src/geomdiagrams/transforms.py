"""
transforms.py
-------------

Affine transformations and the Transformable capability.

A `Transformation` is the map x -> A x + b on one vector space. It carries
its own inverse (computed on first use), which is what allows bounding
functions to be pushed through it; a singular linear part raises
`NonInvertibleTransform` wherever an inverse is required.

Anything with a `space` attribute and a `transform(t)` method returning a
value of the same kind is `Transformable`. Primitives, bounding functions,
named-point sets and diagrams all are.
"""

from __future__ import annotations

__all__ = ["Transformable", "Transformation", "translate"]

from typing import Optional, Protocol, Sequence, TypeVar, Union, runtime_checkable

import numpy as np

from .config import get_config
from .errors import NonInvertibleTransform
from .vectors import R2, Vector, VectorLike, VectorSpace, freeze

T = TypeVar("T", bound="Transformable")


@runtime_checkable
class Transformable(Protocol):
    """Values that can be moved by a Transformation of their own space."""
    space: VectorSpace

    def transform(self: T, t: Transformation) -> T:
        ...


class Transformation:
    """
    Affine map x -> linear @ x + offset.

    Attributes:
        space (VectorSpace): Space the map acts on.
        linear (ndarray):    (n, n) read-only linear part.
        offset (ndarray):    (n,) read-only translation part.
    """

    __slots__ = ("space", "linear", "offset", "_inverse")

    def __init__(self, linear: Union[np.ndarray, Sequence[Sequence[float]]],
                 offset: Optional[VectorLike] = None,
                 space: Optional[VectorSpace] = None) -> None:
        mat = np.asarray(linear, dtype=np.float64)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1] or mat.shape[0] < 1:
            raise ValueError(f"Linear part must be a non-empty square matrix, got shape {mat.shape}")
        if space is not None and space.dim != mat.shape[0]:
            raise ValueError(f"A {mat.shape[0]}x{mat.shape[0]} matrix cannot act on {space}")
        self.space = space if space is not None else VectorSpace(mat.shape[0])
        self.linear = freeze(mat)
        self.offset = self.space.zero() if offset is None else self.space.vector(offset)
        self._inverse: Optional[Transformation] = None

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def identity(cls, space: VectorSpace = R2) -> Transformation:
        return cls(np.eye(space.dim), space=space)

    @classmethod
    def translation(cls, v: VectorLike, space: Optional[VectorSpace] = None) -> Transformation:
        v = np.asarray(v, dtype=np.float64) if space is None else space.vector(v)
        if v.ndim != 1:
            raise ValueError(f"Translation vector must be one-dimensional, got shape {v.shape}")
        return cls(np.eye(v.shape[0]), v, space=space)

    @classmethod
    def scaling(cls, factors: Union[float, VectorLike], space: VectorSpace = R2) -> Transformation:
        """Uniform (scalar) or per-axis scaling about the origin."""
        factors = np.broadcast_to(np.asarray(factors, dtype=np.float64), (space.dim,))
        return cls(np.diag(factors), space=space)

    @classmethod
    def rotation(cls, theta: float) -> Transformation:
        """Counter-clockwise rotation of R2 by `theta` radians."""
        c, sn = np.cos(theta), np.sin(theta)
        return cls([[c, -sn], [sn, c]])

    @classmethod
    def srt(cls, sf: float, theta: float, tx: float, ty: float) -> Transformation:
        """Scale -> rotate -> translate map of R2."""
        c, sn = np.cos(theta), np.sin(theta)
        return cls([[sf * c, -sf * sn],
                    [sf * sn, sf * c]], (tx, ty))

    @classmethod
    def from_matrix(cls, mat: Union[np.ndarray, Sequence[Sequence[float]]]) -> Transformation:
        """Build from an (n+1, n+1) homogeneous matrix with a [0 ... 0 1] last row."""
        mat = np.asarray(mat, dtype=np.float64)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1] or mat.shape[0] < 2:
            raise ValueError(f"Homogeneous matrix must be square and at least 2x2, got shape {mat.shape}")
        n = mat.shape[0] - 1
        expected = np.zeros(n + 1)
        expected[n] = 1.0
        if not np.allclose(mat[n], expected):
            raise ValueError(f"Last row of a homogeneous affine matrix must be {expected.tolist()}")
        return cls(mat[:n, :n], mat[:n, n])

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------
    @property
    def matrix(self) -> np.ndarray:
        """Homogeneous (n+1, n+1) matrix form."""
        n = self.space.dim
        mat = np.eye(n + 1)
        mat[:n, :n] = self.linear
        mat[:n, n] = self.offset
        return mat

    @property
    def det(self) -> float:
        return float(np.linalg.det(self.linear))

    @property
    def is_invertible(self) -> bool:
        return abs(self.det) > get_config().singular_tol

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    def apply(self, point: VectorLike) -> Vector:
        """Image of a point (linear part and offset)."""
        p = self.space.vector(point)
        return freeze(self.linear @ p + self.offset)

    def apply_vector(self, v: VectorLike) -> Vector:
        """Image of a free vector (linear part only)."""
        v = self.space.vector(v)
        return freeze(self.linear @ v)

    def apply_points(self, pts: np.ndarray) -> np.ndarray:
        """Apply the map to an (N, n) array of points."""
        pts = self.space.points(pts)
        return freeze(pts @ self.linear.T + self.offset)

    def __call__(self, point: VectorLike) -> Vector:
        return self.apply(point)

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------
    def compose(self, other: Transformation) -> Transformation:
        """Return self ∘ other, i.e. `other` is applied first."""
        self.space.check(other.space, "Composed transformation")
        return Transformation(self.linear @ other.linear,
                              self.linear @ other.offset + self.offset,
                              space=self.space)

    def inverse(self) -> Transformation:
        if self._inverse is None:
            if not self.is_invertible:
                raise NonInvertibleTransform(
                    f"Transformation with det={self.det:.3g} has no inverse"
                )
            inv = np.linalg.inv(self.linear)
            self._inverse = Transformation(inv, -(inv @ self.offset), space=self.space)
            self._inverse._inverse = self
        return self._inverse

    def isclose(self, other: Transformation, atol: float = 1e-9) -> bool:
        return (self.space == other.space
                and np.allclose(self.linear, other.linear, atol=atol)
                and np.allclose(self.offset, other.offset, atol=atol))

    def __repr__(self) -> str:
        return (f"Transformation(linear={self.linear.tolist()}, "
                f"offset={self.offset.tolist()})")


def translate(obj: T, v: VectorLike) -> T:
    """Translate any Transformable by `v`."""
    return obj.transform(Transformation.translation(v, obj.space))
