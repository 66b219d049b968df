"""
vectors.py
----------

Vector-space collaborator of the diagram core.

Vectors are plain read-only `numpy` float64 arrays of shape (n,). A
`VectorSpace` only records the dimension and knows how to build, check and
combine such arrays; the rest of the library never inspects coordinates
directly beyond what is exposed here.
"""

from __future__ import annotations

__all__ = [
    "Vector", "VectorLike", "VectorSpace",
    "R1", "R2", "R3",
    "freeze",
]

from dataclasses import dataclass, field
from typing import Sequence, TypeAlias, Union

import numpy as np
from numpy.typing import NDArray

from .config import get_config
from .errors import IncompatibleBackend

Vector: TypeAlias = NDArray[np.float64]  # shape (n,), read-only
VectorLike: TypeAlias = Union[Vector, Sequence[float]]


def freeze(arr: np.ndarray) -> np.ndarray:
    """Return a read-only float64 copy of `arr`."""
    out = np.array(arr, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class VectorSpace:
    """
    Euclidean space R^dim with the standard inner product.

    `name` is a display label only; spaces of equal dimension compare equal.
    """
    dim: int
    name: str = field(default="", compare=False)

    def __post_init__(self):
        if not isinstance(self.dim, int) or isinstance(self.dim, bool):
            raise TypeError(f"dim must be an int, not {type(self.dim).__name__}")
        if self.dim < 1:
            raise ValueError(f"dim must be positive, got {self.dim}")
        if not self.name:
            object.__setattr__(self, "name", f"R{self.dim}")

    def __str__(self) -> str:
        return self.name

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    def vector(self, *coords: Union[float, VectorLike]) -> Vector:
        """Build a vector from coordinates or from a single vector-like value.

        Example:
            >>> R2.vector(1, 2)
            >>> R2.vector((1, 2))
        """
        if len(coords) == 1 and np.ndim(coords[0]) > 0:
            coords = coords[0]
        arr = np.asarray(coords, dtype=np.float64)
        if arr.shape != (self.dim,):
            raise IncompatibleBackend(
                f"Expected a vector of shape ({self.dim},) in {self.name}, got shape {arr.shape}"
            )
        if not arr.flags.writeable and arr.base is None:
            return arr
        return freeze(arr)

    coerce = vector

    def points(self, pts: Union[np.ndarray, Sequence[VectorLike]]) -> np.ndarray:
        """Build a read-only (N, dim) array of points."""
        arr = np.asarray(pts, dtype=np.float64)
        if arr.size == 0:
            arr = arr.reshape(0, self.dim)
        if arr.ndim != 2 or arr.shape[1] != self.dim:
            raise IncompatibleBackend(
                f"Expected points of shape (N, {self.dim}) in {self.name}, got shape {arr.shape}"
            )
        return freeze(arr)

    def zero(self) -> Vector:
        return freeze(np.zeros(self.dim))

    def basis(self, i: int) -> Vector:
        """Unit vector along axis `i`."""
        if not 0 <= i < self.dim:
            raise IndexError(f"Axis {i} out of range for {self.name}")
        e = np.zeros(self.dim)
        e[i] = 1.0
        return freeze(e)

    # -------------------------------------------------------------------------
    # Inner product structure
    # -------------------------------------------------------------------------
    @staticmethod
    def inner(u: Vector, v: Vector) -> float:
        return float(np.dot(u, v))

    def norm_sq(self, v: Vector) -> float:
        return self.inner(v, v)

    def is_zero(self, v: Vector) -> bool:
        """True for the zero direction (v·v at or below `zero_tol`, 0.0 by default)."""
        return self.norm_sq(v) <= get_config().zero_tol

    def unit(self, v: VectorLike) -> Vector:
        v = self.vector(v)
        if self.is_zero(v):
            raise ValueError("Cannot normalize the zero vector")
        return freeze(v / np.sqrt(self.norm_sq(v)))

    # -------------------------------------------------------------------------
    # Compatibility
    # -------------------------------------------------------------------------
    def check(self, other: VectorSpace, what: str = "value") -> None:
        """Raise IncompatibleBackend unless `other` is this space."""
        if other != self:
            raise IncompatibleBackend(f"{what} lives in {other}, expected {self}")


R1 = VectorSpace(1)
R2 = VectorSpace(2)
R3 = VectorSpace(3)
