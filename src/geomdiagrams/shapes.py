"""
shapes.py
---------

Concrete geometric primitives and diagram constructors built on them.

Two primitive types cover the bundled constructors:

  - `Ellipse`: affine image of the unit ball (circles, ellipses, ellipsoids).
    Closed under every affine map, so transforming never loses precision.
  - `Polygon`: a vertex sequence, closed (polygon) or open (polyline).

Each primitive exposes its support function h(v) = max u·v, from which the
bounding function of its diagram is derived.

Coordinates are y-up: "top" has the larger y.
"""

from __future__ import annotations

__all__ = [
    "Style", "Ellipse", "Polygon", "bounds_of",
    "circle", "ellipse", "rect", "polygon", "polyline", "regular_polygon",
]

import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Type, Union

import numpy as np

from .backend import Backend
from .bounds import Bounds
from .diagram import Diagram
from .errors import IncompatibleBackend
from .transforms import Transformation
from .vectors import R2, Vector, VectorLike, VectorSpace, freeze


# =============================================================================
# Style
# =============================================================================
@dataclass(frozen=True)
class Style:
    """Stroke and fill attributes carried unchanged through transformations."""
    stroke: str = "black"
    fill: str = "none"
    linewidth: float = 1.0
    alpha: float = 1.0

    def __post_init__(self):
        if self.linewidth < 0:
            raise ValueError(f"linewidth must be non-negative, got {self.linewidth}")
        object.__setattr__(self, "alpha", max(0.0, min(float(self.alpha), 1.0)))


DEFAULT_STYLE = Style()


# =============================================================================
# Primitives
# =============================================================================
@dataclass(frozen=True, eq=False)
class Ellipse:
    """
    Region {center + axes @ u : |u| <= 1}.

    Attributes:
        center (ndarray): (n,) center point.
        axes (ndarray):   (n, n) matrix whose columns are conjugate semi-axes.
        style (Style):    Drawing attributes.
    """
    center: Vector
    axes: np.ndarray
    style: Style = field(default=DEFAULT_STYLE)

    def __post_init__(self):
        center = np.asarray(self.center, dtype=np.float64)
        axes = np.asarray(self.axes, dtype=np.float64)
        if center.ndim != 1 or axes.shape != (center.shape[0], center.shape[0]):
            raise ValueError(
                f"Ellipse needs an (n,) center and (n, n) axes, got {center.shape} and {axes.shape}"
            )
        object.__setattr__(self, "center", freeze(center))
        object.__setattr__(self, "axes", freeze(axes))

    @classmethod
    def circle(cls, radius: float, center: Optional[VectorLike] = None,
               space: VectorSpace = R2, style: Style = DEFAULT_STYLE) -> Ellipse:
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        c = space.zero() if center is None else space.vector(center)
        return cls(c, radius * np.eye(space.dim), style)

    @property
    def space(self) -> VectorSpace:
        return VectorSpace(self.center.shape[0])

    @property
    def radii(self) -> np.ndarray:
        """Semi-axis lengths, largest first."""
        return np.linalg.svd(self.axes, compute_uv=False)

    def support(self, v: Vector) -> float:
        return float(self.center @ v + np.linalg.norm(self.axes.T @ v))

    def transform(self, t: Transformation) -> Ellipse:
        return Ellipse(t.apply(self.center), t.linear @ self.axes, self.style)

    def __repr__(self) -> str:
        return f"Ellipse(center={self.center.tolist()}, radii={np.round(self.radii, 6).tolist()})"


@dataclass(frozen=True, eq=False)
class Polygon:
    """
    Vertex sequence, closed (polygon) or open (polyline).

    Attributes:
        vertices (ndarray): (N, n) vertex array, N >= 1.
        closed (bool):      Whether the last vertex connects back to the first.
        style (Style):      Drawing attributes.
    """
    vertices: np.ndarray
    closed: bool = True
    style: Style = field(default=DEFAULT_STYLE)

    def __post_init__(self):
        verts = np.asarray(self.vertices, dtype=np.float64)
        if verts.ndim != 2 or verts.shape[0] < 1:
            raise ValueError(f"Polygon needs an (N, n) vertex array with N >= 1, got {verts.shape}")
        object.__setattr__(self, "vertices", freeze(verts))
        object.__setattr__(self, "closed", bool(self.closed))

    @property
    def space(self) -> VectorSpace:
        return VectorSpace(self.vertices.shape[1])

    def support(self, v: Vector) -> float:
        return float(np.max(self.vertices @ v))

    def transform(self, t: Transformation) -> Polygon:
        return Polygon(t.apply_points(self.vertices), self.closed, self.style)

    def __repr__(self) -> str:
        kind = "closed" if self.closed else "open"
        return f"Polygon({len(self.vertices)} vertices, {kind})"


Shape = Union[Ellipse, Polygon]


def bounds_of(shape: Shape) -> Bounds:
    """Bounding function of a shape in its own frame."""
    return Bounds.from_support(shape.space, shape.support)


# =============================================================================
# Diagram constructors
# =============================================================================
def _require_plane(backend: Type[Backend], what: str) -> VectorSpace:
    if backend.space.dim != 2:
        raise IncompatibleBackend(f"{what} is only defined in two dimensions, {backend.__name__} uses {backend.space}")
    return backend.space


def _shape_diagram(backend: Type[Backend], shape: Shape,
                   names: Mapping[str, VectorLike]) -> Diagram:
    return Diagram.lift(backend, shape, bounds_of(shape), names)


def circle(backend: Type[Backend], radius: float, center: Optional[VectorLike] = None,
           style: Style = DEFAULT_STYLE) -> Diagram:
    """Circle (ball in higher dimensions) with a "center" name."""
    shape = Ellipse.circle(radius, center, backend.space, style)
    return _shape_diagram(backend, shape, {"center": shape.center})


def ellipse(backend: Type[Backend], rx: float, ry: float,
            style: Style = DEFAULT_STYLE) -> Diagram:
    """Axis-aligned ellipse centered at the origin."""
    space = _require_plane(backend, "ellipse")
    if rx < 0 or ry < 0:
        raise ValueError(f"radii must be non-negative, got ({rx}, {ry})")
    shape = Ellipse(space.zero(), np.diag([rx, ry]), style)
    return _shape_diagram(backend, shape, {"center": shape.center})


def rect(backend: Type[Backend], width: float, height: float,
         style: Style = DEFAULT_STYLE) -> Diagram:
    """
    Axis-aligned rectangle centered at the origin.

    Names: center, left, right, top, bottom, topleft, topright, bottomleft,
    bottomright.
    """
    space = _require_plane(backend, "rect")
    if width < 0 or height < 0:
        raise ValueError(f"width and height must be non-negative, got ({width}, {height})")
    w, h = width / 2.0, height / 2.0
    corners = [(-w, -h), (w, -h), (w, h), (-w, h)]
    names: Dict[str, VectorLike] = {
        "center": (0.0, 0.0),
        "left": (-w, 0.0), "right": (w, 0.0),
        "top": (0.0, h), "bottom": (0.0, -h),
        "topleft": (-w, h), "topright": (w, h),
        "bottomleft": (-w, -h), "bottomright": (w, -h),
    }
    shape = Polygon(space.points(corners), True, style)
    return _shape_diagram(backend, shape, names)


def polygon(backend: Type[Backend], points: Sequence[VectorLike],
            style: Style = DEFAULT_STYLE, closed: bool = True) -> Diagram:
    """Polygon through `points`; vertex i is named "v{i}"."""
    verts = backend.space.points(points)
    if len(verts) == 0:
        raise ValueError("polygon needs at least one vertex")
    shape = Polygon(verts, closed, style)
    return _shape_diagram(backend, shape, {f"v{i}": p for i, p in enumerate(verts)})


def polyline(backend: Type[Backend], points: Sequence[VectorLike],
             style: Style = DEFAULT_STYLE) -> Diagram:
    """Open polyline through `points`; vertex i is named "v{i}"."""
    return polygon(backend, points, style, closed=False)


def regular_polygon(backend: Type[Backend], sides: int, radius: float = 1.0,
                    style: Style = DEFAULT_STYLE) -> Diagram:
    """Regular polygon inscribed in a circle of `radius`, first vertex straight up."""
    _require_plane(backend, "regular_polygon")
    if sides < 3:
        raise ValueError(f"A regular polygon needs at least 3 sides, got {sides}")
    angles = math.pi / 2 + 2 * math.pi * np.arange(sides) / sides
    verts = radius * np.column_stack([np.cos(angles), np.sin(angles)])
    return polygon(backend, verts, style).with_name("center", (0.0, 0.0))
