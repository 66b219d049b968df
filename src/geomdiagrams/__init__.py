"""
geomdiagrams
------------

Backend-agnostic core of a declarative diagram engine: primitives of any
shape are wrapped for a backend, combined into diagrams with functional
bounding regions and named points, composed with `atop`/`beside`, moved with
`rebase`/`transform`, and finally handed to a backend for rendering.

Concrete backends live in `geomdiagrams.backends`.
"""

from .errors import (
    DiagramError, IncompatibleBackend, UnsupportedPrimitive,
    NonInvertibleTransform, UnknownName,
)
from .config import CoreConfig, RenderConfig, configure, get_config, override_config
from .vectors import R1, R2, R3, Vector, VectorSpace
from .transforms import Transformable, Transformation, translate
from .bounds import Bounds
from .names import NameSet
from .expressions import (
    LExpr, Origin, Const, Named, Sum, Difference, Scaled, Between, as_expr, evaluate,
)
from .backend import Backend, render_diagram
from .primitive import Prim
from .diagram import Diagram, atop, beside, empty, rebase, transform
from .shapes import (
    Style, Ellipse, Polygon, bounds_of,
    circle, ellipse, rect, polygon, polyline, regular_polygon,
)
from .logging_utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    # errors
    "DiagramError", "IncompatibleBackend", "UnsupportedPrimitive",
    "NonInvertibleTransform", "UnknownName",
    # config and logging
    "CoreConfig", "RenderConfig", "configure", "get_config", "override_config",
    "configure_logging",
    # vector space and transformations
    "R1", "R2", "R3", "Vector", "VectorSpace",
    "Transformable", "Transformation", "translate",
    # algebra
    "Bounds", "NameSet",
    "LExpr", "Origin", "Const", "Named", "Sum", "Difference", "Scaled", "Between",
    "as_expr", "evaluate",
    "Backend", "render_diagram", "Prim",
    "Diagram", "atop", "beside", "empty", "rebase", "transform",
    # shapes
    "Style", "Ellipse", "Polygon", "bounds_of",
    "circle", "ellipse", "rect", "polygon", "polyline", "regular_polygon",
]
