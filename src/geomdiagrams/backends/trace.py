"""
trace.py
--------

Recording backend.

`TraceBackend` turns each primitive into a plain tuple and returns the list
of tuples in render order. It draws nothing, which makes it the reference
backend for checking paint order and transform/render behavior, and a
template for new backends. Subclass it to record diagrams of another space:

    >>> class Trace3(TraceBackend):
    ...     space = R3
"""

from __future__ import annotations

__all__ = ["TraceBackend", "Trace", "Precision"]

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..backend import Backend
from ..diagram import Diagram
from ..shapes import Ellipse, Polygon
from ..vectors import R2


@dataclass(frozen=True)
class Precision:
    """Round recorded coordinates to `digits` decimals."""
    digits: int = 6


@dataclass(frozen=True)
class Trace:
    """Result of a TraceBackend render: one record per primitive, in order."""
    records: Tuple[tuple, ...]
    names: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def kinds(self) -> List[str]:
        return [r[0] for r in self.records]


def _rounded(obj: Any, digits: Optional[int]) -> Any:
    if digits is None:
        return obj
    if isinstance(obj, float):
        return round(obj, digits) + 0.0  # avoid -0.0
    if isinstance(obj, tuple):
        return tuple(_rounded(x, digits) for x in obj)
    return obj


class TraceBackend(Backend):
    """Backend whose render context is a tuple describing the primitive."""

    space = R2
    option_types = (Precision,)

    def compose(self, options: List[Any], diagram: Diagram, contexts: List[tuple]) -> Trace:
        digits = None
        for opt in options:
            digits = opt.digits  # last one wins
        records = tuple(_rounded(c, digits) for c in contexts)
        return Trace(records, tuple(diagram.names))


@TraceBackend.renders(Ellipse)
def _trace_ellipse(backend: TraceBackend, shape: Ellipse) -> tuple:
    return ("ellipse",
            tuple(float(x) for x in shape.center),
            tuple(tuple(float(x) for x in row) for row in shape.axes),
            shape.style)


@TraceBackend.renders(Polygon)
def _trace_polygon(backend: TraceBackend, shape: Polygon) -> tuple:
    return ("polygon",
            tuple(tuple(float(x) for x in row) for row in shape.vertices),
            shape.closed,
            shape.style)
