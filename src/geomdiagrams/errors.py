"""
errors.py
---------

Typed exceptions raised by the diagram algebra.

Every operation either returns a new immutable value or raises one of these
before anything is built, so there is never partially updated state to clean
up.
"""

from __future__ import annotations

__all__ = [
    "DiagramError",
    "IncompatibleBackend",
    "UnsupportedPrimitive",
    "NonInvertibleTransform",
    "UnknownName",
]


class DiagramError(Exception):
    """Base class for all diagram algebra errors."""


class IncompatibleBackend(DiagramError, TypeError):
    """Components disagree on backend or vector space."""


class UnsupportedPrimitive(DiagramError, TypeError):
    """A value cannot be wrapped or rendered for the requested backend."""


class NonInvertibleTransform(DiagramError, ValueError):
    """A transformation without an inverse was used where one is required."""


class UnknownName(DiagramError, KeyError):
    """A local-point expression referenced a name the diagram does not define."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""
