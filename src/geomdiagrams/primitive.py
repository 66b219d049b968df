"""
primitive.py
------------

The primitive container.

`Prim` wraps one value of any type that is Transformable and Renderable for a
given backend. Code holding a `Prim` only relies on those two capabilities,
so circles, polygons and user-defined shapes can share one diagram.

Both capabilities are checked when the value is wrapped; a `Prim` that
exists can always be transformed and rendered.
"""

from __future__ import annotations

__all__ = ["Prim"]

from typing import Any, Type

from .backend import Backend
from .errors import IncompatibleBackend
from .transforms import Transformation
from .vectors import VectorSpace


class Prim:
    """
    Opaque primitive renderable by backend `backend`.

    Attributes:
        backend (type[Backend]): Backend class the value is renderable for.
    """

    __slots__ = ("backend", "_value")

    def __init__(self, backend: Type[Backend], value: Any) -> None:
        if not (isinstance(backend, type) and issubclass(backend, Backend)):
            raise TypeError(f"backend must be a Backend subclass, not {backend!r}")
        backend.check_value(value)
        self.backend = backend
        self._value = value

    @classmethod
    def wrap(cls, backend: Type[Backend], value: Any) -> Prim:
        return cls(backend, value)

    @property
    def value(self) -> Any:
        """The wrapped primitive (read-only)."""
        return self._value

    @property
    def space(self) -> VectorSpace:
        return self.backend.space

    def transform(self, t: Transformation) -> Prim:
        """New container around the transformed value; the original is untouched."""
        self.space.check(t.space, "Transformation")
        return Prim(self.backend, self._value.transform(t))

    def render(self, backend: Backend) -> Any:
        """Render the wrapped value with the backend token `backend`."""
        if not isinstance(backend, self.backend):
            raise IncompatibleBackend(
                f"Primitive wrapped for {self.backend.__name__} cannot be rendered by {type(backend).__name__}"
            )
        return backend.render(self._value)

    def __repr__(self) -> str:
        return f"Prim[{self.backend.__name__}]({self._value!r})"
