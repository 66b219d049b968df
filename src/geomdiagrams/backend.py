"""
backend.py
----------

The two-sided contract between rendering targets and primitive types.

A backend is a subclass of `Backend`. The class itself plays the role of the
backend type and declares:

  - `space`:        vector space the backend draws in;
  - `option_types`: the option value types `render_diagram` accepts;
  - `compose()`:    how per-primitive render contexts become the final result.

An instance is the backend token. It is created once by the caller and is
never mutated by the core.

The Renderable relation connects a primitive type to a backend class:

    >>> @MatplotlibBackend.renders(Ellipse)
    ... def _render_ellipse(backend, ellipse):
    ...     return PathPatch(...)

Renderer lookup walks the primitive type's MRO and then the backend's MRO,
so subclasses of a primitive are renderable wherever the parent is, and a
backend subclass inherits all renderers of its parent backend.
"""

from __future__ import annotations

__all__ = ["Backend", "Renderer", "render_diagram"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Sequence, Tuple

from .errors import IncompatibleBackend, UnsupportedPrimitive
from .transforms import Transformable
from .vectors import VectorSpace

if TYPE_CHECKING:
    from .diagram import Diagram

Renderer = Callable[["Backend", Any], Any]  # (backend token, primitive) -> render context

logger = logging.getLogger(__name__)


class Backend(ABC):
    """
    Abstract rendering target.

    Class attributes:
        space (VectorSpace):       Vector space of diagrams this backend renders.
        option_types (tuple):      Accepted option value types.
    """

    space: ClassVar[VectorSpace]
    option_types: ClassVar[Tuple[type, ...]] = ()
    _renderers: ClassVar[Dict[type, Renderer]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._renderers = {}

    # -------------------------------------------------------------------------
    # Renderable relation
    # -------------------------------------------------------------------------
    @classmethod
    def renders(cls, prim_type: type) -> Callable[[Renderer], Renderer]:
        """Decorator registering a renderer for `prim_type` on this backend."""
        if not isinstance(prim_type, type):
            raise TypeError(f"renders() expects a type, not {type(prim_type).__name__}")

        def register(fn: Renderer) -> Renderer:
            cls._renderers[prim_type] = fn
            logger.debug(f"Registered {prim_type.__name__} renderer on {cls.__name__}")
            return fn

        return register

    @classmethod
    def renderer_for(cls, prim_type: type) -> Optional[Renderer]:
        for ptype in prim_type.__mro__:
            for btype in cls.__mro__:
                registry = btype.__dict__.get("_renderers")
                if registry and ptype in registry:
                    return registry[ptype]
        return None

    @classmethod
    def supports(cls, prim_type: type) -> bool:
        return cls.renderer_for(prim_type) is not None

    def render(self, value: Any) -> Any:
        """Turn one primitive into this backend's render context."""
        renderer = self.renderer_for(type(value))
        if renderer is None:
            raise UnsupportedPrimitive(
                f"{type(self).__name__} cannot render {type(value).__name__}"
            )
        return renderer(self, value)

    # -------------------------------------------------------------------------
    # Diagram rendering
    # -------------------------------------------------------------------------
    @classmethod
    def check_value(cls, value: Any) -> None:
        """Raise unless `value` may be wrapped as a primitive for this backend."""
        if getattr(cls, "space", None) is None:
            raise TypeError(f"{cls.__name__} does not declare a vector space")
        if not isinstance(value, Transformable):
            raise UnsupportedPrimitive(
                f"{type(value).__name__} is not transformable (needs `space` and `transform`)"
            )
        cls.space.check(value.space, type(value).__name__)
        if not cls.supports(type(value)):
            raise UnsupportedPrimitive(f"{cls.__name__} cannot render {type(value).__name__}")

    def check_options(self, options: Sequence[Any]) -> List[Any]:
        options = list(options)
        for opt in options:
            if not isinstance(opt, self.option_types):
                raise IncompatibleBackend(
                    f"{type(opt).__name__} is not an option of {type(self).__name__}"
                )
        return options

    def render_diagram(self, options: Sequence[Any], diagram: Diagram) -> Any:
        """
        Render `diagram` with backend-specific `options`.

        Calls `render` exactly once per primitive, in the diagram's primitive
        order, then hands the contexts to `compose`.
        """
        if not isinstance(self, diagram.backend):
            raise IncompatibleBackend(
                f"Diagram built for {diagram.backend.__name__} cannot be rendered by {type(self).__name__}"
            )
        options = self.check_options(options)
        logger.debug(f"{type(self).__name__}: rendering {len(diagram.prims)} primitive(s)")
        contexts = [prim.render(self) for prim in diagram.prims]
        return self.compose(options, diagram, contexts)

    @abstractmethod
    def compose(self, options: List[Any], diagram: Diagram, contexts: List[Any]) -> Any:
        """Assemble the final result from render contexts (in primitive order)."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} space={self.space}>"


def render_diagram(backend: Backend, options: Sequence[Any], diagram: Diagram) -> Any:
    """Module-level entry point: `backend.render_diagram(options, diagram)`."""
    return backend.render_diagram(options, diagram)
