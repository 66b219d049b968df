"""
config.py
---------

Configuration dataclasses for the diagram core and the bundled backends.

`CoreConfig` holds the numeric tolerances used by the algebra. A single
process-wide instance is active at a time; it is replaced, never mutated:

    >>> configure(singular_tol=1e-9)
    >>> with override_config(singular_tol=0.0):
    ...     ...

`RenderConfig` collects the Matplotlib backend settings. Backend option
values are folded into it with `dataclasses.replace`.
"""

from __future__ import annotations

__all__ = [
    "CoreConfig", "RenderConfig",
    "get_config", "configure", "override_config",
]

import logging
import threading
import contextlib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class CoreConfig:
    """Numeric tolerances of the diagram algebra."""
    zero_tol: float = 0.0        # v·v at or below this is a zero direction
    singular_tol: float = 1e-12  # |det A| at or below this is not invertible
    log_level: int = logging.WARNING

    def __post_init__(self):
        for field_name in ("zero_tol", "singular_tol"):
            value = getattr(self, field_name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise TypeError(f"{field_name} must be a real number, not {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{field_name} must be non-negative, got {value}")
            object.__setattr__(self, field_name, float(value))


@dataclass(frozen=True)
class RenderConfig:
    """Immutable settings consumed by the Matplotlib backend."""
    img_size: Tuple[int, int] = (640, 480)
    dpi: int = 100
    padding: float = 0.05  # fraction of the larger extent added on every side
    background: str = "white"
    output_file: Optional[Path] = None

    def __post_init__(self):
        width, height = self.img_size
        if width <= 0 or height <= 0:
            raise ValueError(f"img_size must be positive, got {self.img_size}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative, got {self.padding}")
        if self.output_file is not None and not isinstance(self.output_file, Path):
            object.__setattr__(self, "output_file", Path(self.output_file))

    @property
    def figsize(self) -> Tuple[float, float]:
        """Figure size in inches."""
        return self.img_size[0] / self.dpi, self.img_size[1] / self.dpi


_lock = threading.Lock()
_current: CoreConfig = CoreConfig()


def get_config() -> CoreConfig:
    return _current


def configure(config: Optional[CoreConfig] = None, **overrides: Any) -> CoreConfig:
    """Install a new process-wide CoreConfig and return it.

    Args:
        config:      Complete replacement. Defaults to the current config.
        **overrides: Individual fields replaced on top of `config`.
    """
    global _current
    with _lock:
        previous = _current
        base = config if config is not None else previous
        _current = replace(base, **overrides) if overrides else base
        # leave levels set by configure_logging() alone unless log_level changed
        if _current.log_level != previous.log_level:
            logging.getLogger(__package__ or "geomdiagrams").setLevel(_current.log_level)
        return _current


@contextlib.contextmanager
def override_config(**overrides: Union[int, float]) -> Iterator[CoreConfig]:
    """Temporarily replace config fields; the previous config is restored on exit."""
    previous = get_config()
    try:
        yield configure(**overrides)
    finally:
        configure(previous)
