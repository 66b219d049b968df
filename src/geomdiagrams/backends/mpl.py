"""
mpl.py
------

Matplotlib backend.

Ellipses and polygons become `PathPatch` artists. The first primitive of a
diagram is painted on top (highest zorder). Axis limits come from the
diagram's bounding function along the four axis directions, so the whole
diagram is always in view.

The figure is created without pyplot and with an Agg canvas, which keeps the
backend usable from worker threads and headless processes.
"""

from __future__ import annotations

__all__ = ["MatplotlibBackend", "Size", "Dpi", "Padding", "Background", "OutputFile"]

import os
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple, Union

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath
from matplotlib.transforms import Affine2D

from ..backend import Backend
from ..bounds import Bounds
from ..config import RenderConfig
from ..diagram import Diagram
from ..shapes import Ellipse, Polygon, Style
from ..vectors import R2

PathLike = Union[str, os.PathLike]
Limits = Tuple[Tuple[float, float], Tuple[float, float]]

logger = logging.getLogger(__name__)


# =============================================================================
# Options
# =============================================================================
@dataclass(frozen=True)
class Size:
    """Output size in pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class Dpi:
    value: int


@dataclass(frozen=True)
class Padding:
    """Margin as a fraction of the larger diagram extent."""
    fraction: float


@dataclass(frozen=True)
class Background:
    color: str


@dataclass(frozen=True)
class OutputFile:
    """Also save the figure to `path` (format from the suffix)."""
    path: PathLike


# =============================================================================
# Backend
# =============================================================================
class MatplotlibBackend(Backend):
    """Renders R2 diagrams into a matplotlib Figure."""

    space = R2
    option_types = (Size, Dpi, Padding, Background, OutputFile)

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or RenderConfig()

    def settings(self, options: List[Any]) -> RenderConfig:
        """Fold option values over the backend's base config (later options win)."""
        cfg = self.config
        for opt in options:
            if isinstance(opt, Size):
                cfg = replace(cfg, img_size=(opt.width, opt.height))
            elif isinstance(opt, Dpi):
                cfg = replace(cfg, dpi=opt.value)
            elif isinstance(opt, Padding):
                cfg = replace(cfg, padding=opt.fraction)
            elif isinstance(opt, Background):
                cfg = replace(cfg, background=opt.color)
            elif isinstance(opt, OutputFile):
                cfg = replace(cfg, output_file=opt.path)
        return cfg

    @staticmethod
    def limits(bounds: Bounds, padding: float = 0.0) -> Limits:
        """Axis limits ((xmin, xmax), (ymin, ymax)) enclosing `bounds`."""
        xmin, xmax = -bounds((-1.0, 0.0)), bounds((1.0, 0.0))
        ymin, ymax = -bounds((0.0, -1.0)), bounds((0.0, 1.0))
        if xmax - xmin <= 0:
            xmin, xmax = xmin - 1.0, xmax + 1.0
        if ymax - ymin <= 0:
            ymin, ymax = ymin - 1.0, ymax + 1.0
        pad = padding * max(xmax - xmin, ymax - ymin)
        return (xmin - pad, xmax + pad), (ymin - pad, ymax + pad)

    def compose(self, options: List[Any], diagram: Diagram, contexts: List[PathPatch]) -> Figure:
        cfg = self.settings(options)
        fig = Figure(figsize=cfg.figsize, dpi=cfg.dpi, frameon=False)
        FigureCanvasAgg(fig)
        fig.patch.set_facecolor(cfg.background)

        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_facecolor(cfg.background)
        ax.set_aspect("equal")
        ax.axis("off")

        n = len(contexts)
        for i, patch in enumerate(contexts):
            patch.set_zorder(n - i)
            ax.add_patch(patch)

        (xmin, xmax), (ymin, ymax) = self.limits(diagram.bounds, cfg.padding)
        ax.set_xlim(xmin, xmax)
        ax.set_ylim(ymin, ymax)

        if cfg.output_file is not None:
            cfg.output_file.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(cfg.output_file, dpi=cfg.dpi, facecolor=fig.get_facecolor())
            logger.info(f"Saved diagram ({n} primitive(s)) to {cfg.output_file}")
        return fig


# =============================================================================
# Renderers
# =============================================================================
def _patch_kwargs(style: Style, filled: bool = True) -> dict:
    return {
        "edgecolor": style.stroke,
        "facecolor": style.fill if filled else "none",
        "linewidth": style.linewidth,
        "alpha": style.alpha,
    }


@MatplotlibBackend.renders(Ellipse)
def _render_ellipse(backend: MatplotlibBackend, shape: Ellipse) -> PathPatch:
    (a, b), (c, d) = shape.axes
    cx, cy = shape.center
    to_shape = Affine2D(np.array([[a, b, cx],
                                  [c, d, cy],
                                  [0.0, 0.0, 1.0]]))
    path = to_shape.transform_path(mplPath.unit_circle())
    return PathPatch(path, **_patch_kwargs(shape.style))


@MatplotlibBackend.renders(Polygon)
def _render_polygon(backend: MatplotlibBackend, shape: Polygon) -> PathPatch:
    verts = shape.vertices
    if shape.closed:
        path = mplPath(np.vstack([verts, verts[:1]]), closed=True)
    else:
        path = mplPath(verts)
    return PathPatch(path, **_patch_kwargs(shape.style, filled=shape.closed))
