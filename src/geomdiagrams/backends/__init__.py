from .trace import Precision, Trace, TraceBackend
from .mpl import Background, Dpi, MatplotlibBackend, OutputFile, Padding, Size

__all__ = [
    "TraceBackend", "Trace", "Precision",
    "MatplotlibBackend", "Size", "Dpi", "Padding", "Background", "OutputFile",
]
