"""Intermediate network interface layout and its validator."""

from netlayout.errors import ErrorAccumulator, LayoutError
from netlayout.io import dump_layout, load_layout, read_layout, write_layout
from netlayout.layout import Layout

__version__ = "0.1.0"

__all__ = [
    "ErrorAccumulator",
    "Layout",
    "LayoutError",
    "dump_layout",
    "load_layout",
    "read_layout",
    "write_layout",
    "__version__",
]
