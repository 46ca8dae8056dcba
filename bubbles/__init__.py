"""
Animated cellular (Worley-style) noise: moving "cells" rendered as a looping
pink/red bubble field.
"""

from .field import Canvas
from .cells import CellField, OrbitingCell, StaticCell
from .render import generate, render_frame

__version__ = "0.1.0"

__all__ = [
    "Canvas",
    "CellField",
    "OrbitingCell",
    "StaticCell",
    "generate",
    "render_frame",
]
