"""
Feature points ("cells") whose nearest-distance field makes up each frame.

Two kinds of cell share one interface:

- StaticCell: fixed position, advance() is a no-op.
- OrbitingCell: travels along the boundary of its own ellipse once per
  animation, so frame 0 and frame F line up and the loop is seamless.

CellField owns the cells and updates them in place every frame.
"""

import numpy as np

from .geometry import Point

CELL_KINDS = ("orbit", "static")


def frame_phase(frame, frames) -> float:
    return 2*np.pi * frame / frames


class StaticCell:
    def __init__(self, x, y):
        self.position = Point(int(x), int(y))

    def advance(self, frame, frames):
        return self.position

    def __repr__(self):
        return f"StaticCell({self.position.x}, {self.position.y})"


class OrbitingCell:
    """
    width/height are the full ellipse axes; the semi-axes used by the polar
    radius are half of them. direction is +1.0 or -1.0.
    """

    def __init__(self, centre, width, height, angle, direction):
        self.centre = Point(int(centre[0]), int(centre[1]))
        self.width = float(width)
        self.height = float(height)
        self.angle = float(angle)
        self.direction = 1.0 if direction >= 0 else -1.0
        self.position = Point(self.centre.x, self.centre.y)

    def locate(self, frame, frames):
        """Untruncated (x, y) for a frame."""
        pos = frame_phase(frame, frames)
        theta = (self.angle + pos) * self.direction
        sin_t, cos_t = np.sin(theta), np.cos(theta)
        a = self.width / 2.0
        b = self.height / 2.0
        radius = (a*b) / np.sqrt(a*a*sin_t*sin_t + b*b*cos_t*cos_t)
        x = self.centre.x + radius * np.sin(pos * self.direction)
        y = self.centre.y + radius * np.cos(pos * self.direction)
        return float(x), float(y)

    def advance(self, frame, frames):
        # frame F is frame 0 again; sin(2*pi) is not exactly 0
        x, y = self.locate(frame % frames, frames)
        # int() truncates toward zero
        self.position = Point(int(x), int(y))
        return self.position

    def __repr__(self):
        return (f"OrbitingCell(centre={tuple(self.centre)}, width={self.width:.3f}, "
                f"height={self.height:.3f}, angle={self.angle:.3f}, "
                f"direction={self.direction:+.0f})")

# -----------------------------
# Random construction
# -----------------------------

def _axis(rng, dim):
    # full axis in [1, dim/5); canvases of 5px or less pin it to 1
    hi = dim / 5.0
    if hi <= 1.0:
        return 1.0
    return float(rng.uniform(1.0, hi))

def random_orbiting_cell(canvas, rng):
    centre = Point(int(rng.integers(0, canvas.width)), int(rng.integers(0, canvas.height)))
    height = _axis(rng, canvas.height)
    width = _axis(rng, canvas.width)
    angle = float(rng.uniform(0.0, np.pi))
    direction = 1.0 if int(rng.integers(0, 2)) == 1 else -1.0
    return OrbitingCell(centre, width, height, angle, direction)

def random_static_cell(canvas, rng):
    return StaticCell(int(rng.integers(0, canvas.width)), int(rng.integers(0, canvas.height)))


class CellField:
    def __init__(self, cells=()):
        self.cells = list(cells)

    @classmethod
    def random(cls, canvas, rng, kind="orbit", num_cells=None):
        """Draw num_cells (default canvas.num_cells) independent cells."""
        if kind not in CELL_KINDS:
            raise ValueError(f"unknown cell kind {kind!r}, expected one of {CELL_KINDS}")
        n = canvas.num_cells if num_cells is None else int(num_cells)
        make = random_orbiting_cell if kind == "orbit" else random_static_cell
        return cls(make(canvas, rng) for _ in range(n))

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def advance(self, frame, frames):
        for cell in self.cells:
            cell.advance(frame, frames)

    def positions(self) -> np.ndarray:
        if not self.cells:
            return np.empty((0, 2), dtype=np.int64)
        return np.array([c.position for c in self.cells], dtype=np.int64)
