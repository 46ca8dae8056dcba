from collections import namedtuple

import numpy as np
from scipy.spatial.distance import cdist

from .geometry import cross_distance, distance

# Upper bound on pixel x cell distance pairs held in memory per chunk.
CHUNK_PAIRS = 1 << 22

# -----------------------------
# Canvas parameters
# -----------------------------

class Canvas(namedtuple("Canvas", ["width", "height", "frames", "num_cells"])):
    """
    Fixed run parameters. Invalid dimensions fail here, before any frame
    is computed.
    """
    __slots__ = ()

    def __new__(cls, width, height, frames=1, num_cells=0):
        width, height = int(width), int(height)
        frames, num_cells = int(frames), int(num_cells)
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas must be at least 1x1, got {width}x{height}")
        if frames < 1:
            raise ValueError(f"frame count must be >= 1, got {frames}")
        if num_cells < 0:
            raise ValueError(f"cell count must be >= 0, got {num_cells}")
        return super().__new__(cls, width, height, frames, num_cells)

    @property
    def shape(self):
        return (self.height, self.width)

    @property
    def buffer_size(self) -> int:
        return self.width * self.height * 3

    @property
    def cross_distance(self) -> float:
        return cross_distance(self.width, self.height)

    def new_buffer(self) -> np.ndarray:
        return np.zeros(self.buffer_size, dtype=np.uint8)

# -----------------------------
# Nearest-cell sampling
# -----------------------------

def sample_pixel(canvas, positions, x, y):
    """
    Distance from pixel (x, y) to the nearest cell and that cell's index.
    Starts from the canvas diagonal and only a strictly closer cell replaces
    it, so ties keep the first cell and an empty field returns (diagonal, -1).
    """
    best, best_idx = canvas.cross_distance, -1
    for i, p in enumerate(positions):
        d = distance((x, y), p)
        if d < best:
            best, best_idx = d, i
    return best, best_idx

def sample_distances(canvas, positions, chunk_pairs=CHUNK_PAIRS):
    """
    Vectorized sample_pixel over the whole canvas.

    Returns (distances, nearest), both shaped (height, width). Pixels are
    processed in row bands so memory stays bounded by chunk_pairs.
    """
    H, W = canvas.shape
    upper = canvas.cross_distance
    dist = np.full((H, W), upper, dtype=np.float64)
    nearest = np.full((H, W), -1, dtype=np.int64)

    pts = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0:
        return dist, nearest

    rows = max(1, int(chunk_pairs) // (W * len(pts)))
    for y0 in range(0, H, rows):
        y1 = min(H, y0 + rows)
        yy, xx = np.mgrid[y0:y1, 0:W]
        pix = np.column_stack([xx.ravel(), yy.ravel()]).astype(np.float64)

        d = cdist(pix, pts)
        # argmin returns the first minimum: lowest cell index wins ties
        idx = np.argmin(d, axis=1)
        dmin = d[np.arange(len(idx)), idx]
        closer = dmin < upper

        dist[y0:y1] = np.where(closer, dmin, upper).reshape(y1 - y0, W)
        nearest[y0:y1] = np.where(closer, idx, -1).reshape(y1 - y0, W)

    return dist, nearest

# -----------------------------
# Normalization
# -----------------------------

def normalize(distances):
    """
    Rescale by the frame's own maximum into [0,1].
    A zero maximum maps everything to 0.0 instead of dividing by zero.
    """
    max_dist = float(np.max(distances)) if np.size(distances) else 0.0
    if max_dist <= 0.0:
        return np.zeros_like(distances, dtype=np.float64), max_dist
    return np.asarray(distances, dtype=np.float64) / max_dist, max_dist
