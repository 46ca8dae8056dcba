from collections import namedtuple

import numpy as np

Point = namedtuple("Point", ["x", "y"])


def distance(p, q) -> float:
    """Euclidean distance between two points."""
    dx = float(q[0]) - float(p[0])
    dy = float(q[1]) - float(p[1])
    return float(np.sqrt(dx*dx + dy*dy))


def cross_distance(width, height) -> float:
    # corner-to-corner, (0,0) to (width-1, height-1)
    return distance(Point(0, 0), Point(width - 1, height - 1))
