import pytest

from bubbles.field import Canvas
from bubbles.cells import CellField
from bubbles.rng import make_rng


@pytest.fixture
def canvas():
    return Canvas(40, 30, frames=6, num_cells=5)


@pytest.fixture
def make_field():
    def _make(canvas, seed=1234, kind="orbit"):
        return CellField.random(canvas, make_rng(seed, f"cells_{kind}"), kind=kind)
    return _make
