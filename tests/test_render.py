import numpy as np
import pytest

from bubbles.cells import CellField, StaticCell
from bubbles.field import Canvas
from bubbles.palette import colorize, flesh_rgb
from bubbles.progress import ProgressBar
from bubbles.render import compute_frame, generate, iter_frames, render_frame


class ListSink:
    def __init__(self):
        self.frames = []

    def write_frame(self, buffer):
        self.frames.append(bytes(buffer))


class BrokenSink:
    def write_frame(self, buffer):
        raise OSError("disk full")


def test_single_static_cell_at_origin():
    canvas = Canvas(4, 4, frames=1, num_cells=1)
    field = CellField([StaticCell(0, 0)])
    frame = compute_frame(field, canvas, 0)
    assert frame.normalized[0, 0] == 0.0
    assert frame.normalized[3, 3] == 1.0
    assert frame.max_dist == pytest.approx(canvas.cross_distance)

    buf = render_frame(field, canvas, 0)
    assert tuple(buf[0:3]) == (255, 204, 255)
    off = 3 * (4 * 3 + 3)
    assert tuple(buf[off:off + 3]) == (0, 0, 0)
    assert tuple(buf[off:off + 3]) == flesh_rgb(1.0)


def test_frame_properties(canvas, make_field):
    field = make_field(canvas)
    for i in range(canvas.frames):
        frame = compute_frame(field, canvas, i)
        assert (frame.distances >= 0).all()
        assert (frame.distances <= canvas.cross_distance).all()
        assert frame.normalized.min() >= 0.0
        assert frame.normalized.max() == 1.0


def test_zero_cells_render_black(make_field):
    canvas = Canvas(6, 5, frames=2, num_cells=0)
    buf = render_frame(make_field(canvas), canvas, 0)
    # everything normalizes to 1.0
    assert (buf == 0).all()


def test_same_seed_same_bytes(canvas, make_field):
    a, b = ListSink(), ListSink()
    generate(canvas, make_field(canvas, seed=7), a)
    generate(canvas, make_field(canvas, seed=7), b)
    assert len(a.frames) == canvas.frames
    assert a.frames == b.frames


def test_frames_are_complete_and_ordered(canvas, make_field):
    sink = ListSink()
    progress = ProgressBar(canvas.frames, stream=_Null(), width=20).start()
    try:
        count = generate(canvas, make_field(canvas), sink, progress=progress)
    finally:
        progress.close()
    assert count == canvas.frames
    assert progress.seen == list(range(canvas.frames))
    assert all(len(f) == canvas.buffer_size for f in sink.frames)


def test_loop_closes(make_field):
    canvas = Canvas(48, 32, frames=5, num_cells=6)
    field = make_field(canvas, seed=11)
    first = bytes(render_frame(field, canvas, 0))
    start = field.positions().copy()

    # one full lap lands back on the first frame
    lap = compute_frame(field, canvas, canvas.frames)
    np.testing.assert_array_equal(field.positions(), start)
    assert bytes(colorize(lap.normalized)) == first

    # the last frame differs, the animation is not frozen
    assert bytes(render_frame(field, canvas, canvas.frames - 1)) != first


def test_iter_frames_reuses_buffer(canvas, make_field):
    seen = [(i, id(buf)) for i, buf in iter_frames(canvas, make_field(canvas))]
    assert [i for i, _ in seen] == list(range(canvas.frames))
    assert len({b for _, b in seen}) == 1


def test_sink_failure_is_fatal(canvas, make_field):
    progress = ProgressBar(canvas.frames, stream=_Null(), width=20).start()
    try:
        with pytest.raises(OSError):
            generate(canvas, make_field(canvas), BrokenSink(), progress=progress)
    finally:
        progress.close()
    assert progress.seen == []


class _Null:
    def write(self, s):
        pass

    def flush(self):
        pass
