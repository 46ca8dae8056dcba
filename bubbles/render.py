from collections import namedtuple

from .field import normalize, sample_distances
from .palette import colorize

Frame = namedtuple("Frame", ["index", "distances", "nearest", "normalized", "max_dist"])

# -----------------------------
# Frame driver
# -----------------------------

def compute_frame(field, canvas, index) -> Frame:
    """Advance the cells to this frame's phase, sample and normalize."""
    field.advance(index, canvas.frames)
    distances, nearest = sample_distances(canvas, field.positions())
    normalized, max_dist = normalize(distances)
    return Frame(index, distances, nearest, normalized, max_dist)

def render_frame(field, canvas, index, buffer=None):
    """Compute one frame and write its colors into buffer (allocated if None)."""
    if buffer is None:
        buffer = canvas.new_buffer()
    frame = compute_frame(field, canvas, index)
    colorize(frame.normalized, buffer)
    return buffer

def iter_frames(canvas, field, buffer=None):
    """
    Yield (index, buffer) for frames 0..frames-1. The same buffer is reused,
    and it is only yielded once every pixel of that frame is written.
    """
    if buffer is None:
        buffer = canvas.new_buffer()
    for i in range(canvas.frames):
        render_frame(field, canvas, i, buffer)
        yield i, buffer

def generate(canvas, field, sink, progress=None):
    """
    Render every frame into sink in index order, reporting each finished
    frame to progress. Sink errors propagate; nothing is retried.
    """
    count = 0
    for i, buffer in iter_frames(canvas, field):
        sink.write_frame(buffer)
        if progress is not None:
            progress.report(i)
        count += 1
    return count
