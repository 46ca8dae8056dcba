"""
Frame sinks: take one finished flat RGB buffer per call.

- GifSink collects frames with Pillow and writes an infinitely looping GIF
  on close().
- RawSink streams rgb24 frames straight to disk, playable with
  `ffplay -f rawvideo -pixel_format rgb24`.

Sinks copy what they need; the caller may overwrite its buffer as soon as
write_frame() returns.
"""

import os
from pathlib import Path

from PIL import Image

OUTPUT_FORMATS = ("gif", "rgb24")


def infer_format(path) -> str:
    return "gif" if Path(path).suffix.lower() == ".gif" else "rgb24"


class _FileSink:
    def __init__(self, path, width, height):
        self.path = str(path)
        self.width = int(width)
        self.height = int(height)
        self.frames_written = 0
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        # open now so an unwritable path fails before rendering starts
        self._fh = open(self.path, "wb")

    def _check(self, buffer):
        expected = self.width * self.height * 3
        if len(buffer) != expected:
            raise ValueError(f"frame has {len(buffer)} bytes, expected {expected}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class RawSink(_FileSink):
    def write_frame(self, buffer):
        self._check(buffer)
        self._fh.write(bytes(buffer))
        self.frames_written += 1

    def close(self):
        if not self._fh.closed:
            self._fh.close()


class GifSink(_FileSink):
    """
    Infinitely looping GIF.

    Pillow only writes a GIF in one save(save_all=True) call, so every
    frame is held in memory until close(): roughly frames x width x height x
    3 bytes. Use RawSink for runs that do not fit.

    Pillow also folds identical consecutive frames into one and adds up their
    durations. A static field comes out as a single frame lasting
    frames x delay ms; playback time is the same.
    """

    def __init__(self, path, width, height, delay=40):
        super().__init__(path, width, height)
        self.delay = int(delay)
        self._images = []

    def write_frame(self, buffer):
        self._check(buffer)
        # frombytes copies the pixel data
        self._images.append(Image.frombytes("RGB", (self.width, self.height), bytes(buffer)))
        self.frames_written += 1

    def close(self):
        if self._fh.closed:
            return
        try:
            if self._images:
                first, rest = self._images[0], self._images[1:]
                first.save(
                    self._fh,
                    format="GIF",
                    save_all=True,
                    append_images=rest,
                    duration=self.delay,
                    loop=0,  # 0 means loop forever
                )
        finally:
            self._fh.close()
            self._images = []


def open_sink(path, width, height, fmt=None, delay=40):
    fmt = fmt or infer_format(path)
    if fmt == "gif":
        return GifSink(path, width, height, delay=delay)
    if fmt == "rgb24":
        return RawSink(path, width, height)
    raise ValueError(f"unknown output format {fmt!r}, expected one of {OUTPUT_FORMATS}")
