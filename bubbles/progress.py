import queue
import shutil
import sys
import threading

_CLOSE = object()


class ProgressChannelClosed(RuntimeError):
    """A frame was reported after the progress worker stopped listening."""


def draw_bar(done, total, width) -> str:
    """
    One carriage-return terminated bar line: '=' for finished, '-' for
    remaining, then the integer percentage.
    """
    frac = done / total if total else 1.0
    filled = int(frac * width)
    bar = "".join("=" if i < filled else "-" for i in range(max(0, width - 6)))
    return f"{bar}[{int(frac * 100)}%]\r"


class ProgressBar:
    """
    Background progress worker fed over an unbounded queue.

    report() never blocks the caller. close() puts the end-of-stream marker
    on the queue and joins the worker, which drains every pending frame
    first.
    """

    def __init__(self, total, stream=None, width=None):
        self.total = int(total)
        self.stream = stream if stream is not None else sys.stdout
        self.width = width if width is not None else shutil.get_terminal_size().columns
        self.seen = []
        self._queue = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="bubbles-progress", daemon=True)
        self._closed = False

    def _run(self):
        while True:
            frame = self._queue.get()
            if frame is _CLOSE:
                break
            self.seen.append(frame)
            self.stream.write(draw_bar(frame + 1, self.total, self.width))
            self.stream.flush()
        self.stream.write("\n")
        self.stream.flush()

    def start(self):
        self._thread.start()
        return self

    def report(self, frame):
        if self._closed or not self._thread.is_alive():
            raise ProgressChannelClosed(f"progress worker is not running (frame {frame})")
        self._queue.put(frame)

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self._thread.is_alive():
            self._queue.put(_CLOSE)
            self._thread.join()

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.close()
        return False
