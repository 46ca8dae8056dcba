import numpy as np

# -----------------------------
# Flesh ramp
# -----------------------------
#
# d in [0, 0.5):  cream -> pink, green trails blue
# d in [0.5, 1]:  red -> black
#
# Each term is floored and saturated to a byte before it is subtracted
# from 255, so out-of-range input clips instead of wrapping.

def _term(x):
    return np.clip(np.floor(x), 0, 255)

def flesh_rgb(d):
    """Scalar ramp: normalized distance -> (r, g, b) ints."""
    d = float(d)
    if d < 0.5:
        red = 255 - int(_term(102.0 * d))
        blue = 255 - int(_term(512.0 * d))
        green = int(_term(blue * 0.8))
    else:
        red = 255 - int(_term(408.0 * (d - 0.5) + 51.0))
        green = 0
        blue = 0
    return red, green, blue

def flesh_ramp(d):
    """Vectorized flesh_rgb; returns uint8 with a trailing RGB axis."""
    d = np.asarray(d, dtype=np.float64)
    low = d < 0.5

    red_lo = 255 - _term(102.0 * d)
    blue_lo = 255 - _term(512.0 * d)
    green_lo = _term(blue_lo * 0.8)
    red_hi = 255 - _term(408.0 * (d - 0.5) + 51.0)

    rgb = np.empty(d.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = np.where(low, red_lo, red_hi)
    rgb[..., 1] = np.where(low, green_lo, 0)
    rgb[..., 2] = np.where(low, blue_lo, 0)
    return rgb

def colorize(normalized, out=None):
    """
    Write the ramp for a (height, width) field into a flat row-major RGB
    buffer; pixel (x, y) lands at 3*(width*y + x).
    """
    rgb = flesh_ramp(normalized)
    if out is None:
        return rgb.reshape(-1)
    if out.size != rgb.size:
        raise ValueError(f"frame buffer holds {out.size} bytes, need {rgb.size}")
    out[:] = rgb.reshape(-1)
    return out
