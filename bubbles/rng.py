import zlib

import numpy as np

# -----------------------------
# Run seed and per-consumer streams
# -----------------------------
#
# Every run has one 32-bit seed, either given with --seed or drawn from OS
# entropy and printed so the run can be repeated. Each consumer ("cells_orbit",
# "cells_static", ...) gets its own spawn key under that seed, so adding a
# consumer never shifts another one's draws.

SEED_MASK = 0xFFFFFFFF


def resolve_seed(seed=None) -> int:
    if seed is not None:
        return int(seed) & SEED_MASK
    return int(np.random.SeedSequence().entropy) & SEED_MASK

def stream_key(name: str) -> int:
    # hash() is salted per process
    return zlib.crc32(name.encode("utf-8"))

def make_rng(seed, name: str) -> np.random.Generator:
    """Generator for one named consumer of a run seed (None picks a fresh seed)."""
    ss = np.random.SeedSequence(resolve_seed(seed), spawn_key=(stream_key(name),))
    return np.random.default_rng(ss)
