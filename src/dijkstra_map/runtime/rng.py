# runtime/rng.py
from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x) & 0xFFFFFFFF


def _tag(part: object) -> int:
    """Stable 32-bit word for a stream name or sub-key."""
    if isinstance(part, (int, np.integer)):
        return _u32(part)
    text = part if isinstance(part, str) else repr(part)
    return crc32(text.encode("utf-8"))


class RNGRegistry:
    """
    Named numpy Generators derived from one master seed.

    Entropy for a stream is [master_seed, session, name, *parts], so a stream
    never depends on which other streams were drawn first.
    """

    def __init__(self, master_seed: int, *, session: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.session_tag = _tag(str(session))

    @cache
    def _generator(self, key: tuple[int, ...]) -> np.random.Generator:
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.session_tag, *key])
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self.substream(name)

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        # one generator per key, e.g. per generation round
        return self._generator((_tag(name), *(_tag(p) for p in parts)))
