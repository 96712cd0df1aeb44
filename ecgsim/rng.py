from __future__ import annotations
import logging
import os
from typing import Callable

import numpy as np

from .errors import EntropyUnavailable

logger = logging.getLogger(__name__)

EntropySource = Callable[[int], np.ndarray]

WORD_SPAN = float(2**32)

def os_entropy(n: int) -> np.ndarray:
    """Draw `n` uint32 words from the operating system CSPRNG."""
    try:
        raw = os.urandom(4 * int(n))
    except NotImplementedError as exc:
        raise EntropyUnavailable("no cryptographic entropy source on this platform") from exc
    return np.frombuffer(raw, dtype="<u4")

def seeded_entropy(seed: int) -> EntropySource:
    """Deterministic, NOT cryptographic, word source for tests and reproducible exports."""
    gen = np.random.default_rng(int(seed))
    def draw(n: int) -> np.ndarray:
        return gen.integers(0, 2**32, size=int(n), dtype=np.uint32)
    return draw

class UniformRandomSource:
    """Uniform variates in [0, 1) served from a batch-refilled cache.

    The entropy callable is invoked once per `batch_size` draws; every consumer
    in the package draws through this object, never from the entropy source.
    """

    def __init__(self, entropy: EntropySource = os_entropy, batch_size: int = 10_000):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._entropy = entropy
        self.batch_size = int(batch_size)
        self.refills = 0
        self._cache = np.empty(0, dtype=np.float64)
        self._pos = 0
        self._refill()

    def _refill(self) -> None:
        try:
            words = np.asarray(self._entropy(self.batch_size))
        except OSError as exc:
            raise EntropyUnavailable(f"entropy source failed: {exc}") from exc
        if words.shape != (self.batch_size,):
            raise EntropyUnavailable(
                f"entropy source returned {words.shape}, expected ({self.batch_size},)"
            )
        self._cache = words.astype(np.float64) / WORD_SPAN
        self._pos = 0
        self.refills += 1
        logger.debug("random cache refilled (%d words, refill #%d)", self.batch_size, self.refills)

    @property
    def remaining(self) -> int:
        return len(self._cache) - self._pos

    def random(self) -> float:
        if self._pos >= len(self._cache):
            self._refill()
        u = float(self._cache[self._pos])
        self._pos += 1
        return u

    def uniform(self, low: float, high: float) -> float:
        return low + self.random() * (high - low)

    def take(self, n: int) -> np.ndarray:
        """Return the next `n` variates as one array, refilling as often as needed."""
        out = np.empty(int(n), dtype=np.float64)
        filled = 0
        while filled < n:
            if self._pos >= len(self._cache):
                self._refill()
            k = min(n - filled, len(self._cache) - self._pos)
            out[filled:filled + k] = self._cache[self._pos:self._pos + k]
            self._pos += k
            filled += k
        return out
