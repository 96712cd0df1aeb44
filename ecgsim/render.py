from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

def polyline(
    samples: np.ndarray,
    width: float,
    height: float,
    vertical_scale: Optional[float] = None,
    amplitude: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Screen coordinates for drawing a record: x spans the width, y grows downward.

    `vertical_scale` defaults to 30% of the surface height per amplitude unit.
    """
    s = np.asarray(samples, dtype=np.float64)
    n = len(s)
    if vertical_scale is None:
        vertical_scale = 0.3 * float(height)
    x = np.arange(n, dtype=np.float64) / max(n, 1) * float(width)
    y = float(height) / 2.0 - s * float(vertical_scale) * float(amplitude)
    return x, y
