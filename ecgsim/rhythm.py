from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple

class Rhythm(str, Enum):
    NORMAL = "Normal"
    TACHYCARDIA = "Tachycardia"
    BRADYCARDIA = "Bradycardia"
    ARRHYTHMIA = "Arrhythmia"

# (exclusive upper bound of the draw, rhythm, base rate range in bpm)
RHYTHM_BANDS: Tuple[Tuple[float, Rhythm, Tuple[float, float]], ...] = (
    (0.75, Rhythm.NORMAL, (60.0, 100.0)),
    (0.88, Rhythm.TACHYCARDIA, (100.0, 150.0)),
    (0.96, Rhythm.BRADYCARDIA, (40.0, 60.0)),
    (1.00, Rhythm.ARRHYTHMIA, (50.0, 120.0)),
)

RATE_RANGES: Dict[Rhythm, Tuple[float, float]] = {r: rng for _, r, rng in RHYTHM_BANDS}

DIAGNOSIS_LABELS: Dict[Rhythm, str] = {
    Rhythm.NORMAL: "Normal sinus rhythm",
    Rhythm.TACHYCARDIA: "Sinus tachycardia",
    Rhythm.BRADYCARDIA: "Sinus bradycardia",
    Rhythm.ARRHYTHMIA: "Arrhythmia",
}

def rhythm_for_draw(u: float) -> Rhythm:
    """Map one uniform draw onto the weighted rhythm bands."""
    if not 0.0 <= u < 1.0:
        raise ValueError(f"draw must lie in [0, 1), got {u!r}")
    for upper, rhythm, _ in RHYTHM_BANDS:
        if u < upper:
            return rhythm
    return RHYTHM_BANDS[-1][1]

def classify_rhythm(rng) -> Tuple[Rhythm, float]:
    """Draw a rhythm category and its base heart rate (bpm)."""
    rhythm = rhythm_for_draw(rng.random())
    lo, hi = RATE_RANGES[rhythm]
    return rhythm, rng.uniform(lo, hi)
