from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from .rhythm import Rhythm, DIAGNOSIS_LABELS, classify_rhythm
from .timegrid import assign_timestamp

# name, phase start, phase end, peak amplitude, fraction of a half-sine covered
WAVES = (
    ("P", 0.05, 0.15, 0.15, 1.0),
    ("Q", 0.17, 0.19, -0.20, 1.0),
    ("R", 0.19, 0.23, 1.50, 0.5),   # upstroke only; S takes over at the peak
    ("S", 0.23, 0.26, -0.40, 1.0),
    ("T", 0.28, 0.42, 0.25, 1.0),
)

ECTOPIC_PROB = 0.05
ECTOPIC_SPAN = 0.3

RATE_JITTER_BPM = 5.0
AMPLITUDE_RANGE = (0.7, 1.3)
NOISE_SPAN = 0.03
MIN_RATE_BPM = 40.0
MAX_RATE_BPM = 150.0
FAIR_QUALITY_PROB = 0.15

class Quality(str, Enum):
    GOOD = "Good"
    FAIR = "Fair"

@dataclass(frozen=True, eq=False)
class Record:
    index: int
    samples: np.ndarray
    heart_rate: int
    diagnosis: Rhythm
    timestamp: pd.Timestamp
    quality: Quality

    @property
    def diagnosis_label(self) -> str:
        return DIAGNOSIS_LABELS[self.diagnosis]

def build_beat_template(rng, samples_per_beat: int, rhythm: Rhythm) -> np.ndarray:
    """One PQRST cycle sampled at `samples_per_beat` points.

    Each wave is a sine lobe over a fixed phase interval; the first matching
    interval wins where two share a boundary. Arrhythmia templates get sparse
    random kicks to mimic ectopic variability.
    """
    n = int(samples_per_beat)
    if n <= 0:
        raise ValueError("samples_per_beat must be positive")
    phase = np.arange(n, dtype=np.float64) / n

    conds, values = [], []
    for _, start, end, amp, span in WAVES:
        local = (phase - start) / (end - start)
        conds.append((phase >= start) & (phase <= end))
        values.append(amp * np.sin(np.pi * local * span))
    template = np.select(conds, values, default=0.0)

    if rhythm == Rhythm.ARRHYTHMIA:
        hit = rng.take(n) < ECTOPIC_PROB
        k = int(hit.sum())
        if k:
            template[hit] += (rng.take(k) - 0.5) * ECTOPIC_SPAN
    return template

def _round_half_up(x: float) -> int:
    return int(np.floor(x + 0.5))

def synthesize_record(rng, index: int, cfg, anchor: pd.Timestamp) -> Record:
    """Tile one beat template across a record and attach its metadata."""
    rhythm, base_rate = classify_rhythm(rng)
    jitter = rng.uniform(-RATE_JITTER_BPM, RATE_JITTER_BPM)
    amplitude = rng.uniform(*AMPLITUDE_RANGE)

    rate = float(np.clip(base_rate + jitter, MIN_RATE_BPM, MAX_RATE_BPM))
    samples_per_beat = max(1, int(60.0 / rate * cfg.sample_rate_hz))
    template = build_beat_template(rng, samples_per_beat, rhythm)

    # np.resize repeats the template and truncates the last copy
    n = cfg.samples_per_record
    samples = np.resize(template, n) * amplitude + (rng.take(n) - 0.5) * NOISE_SPAN
    samples = samples.astype(np.float32)
    samples.flags.writeable = False

    quality = Quality.GOOD if rng.random() > FAIR_QUALITY_PROB else Quality.FAIR
    timestamp = assign_timestamp(rng, index, anchor, cfg.records_per_day)

    return Record(
        index=int(index),
        samples=samples,
        heart_rate=_round_half_up(rate),
        diagnosis=rhythm,
        timestamp=timestamp,
        quality=quality,
    )
