from __future__ import annotations
import numpy as np

from .ecg import MIN_RATE_BPM, MAX_RATE_BPM

MAX_ABS_AMPLITUDE = 2.5

def validate_record(record, cfg) -> list[str]:
    """Lightweight validation; returns a list of warnings/errors."""
    issues = []
    samples = np.asarray(record.samples)
    if samples.shape != (cfg.samples_per_record,):
        issues.append(f"samples shape {samples.shape}, expected ({cfg.samples_per_record},)")
    if not np.all(np.isfinite(samples)):
        issues.append("samples contain NaN or infinity")
    elif len(samples) and float(np.max(np.abs(samples))) > MAX_ABS_AMPLITUDE:
        issues.append(f"amplitude exceeds {MAX_ABS_AMPLITUDE}")
    if not MIN_RATE_BPM <= record.heart_rate <= MAX_RATE_BPM:
        issues.append(f"heart rate {record.heart_rate} outside [{MIN_RATE_BPM:g}, {MAX_RATE_BPM:g}]")
    if record.timestamp.dayofweek >= 5:
        issues.append("timestamp falls on a weekend")
    return issues

def validate_store(store, cfg) -> list[str]:
    """Validate every record plus the ordering of indices."""
    issues = []
    for i, record in enumerate(store):
        if record.index != i:
            issues.append(f"record at position {i} has index {record.index}")
        issues.extend(f"record {i}: {msg}" for msg in validate_record(record, cfg))
    return issues
