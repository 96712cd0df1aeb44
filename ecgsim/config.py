from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class SimConfig:
    """Configuration for progressive ECG record generation.

    Notes:
      - Defaults mirror the lightweight browser build (5 s records, 100 of them).
      - Everything is fixed at construction; an engine never mutates its config.
    """
    # Sampling
    sample_rate_hz: int = 250
    record_duration_s: int = 5

    # Dataset size / loading
    total_records: int = 100
    initial_load_count: int = 10
    initial_batch_size: int = 2      # records per frame tick during the initial burst
    batch_size: int = 10             # records per idle tick in the background
    lookahead: int = 5               # re-enter background fill this close to the end
    idle_delay_s: float = 0.1        # fallback delay when the host has no idle signal

    # Randomness
    random_cache_size: int = 10_000

    # Timestamps
    records_per_day: int = 10
    anchor_date: Optional[str] = None  # ISO date; None = first of month, 3 months ago

    # Export
    export_format: str = "parquet"  # "parquet" or "csv"

    def __post_init__(self):
        for name in ("sample_rate_hz", "record_duration_s", "initial_batch_size",
                     "batch_size", "random_cache_size", "records_per_day"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in ("total_records", "initial_load_count", "lookahead"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.idle_delay_s < 0:
            raise ValueError("idle_delay_s must be non-negative")
        if self.export_format not in ("parquet", "csv"):
            raise ValueError("export_format must be 'parquet' or 'csv'")

    @property
    def samples_per_record(self) -> int:
        return int(self.sample_rate_hz * self.record_duration_s)
