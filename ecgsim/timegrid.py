from __future__ import annotations
from typing import Optional

import pandas as pd

MORNING_PROB = 0.6

def resolve_anchor(anchor_iso: Optional[str] = None) -> pd.Timestamp:
    """Anchor date for day 0: the given ISO date, else the first of the month three months back."""
    if anchor_iso is not None:
        return pd.Timestamp(anchor_iso).normalize()
    today = pd.Timestamp.today().normalize()
    return (today - pd.DateOffset(months=3)).replace(day=1)

def workday_for(anchor: pd.Timestamp, day_offset: int) -> pd.Timestamp:
    """Anchor plus `day_offset` days, rolled forward past Saturday/Sunday."""
    day = anchor + pd.Timedelta(days=int(day_offset))
    while day.dayofweek >= 5:
        day += pd.Timedelta(days=1)
    return day

def assign_timestamp(rng, index: int, anchor: pd.Timestamp, records_per_day: int) -> pd.Timestamp:
    """Business-hours timestamp for the record at `index`, morning-biased."""
    if index < 0:
        raise ValueError("index must be non-negative")
    day = workday_for(anchor, int(index) // int(records_per_day))
    if rng.random() < MORNING_PROB:
        hour = 8 + rng.random() * 4
    else:
        hour = 12 + rng.random() * 6
    minute = rng.random() * 60
    second = rng.random() * 60
    return day + pd.Timedelta(hours=int(hour), minutes=int(minute), seconds=int(second))
