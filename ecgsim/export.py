from __future__ import annotations
import io, json, zipfile
from dataclasses import asdict
from typing import Iterable, Dict, Any, Optional

import numpy as np
import pandas as pd

from .ecg import Record

def _df_to_bytes(df: pd.DataFrame, fmt: str) -> bytes:
    buf = io.BytesIO()
    if fmt == "parquet":
        df.to_parquet(buf, index=False)
    elif fmt == "csv":
        buf.write(df.to_csv(index=False).encode("utf-8"))
    else:
        raise ValueError("fmt must be 'parquet' or 'csv'")
    return buf.getvalue()

def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    rows = [
        (r.index, r.timestamp, r.heart_rate, r.diagnosis.value, r.diagnosis_label, r.quality.value)
        for r in records
    ]
    return pd.DataFrame(rows, columns=["index","timestamp","heart_rate","diagnosis","diagnosis_label","quality"])

def record_waveform(record: Record, sample_rate_hz: int) -> pd.DataFrame:
    """One record as (t_s, amplitude) rows, for plotting."""
    n = len(record.samples)
    return pd.DataFrame({
        "t_s": np.arange(n) / float(sample_rate_hz),
        "amplitude": np.asarray(record.samples, dtype=np.float64),
    })

def samples_to_frame(records: Iterable[Record], sample_rate_hz: int) -> pd.DataFrame:
    """Long-format samples: one row per (record, sample)."""
    records = list(records)
    if not records:
        return pd.DataFrame(columns=["index","sample","t_s","amplitude"])
    n = len(records[0].samples)
    idx = np.repeat([r.index for r in records], n)
    sample = np.tile(np.arange(n), len(records))
    return pd.DataFrame({
        "index": idx,
        "sample": sample,
        "t_s": sample / float(sample_rate_hz),
        "amplitude": np.concatenate([np.asarray(r.samples) for r in records]),
    })

def bundle_records_to_zip(
    records: Iterable[Record],
    cfg,
    metadata: Optional[Dict[str, Any]] = None,
    fmt: Optional[str] = None,
) -> bytes:
    """Records, samples and a JSON manifest in one ZIP."""
    records = list(records)
    fmt = fmt or cfg.export_format
    ext = "parquet" if fmt == "parquet" else "csv"
    manifest = {"config": asdict(cfg), "n_records": len(records), **(metadata or {})}

    zbuf = io.BytesIO()
    with zipfile.ZipFile(zbuf, "w", compression=zipfile.ZIP_DEFLATED) as z:
        z.writestr("manifest.json", json.dumps(manifest, indent=2, default=str))
        z.writestr(f"records.{ext}", _df_to_bytes(records_to_frame(records), fmt))
        z.writestr(f"samples.{ext}", _df_to_bytes(samples_to_frame(records, cfg.sample_rate_hz), fmt))
    return zbuf.getvalue()
