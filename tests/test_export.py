import io
import json
import zipfile

import numpy as np
import pandas as pd
import pytest

from ecgsim.config import SimConfig
from ecgsim.engine import ECGEngine
from ecgsim.export import bundle_records_to_zip, record_waveform, samples_to_frame
from ecgsim.render import polyline
from ecgsim.rng import seeded_entropy
from ecgsim.validate import validate_record, validate_store

from conftest import make_record


@pytest.fixture
def loaded(small_cfg):
    engine = ECGEngine(small_cfg, entropy=seeded_entropy(11))
    engine.start()
    engine.scheduler.run_pending()
    return engine


def test_generated_records_validate(loaded, small_cfg):
    assert validate_store(loaded.store, small_cfg) == []


def test_validate_flags_bad_record():
    cfg = SimConfig(sample_rate_hz=5, record_duration_s=2)
    bad = make_record(0, value=np.nan, n=7)
    issues = validate_record(bad, cfg)
    assert any("shape" in i for i in issues)
    assert any("NaN" in i for i in issues)
    weekend = make_record(0, n=10)
    object.__setattr__(weekend, "timestamp", pd.Timestamp("2024-01-06 09:00"))
    assert validate_record(weekend, cfg) == ["timestamp falls on a weekend"]


def test_samples_frame(loaded, small_cfg):
    df = samples_to_frame(loaded.store, small_cfg.sample_rate_hz)
    assert len(df) == 10 * small_cfg.samples_per_record
    first = df[df["index"] == 0]["amplitude"].to_numpy()
    assert np.allclose(first, loaded.store.get(0).samples)
    wave = record_waveform(loaded.store.get(1), small_cfg.sample_rate_hz)
    assert wave["t_s"].iloc[-1] == pytest.approx((small_cfg.samples_per_record - 1) / 50)


@pytest.mark.parametrize("fmt", ["csv", "parquet"])
def test_bundle_zip(loaded, small_cfg, fmt):
    data = bundle_records_to_zip(loaded.store, small_cfg, {"seed": 11}, fmt=fmt)
    with zipfile.ZipFile(io.BytesIO(data)) as z:
        assert sorted(z.namelist()) == sorted(["manifest.json", f"records.{fmt}", f"samples.{fmt}"])
        manifest = json.loads(z.read("manifest.json"))
        records = z.read(f"records.{fmt}")
    assert manifest["n_records"] == 10
    assert manifest["seed"] == 11
    assert manifest["config"]["sample_rate_hz"] == 50
    reader = pd.read_csv if fmt == "csv" else pd.read_parquet
    df = reader(io.BytesIO(records))
    assert df["index"].tolist() == list(range(10))


def test_polyline():
    samples = np.array([0.0, 1.0, -1.0, 0.5])
    x, y = polyline(samples, width=400, height=200)
    assert np.allclose(x, [0, 100, 200, 300])
    assert np.allclose(y, [100, 40, 160, 70])
    _, y2 = polyline(samples, width=400, height=200, vertical_scale=10)
    assert np.allclose(y2, [100, 90, 110, 95])
