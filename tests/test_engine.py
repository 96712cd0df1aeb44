import asyncio

import numpy as np
import pytest

from ecgsim.config import SimConfig
from ecgsim.engine import ECGEngine
from ecgsim.loader import LoaderPhase
from ecgsim.rng import seeded_entropy
from ecgsim.scheduler import AsyncioScheduler, TaskQueueScheduler


def test_seeded_engines_reproduce(small_cfg):
    a = ECGEngine(small_cfg, entropy=seeded_entropy(5))
    b = ECGEngine(small_cfg, entropy=seeded_entropy(5))
    c = ECGEngine(small_cfg, entropy=seeded_entropy(6))
    for engine in (a, b, c):
        engine.start()
        engine.scheduler.run_pending()
    for ra, rb in zip(a.store, b.store):
        assert np.array_equal(ra.samples, rb.samples)
        assert ra.timestamp == rb.timestamp
    assert not np.array_equal(a.store.get(0).samples, c.store.get(0).samples)


def test_engines_do_not_share_state(small_cfg):
    a = ECGEngine(small_cfg, entropy=seeded_entropy(1))
    b = ECGEngine(small_cfg, entropy=seeded_entropy(1))
    a.start()
    a.scheduler.run_pending()
    assert len(b.store) == 0
    assert b.loader.phase == LoaderPhase.IDLE
    assert a.rng is not b.rng


def test_navigation(small_cfg):
    engine = ECGEngine(small_cfg, entropy=seeded_entropy(2))
    engine.start()
    engine.scheduler.run_pending()
    assert engine.current().index == 0
    assert engine.previous_record().index == 0
    assert engine.next_record().index == 1
    for _ in range(20):
        engine.next_record()
    assert engine.current().index == 9


def test_default_config_uses_os_entropy():
    engine = ECGEngine(SimConfig(total_records=3, initial_load_count=3))
    engine.start()
    engine.scheduler.run_pending()
    assert len(engine.store) == 3
    assert engine.store.get(0).samples.shape == (1250,)


def test_asyncio_scheduler_fills_store():
    cfg = SimConfig(sample_rate_hz=50, record_duration_s=1, total_records=12,
                    initial_load_count=4, batch_size=5, idle_delay_s=0.0,
                    anchor_date="2024-01-01")

    async def run():
        done = asyncio.Event()
        engine = ECGEngine(cfg, scheduler="asyncio", entropy=seeded_entropy(3))
        engine.loader.add_listener(lambda g, t: done.set() if g == t else None)
        engine.start()
        await asyncio.wait_for(done.wait(), timeout=5)
        return engine

    engine = asyncio.run(run())
    assert len(engine.store) == 12
    assert engine.loader.phase == LoaderPhase.COMPLETE


def test_idle_delay_reaches_asyncio_scheduler():
    engine = ECGEngine(SimConfig(idle_delay_s=5.0), scheduler="asyncio", entropy=seeded_entropy(0))
    assert isinstance(engine.scheduler, AsyncioScheduler)
    assert engine.scheduler.idle_delay_s == 5.0


def test_scheduler_choice():
    cfg = SimConfig(total_records=1)
    assert isinstance(ECGEngine(cfg, entropy=seeded_entropy(0)).scheduler, TaskQueueScheduler)
    custom = TaskQueueScheduler()
    assert ECGEngine(cfg, scheduler=custom, entropy=seeded_entropy(0)).scheduler is custom
    with pytest.raises(ValueError):
        ECGEngine(cfg, scheduler="threads", entropy=seeded_entropy(0))


def test_idle_work_waits_for_configured_delay():
    cfg = SimConfig(sample_rate_hz=50, record_duration_s=1, total_records=6,
                    initial_load_count=2, batch_size=2, idle_delay_s=0.05,
                    anchor_date="2024-01-01")

    async def run():
        engine = ECGEngine(cfg, scheduler="asyncio", entropy=seeded_entropy(4))
        engine.start()
        await asyncio.sleep(0.01)
        after_burst = len(engine.store)
        await asyncio.sleep(0.5)
        return after_burst, len(engine.store)

    after_burst, final = asyncio.run(run())
    assert after_burst == 2
    assert final == 6
