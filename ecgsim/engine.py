from __future__ import annotations
import logging
from typing import Optional, Tuple

from .config import SimConfig
from .ecg import Record, synthesize_record
from .loader import ProgressiveLoader
from .rng import EntropySource, UniformRandomSource, os_entropy
from .scheduler import AsyncioScheduler, TaskQueueScheduler
from .store import RecordStore
from .timegrid import resolve_anchor

logger = logging.getLogger(__name__)

class ECGEngine:
    """Owns every piece of mutable generation state for one record stream.

    Engines share nothing: two engines have separate random caches, stores
    and loaders.
    """

    def __init__(
        self,
        cfg: Optional[SimConfig] = None,
        scheduler=None,
        entropy: EntropySource = os_entropy,
    ):
        self.cfg = cfg or SimConfig()
        self.rng = UniformRandomSource(entropy, batch_size=self.cfg.random_cache_size)
        self.anchor = resolve_anchor(self.cfg.anchor_date)
        self.store = RecordStore()
        self.scheduler = self._make_scheduler(scheduler)
        self.loader = ProgressiveLoader(self.synthesize, self.store, self.scheduler, self.cfg)
        logger.debug("engine ready: %d records of %d samples, anchor %s",
                     self.cfg.total_records, self.cfg.samples_per_record, self.anchor.date())

    def _make_scheduler(self, scheduler):
        """None or "queue": host-pumped queue. "asyncio": the running loop. Anything else is used as given."""
        if scheduler is None or scheduler == "queue":
            return TaskQueueScheduler()
        if scheduler == "asyncio":
            return AsyncioScheduler(idle_delay_s=self.cfg.idle_delay_s)
        if isinstance(scheduler, str):
            raise ValueError(f"unknown scheduler {scheduler!r}")
        return scheduler

    def synthesize(self, index: int) -> Record:
        return synthesize_record(self.rng, index, self.cfg, self.anchor)

    def start(self) -> None:
        self.loader.start()

    def stop(self) -> None:
        self.loader.stop()

    @property
    def progress(self) -> Tuple[int, int]:
        return self.loader.progress

    def current(self) -> Record:
        return self.store.current()

    def next_record(self) -> Record:
        self.loader.navigate(+1)
        return self.store.current()

    def previous_record(self) -> Record:
        self.loader.navigate(-1)
        return self.store.current()
