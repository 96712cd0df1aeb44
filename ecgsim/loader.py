from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

from .ecg import Record
from .scheduler import Priority
from .store import RecordStore

logger = logging.getLogger(__name__)

ProgressListener = Callable[[int, int], None]

class LoaderPhase(str, Enum):
    IDLE = "idle"
    INITIAL_BURST = "initial_burst"
    PARTIAL = "partial"
    BACKGROUND_FILL = "background_fill"
    COMPLETE = "complete"

@dataclass
class LoaderState:
    generated_count: int = 0
    target_count: int = 0
    is_generating: bool = False

class ProgressiveLoader:
    """Fills a RecordStore in scheduled batches.

    A short frame-priority burst makes the first records available quickly;
    the rest is produced at idle priority by a single background loop.
    """

    def __init__(
        self,
        synthesize: Callable[[int], Record],
        store: RecordStore,
        scheduler,
        cfg,
    ):
        self._synthesize = synthesize
        self.store = store
        self.scheduler = scheduler
        self.cfg = cfg
        self.state = LoaderState(target_count=int(cfg.total_records))
        self.phase = LoaderPhase.IDLE
        self._initial_target = min(int(cfg.initial_load_count), self.state.target_count)
        self._stopped = False
        self._listeners: List[ProgressListener] = []

    @property
    def progress(self) -> Tuple[int, int]:
        return self.state.generated_count, self.state.target_count

    @property
    def complete(self) -> bool:
        return self.state.generated_count >= self.state.target_count

    @property
    def stopped(self) -> bool:
        return self._stopped

    def add_listener(self, callback: ProgressListener) -> None:
        self._listeners.append(callback)

    def start(self) -> None:
        if self.phase != LoaderPhase.IDLE:
            return
        if self.complete:
            self._set_phase(LoaderPhase.COMPLETE)
            return
        if self._initial_target == 0:
            self._set_phase(LoaderPhase.PARTIAL)
            self._start_background()
            return
        self._set_phase(LoaderPhase.INITIAL_BURST)
        self.scheduler.schedule(self._burst_tick, Priority.FRAME)

    def stop(self) -> None:
        """Stop before the next batch. Stopping twice is a no-op."""
        if not self._stopped:
            self._stopped = True
            logger.info("loader stop requested at %d/%d", *self.progress)

    def resume(self, restart: bool = True) -> bool:
        """Clear a stop request; with `restart` the background loop starts again right away.

        Otherwise loading picks up on the next `request_more`.
        """
        self._stopped = False
        if not restart:
            return False
        if self.phase == LoaderPhase.IDLE:
            self.start()
            return True
        if self.phase == LoaderPhase.INITIAL_BURST:
            return False
        return self._start_background()

    def request_more(self) -> bool:
        """Re-enter background filling when the store cursor nears the generated end.

        Returns True only if a new background loop was started.
        """
        if self.phase in (LoaderPhase.IDLE, LoaderPhase.INITIAL_BURST):
            return False
        if self.store.remaining_ahead() >= int(self.cfg.lookahead):
            return False
        return self._start_background()

    def navigate(self, delta: int) -> int:
        """Move the store cursor; moving forward may trigger more loading."""
        index = self.store.move_cursor(delta)
        if delta > 0:
            self.request_more()
        return index

    def _set_phase(self, phase: LoaderPhase) -> None:
        if phase != self.phase:
            logger.info("loader %s -> %s (%d/%d)", self.phase.value, phase.value, *self.progress)
            self.phase = phase

    def _produce(self, stop: int) -> None:
        start = self.state.generated_count
        for i in range(start, min(stop, self.state.target_count)):
            self.store.append(self._synthesize(i))
            self.state.generated_count += 1
        logger.debug("generated records %d..%d", start, self.state.generated_count - 1)
        for cb in self._listeners:
            cb(*self.progress)

    def _burst_tick(self) -> None:
        if self._stopped:
            self._set_phase(LoaderPhase.PARTIAL)
            return
        self._produce(min(self.state.generated_count + int(self.cfg.initial_batch_size), self._initial_target))
        if self.state.generated_count < self._initial_target:
            self.scheduler.schedule(self._burst_tick, Priority.FRAME)
            return
        self._set_phase(LoaderPhase.COMPLETE if self.complete else LoaderPhase.PARTIAL)
        self._start_background()

    def _start_background(self) -> bool:
        if self.state.is_generating or self._stopped or self.complete:
            return False
        self.state.is_generating = True
        self._set_phase(LoaderPhase.BACKGROUND_FILL)
        self.scheduler.schedule(self._fill_tick, Priority.IDLE)
        return True

    def _fill_tick(self) -> None:
        if self._stopped:
            self.state.is_generating = False
            self._set_phase(LoaderPhase.PARTIAL)
            return
        self._produce(self.state.generated_count + int(self.cfg.batch_size))
        if self.complete:
            self.state.is_generating = False
            self._set_phase(LoaderPhase.COMPLETE)
            logger.info("all %d records generated", self.state.target_count)
            return
        self.scheduler.schedule(self._fill_tick, Priority.IDLE)
