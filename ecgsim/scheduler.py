from __future__ import annotations
import asyncio
from collections import deque
from enum import Enum
from typing import Callable, Deque, Optional

Task = Callable[[], None]

class Priority(str, Enum):
    FRAME = "frame"   # run on the next tick, ahead of idle work
    IDLE = "idle"     # run when nothing more urgent is pending

class TaskQueueScheduler:
    """Deterministic cooperative scheduler: the host pumps it one task at a time.

    Frame tasks always run before idle tasks; each priority is FIFO.
    """

    def __init__(self):
        self._frame: Deque[Task] = deque()
        self._idle: Deque[Task] = deque()
        self.ticks = 0

    def schedule(self, task: Task, priority: Priority = Priority.FRAME) -> None:
        if priority == Priority.FRAME:
            self._frame.append(task)
        else:
            self._idle.append(task)

    @property
    def pending(self) -> int:
        return len(self._frame) + len(self._idle)

    def run_next(self) -> bool:
        """Run one queued task; False when nothing was queued."""
        if self._frame:
            task = self._frame.popleft()
        elif self._idle:
            task = self._idle.popleft()
        else:
            return False
        self.ticks += 1
        task()
        return True

    def run_pending(self, max_ticks: Optional[int] = None) -> int:
        """Pump until the queue drains (or `max_ticks` tasks ran); returns tasks run."""
        ran = 0
        while max_ticks is None or ran < max_ticks:
            if not self.run_next():
                break
            ran += 1
        return ran

class AsyncioScheduler:
    """Maps the two priorities onto an asyncio event loop.

    asyncio has no idle notification, so idle work always waits `idle_delay_s`.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, idle_delay_s: float = 0.1):
        self._loop = loop
        self.idle_delay_s = float(idle_delay_s)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, task: Task, priority: Priority = Priority.FRAME) -> None:
        if priority == Priority.FRAME:
            self.loop.call_soon(task)
        else:
            self.loop.call_later(self.idle_delay_s, task)
