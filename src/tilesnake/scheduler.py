# src/tilesnake/scheduler.py
from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

# Floating-point slack when comparing virtual due times
_EPS = 1e-9


class Scheduler(Protocol):
    """Timer API the session controller is written against."""

    def schedule(self, interval: float, callback: Callback, repeating: bool = True): ...

    def cancel(self, handle) -> None: ...


# =========================
#  Real time (threads)
# =========================

class _TimerThread(threading.Thread):
    def __init__(self, interval: float, callback: Callback, repeating: bool):
        super().__init__(daemon=True, name=f"tilesnake-timer-{interval:g}s")
        self.interval = interval
        self.callback = callback
        self.repeating = repeating
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.callback()
            if not self.repeating:
                break

    def cancel(self) -> None:
        self._stopped.set()


class ThreadingScheduler:
    """
    One daemon thread per scheduled job.

    Cancelling only stops future firings; a callback already running
    finishes, so callers must guard state themselves (GameSession does).
    """

    def __init__(self):
        self._jobs: List[_TimerThread] = []
        self._lock = threading.Lock()

    def schedule(self, interval: float, callback: Callback, repeating: bool = True) -> _TimerThread:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        job = _TimerThread(interval, callback, repeating)
        with self._lock:
            self._jobs = [j for j in self._jobs if j.is_alive()]
            self._jobs.append(job)
        job.start()
        return job

    def cancel(self, handle: _TimerThread) -> None:
        handle.cancel()

    def shutdown(self) -> None:
        with self._lock:
            jobs, self._jobs = self._jobs, []
        for job in jobs:
            job.cancel()
        logger.debug("cancelled %d timer thread(s)", len(jobs))


# =========================
#  Virtual time (tests, headless play)
# =========================

class ManualJob:
    __slots__ = ("due", "seq", "interval", "callback", "repeating", "cancelled")

    def __init__(self, due: float, seq: int, interval: float, callback: Callback, repeating: bool):
        self.due = due
        self.seq = seq
        self.interval = interval
        self.callback = callback
        self.repeating = repeating
        self.cancelled = False

    def __repr__(self):
        return f"<ManualJob due={self.due:g} every={self.interval:g} cancelled={self.cancelled}>"


class ManualScheduler:
    """
    Deterministic scheduler driven by an explicit virtual clock.

    Nothing fires until advance() or run_next() is called. Jobs due at the
    same instant fire in the order they were scheduled.
    """

    def __init__(self):
        self.now = 0.0
        self._jobs: List[ManualJob] = []
        self._seq = itertools.count()

    def schedule(self, interval: float, callback: Callback, repeating: bool = True) -> ManualJob:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        job = ManualJob(self.now + interval, next(self._seq), interval, callback, repeating)
        self._jobs.append(job)
        return job

    def cancel(self, handle: ManualJob) -> None:
        handle.cancelled = True
        if handle in self._jobs:
            self._jobs.remove(handle)

    @property
    def jobs(self) -> List[ManualJob]:
        return list(self._jobs)

    def _next_job(self) -> Optional[ManualJob]:
        if not self._jobs:
            return None
        return min(self._jobs, key=lambda j: (j.due, j.seq))

    def run_next(self) -> bool:
        """Jump the clock to the earliest job and fire it. False if nothing is scheduled."""
        job = self._next_job()
        if job is None:
            return False
        self.now = max(self.now, job.due)
        if job.repeating:
            job.due += job.interval
        else:
            self.cancel(job)
        job.callback()
        return True

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that falls due. Returns the number fired."""
        target = self.now + seconds
        fired = 0
        while True:
            job = self._next_job()
            if job is None or job.due > target + _EPS:
                break
            self.run_next()
            fired += 1
        self.now = target
        return fired
