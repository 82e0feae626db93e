"""
Session Recording for Veering Analysis

This module collects compass headings while a walking session is running and
hands a frozen SessionRecord to the analyzer once tracking stops.

Heading and pedometer callbacks may arrive on a sensor thread. Headings are
pushed onto a queue as immutable samples; stop() drains the queue exactly once
so the analyzer never sees a session that is still being written.
"""

import logging
import queue
from threading import RLock
from typing import Callable, Dict, List, Optional
from . import utils
from .models import HeadingSample, SessionRecord

LOGGER = logging.getLogger(__name__)


class SessionRecorder:
    """
    Incremental builder of a SessionRecord.

    Args:
        clock: Returns the current time in milliseconds. Defaults to wall clock.
    """

    def __init__(self, clock: Callable[[], int] = utils.current_millis):
        self._clock = clock
        self._lock = RLock()
        self._samples: "queue.Queue[HeadingSample]" = queue.Queue()
        self._last_ms: Optional[int] = None
        self._distance = 0.0
        self._active = False

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    def start(self, now_ms: Optional[int] = None) -> None:
        """Begin a new session, discarding anything left from the last one."""
        with self._lock:
            self._samples = queue.Queue()
            self._last_ms = self._clock() if now_ms is None else int(now_ms)
            self._distance = 0.0
            self._active = True
        LOGGER.debug("Session recording started")

    def record_heading(self, heading_degrees: float, now_ms: Optional[int] = None) -> HeadingSample:
        """
        Record one compass update.

        Args:
            heading_degrees: Magnetic heading reported by the compass.
            now_ms: Callback timestamp in milliseconds. Defaults to the clock.

        Returns:
            The queued HeadingSample, with elapsed_ms measured from the
            previous update (or from start()).

        Raises:
            RuntimeError: If the recorder is not running.
            ValueError: If the timestamp goes backwards or the heading is invalid.
        """
        with self._lock:
            if not self._active:
                raise RuntimeError("Cannot record headings when no session is running")
            now = self._clock() if now_ms is None else int(now_ms)
            elapsed = now - self._last_ms
            if elapsed < 0:
                raise ValueError(f"Heading timestamp {now} is earlier than the previous one ({self._last_ms})")
            sample = HeadingSample(heading_degrees, elapsed)
            self._last_ms = now
            self._samples.put(sample)
            return sample

    def update_distance(self, distance: float) -> None:
        """Store the latest cumulative pedometer distance."""
        distance = utils.safe_float(distance, "walked_distance")
        if distance < 0:
            raise ValueError(f"walked_distance must be non-negative, got {distance}")
        with self._lock:
            self._distance = distance

    def stop(self) -> SessionRecord:
        """
        Stop tracking and freeze the session.

        Returns:
            SessionRecord holding every heading recorded since start().

        Raises:
            RuntimeError: If the recorder is not running.
        """
        with self._lock:
            if not self._active:
                raise RuntimeError("No session is running")
            self._active = False
            samples = self._drain()
            record = SessionRecord(headings=tuple(samples), walked_distance=self._distance)

        LOGGER.info(
            "Session recording stopped: %d headings over %d ms, distance %.2f",
            len(record), record.total_elapsed_ms, record.walked_distance,
        )
        return record

    def status(self) -> Dict:
        with self._lock:
            return {
                "active": self._active,
                "pending_headings": self._samples.qsize(),
                "walked_distance": self._distance,
            }

    def _drain(self) -> List[HeadingSample]:
        samples = []
        while True:
            try:
                samples.append(self._samples.get_nowait())
            except queue.Empty:
                return samples
