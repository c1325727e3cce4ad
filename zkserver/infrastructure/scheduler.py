# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Background sweep of expired session tokens."""

from __future__ import annotations

import threading
from datetime import timedelta

from zkserver.application.use_cases.users.purge_tokens import PurgeExpiredTokensUseCase
from zkserver.shared.logging import logger


class TokenPurgeScheduler:
    """Runs the purge on its own daemon thread every ``interval``.

    The first cycle starts one interval after ``start()``. At most one purge
    runs at a time, whether triggered by the timer or by ``run_once()``.
    """

    def __init__(self, purge: PurgeExpiredTokensUseCase, interval: timedelta) -> None:
        if interval <= timedelta(0):
            raise ValueError("purge interval must be positive")
        self._purge = purge
        self._interval = interval
        self._stop = threading.Event()
        self._running = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_alive:
            return
        # Fresh event per thread so a loop that outlived stop() never resumes
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._loop, args=(self._stop,), name="token-purge", daemon=True
        )
        self._thread.start()
        logger.info(f"tokens.purge: scheduled every {self._interval}")

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is None:
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("tokens.purge: cycle still running, thread exits after it")
            return
        self._thread = None
        logger.info("tokens.purge: stopped")

    def run_once(self) -> int | None:
        """One purge cycle; ``None`` if skipped or failed."""
        if not self._running.acquire(blocking=False):
            logger.warning("tokens.purge: previous cycle still running, skipping")
            return None
        try:
            return self._purge.execute()
        except Exception:
            # the next cycle retries; the process keeps serving
            logger.exception("tokens.purge: cycle failed")
            return None
        finally:
            self._running.release()

    def _loop(self, stop: threading.Event) -> None:
        seconds = self._interval.total_seconds()
        while not stop.wait(seconds):
            self.run_once()
