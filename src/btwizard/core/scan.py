from __future__ import annotations

import logging
from typing import Protocol

from btwizard.config import ScanningConfig

from .interfaces import RadioAdapter, Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class ScanObserver(Protocol):
    def on_scan_started(self) -> None: ...

    def on_scan_exhausted(self) -> None: ...


class ScanController:
    """Starts discovery on the radio, retrying rejected starts with backoff.

    A rejected start is retried after ``retry_delay * attempt`` seconds, up to
    ``max_retries`` times. The next rejection after that is reported through
    ``ScanObserver.on_scan_exhausted`` instead of being retried. At most one
    retry is pending at any time and ``stop_scan`` cancels it.
    """

    def __init__(
        self,
        radio: RadioAdapter,
        scheduler: Scheduler,
        observer: ScanObserver,
        config: ScanningConfig | None = None,
    ) -> None:
        self._radio = radio
        self._scheduler = scheduler
        self._observer = observer
        self._config = config or ScanningConfig()
        self._retry_count = 0
        self._pending_retry: TimerHandle | None = None

    @property
    def is_scanning(self) -> bool:
        return self._radio.is_discovering()

    @property
    def retry_count(self) -> int:
        return self._retry_count

    @property
    def retry_pending(self) -> bool:
        return self._pending_retry is not None

    def start_scan(self) -> None:
        if self._radio.is_discovering():
            return

        self._cancel_pending_retry()
        accepted = self._radio.start_discovery()
        logger.debug("start_discovery() accepted: %s", accepted)

        if accepted:
            self._retry_count = 0
            logger.info("Scanning for nearby devices")
            self._observer.on_scan_started()
        elif self._retry_count >= self._config.max_retries:
            logger.info(
                "Discovery rejected %d times, giving up", self._retry_count + 1
            )
            self._observer.on_scan_exhausted()
        else:
            self._retry_count += 1
            delay = self._config.retry_delay * self._retry_count
            logger.debug(
                "Retrying discovery in %.2fs (attempt %d/%d)",
                delay,
                self._retry_count,
                self._config.max_retries,
            )
            self._pending_retry = self._scheduler.call_later(delay, self._retry)

    def stop_scan(self) -> None:
        self._cancel_pending_retry()
        if self._radio.is_discovering():
            self._radio.cancel_discovery()
        self._retry_count = 0

    def _retry(self) -> None:
        self._pending_retry = None
        self.start_scan()

    def _cancel_pending_retry(self) -> None:
        if self._pending_retry is not None:
            self._pending_retry.cancel()
            self._pending_retry = None
