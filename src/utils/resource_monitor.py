"""
CPU and memory throttling for directory hashing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import psutil

from config import AppConfig


@dataclass
class ResourceMonitor:
    """Pause between files while system load is above the configured limits."""

    max_cpu_percent: float
    max_ram_percent: float
    sleep_seconds: float = 0.5
    max_throttle_seconds: float = 15.0
    min_check_interval_seconds: float = 0.5
    logger: Optional[logging.Logger] = field(default=None, repr=False)
    _last_check: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.enabled:
            # Prime the counter; the first cpu_percent() call always reports 0.0.
            psutil.cpu_percent(interval=None)

    @classmethod
    def from_config(
        cls, config: AppConfig, logger: Optional[logging.Logger] = None
    ) -> Optional["ResourceMonitor"]:
        """Build a monitor from ``resource_limits``; None when no limit is set."""
        monitor = cls(
            max_cpu_percent=config.get_float("resource_limits", "max_cpu_percent", default=0),
            max_ram_percent=config.get_float("resource_limits", "max_ram_percent", default=0),
            max_throttle_seconds=config.get_float(
                "resource_limits", "max_throttle_seconds", default=15
            ),
            logger=logger,
        )
        return monitor if monitor.enabled else None

    @property
    def enabled(self) -> bool:
        return self.max_cpu_percent > 0 or self.max_ram_percent > 0

    def throttle(self) -> float:
        """Sleep while CPU or RAM usage exceeds thresholds; return seconds waited."""
        if not self.enabled:
            return 0.0
        now = time.monotonic()
        if (now - self._last_check) < self.min_check_interval_seconds:
            return 0.0
        self._last_check = now
        start_time = time.monotonic()
        while True:
            cpu = psutil.cpu_percent(interval=0.1)
            ram = psutil.virtual_memory().percent
            cpu_over = self.max_cpu_percent > 0 and cpu > self.max_cpu_percent
            ram_over = self.max_ram_percent > 0 and ram > self.max_ram_percent
            waited = time.monotonic() - start_time
            if not (cpu_over or ram_over):
                return waited
            if waited >= self.max_throttle_seconds:
                if self.logger is not None:
                    self.logger.warning(
                        "Resource limits still exceeded after %.1fs (cpu=%s%% ram=%s%%); continuing",
                        waited,
                        cpu,
                        ram,
                    )
                return waited
            time.sleep(self.sleep_seconds)
