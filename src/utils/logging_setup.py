"""
Logging configuration for shall.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: int | str = logging.WARNING,
) -> Dict[str, logging.Logger]:
    """Initialize loggers and return a mapping of named loggers.

    The console handler writes to stderr so digests on stdout stay clean.
    Log files are only written when ``log_dir`` is given.
    """
    formatter = logging.Formatter(FORMAT)
    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())
        if not isinstance(console_level, int):
            console_level = logging.WARNING

    base_logger = logging.getLogger("shall")
    _reset_handlers(base_logger)
    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(formatter)
    base_logger.addHandler(stream_handler)

    performance_logger = logging.getLogger("shall.performance")
    _reset_handlers(performance_logger)
    performance_logger.setLevel(logging.DEBUG)
    performance_logger.propagate = True

    # File-only; run-ending errors are printed to stderr separately.
    error_logger = logging.getLogger("shall.errors")
    _reset_handlers(error_logger)
    error_logger.setLevel(logging.INFO)
    error_logger.propagate = False

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        date_stamp = datetime.now().strftime("%Y%m%d")

        file_handler = logging.FileHandler(log_dir / f"master_log_{date_stamp}.log", encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

        error_handler = logging.FileHandler(log_dir / f"error_log_{date_stamp}.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        base_logger.addHandler(error_handler)
        error_logger.addHandler(file_handler)
        error_logger.addHandler(error_handler)

        perf_handler = logging.FileHandler(
            log_dir / f"performance_log_{date_stamp}.log", encoding="utf-8"
        )
        perf_handler.setFormatter(formatter)
        performance_logger.addHandler(perf_handler)
        performance_logger.propagate = False
    else:
        error_logger.addHandler(logging.NullHandler())

    return {"main": base_logger, "performance": performance_logger, "errors": error_logger}
