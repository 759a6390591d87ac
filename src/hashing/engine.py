"""
Directory hashing built on the digest pipeline.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from hashing.algorithms import AlgorithmSpec
from hashing.errors import InputUnavailable
from hashing.pipeline import DigestPipeline, DigestResult
from hashing.sources import FileSource
from utils import ResourceMonitor


@dataclass
class HashingStats:
    """Summary statistics for a directory run."""

    total_files: int
    hashed_files: int
    total_bytes: int


@dataclass(frozen=True)
class FileDigests:
    """All digests computed for one file."""

    path: Path
    size: int
    results: list[DigestResult]

    @property
    def name(self) -> str:
        return self.path.name


class DirectoryHasher:
    """Hash every regular file directly inside a directory."""

    def __init__(
        self,
        pipeline: DigestPipeline,
        logger: logging.Logger,
        threads: int = 4,
        monitor: Optional[ResourceMonitor] = None,
    ) -> None:
        self.pipeline = pipeline
        self.logger = logger
        self.threads = max(int(threads), 1)
        self.monitor = monitor

    def list_files(self, directory: Path) -> list[Path]:
        """Return the regular files of ``directory`` sorted by name."""
        try:
            entries = list(directory.iterdir())
        except FileNotFoundError as exc:
            raise InputUnavailable(directory, "No such file or directory") from exc
        except NotADirectoryError as exc:
            raise InputUnavailable(directory, "Not a directory") from exc
        except PermissionError as exc:
            raise InputUnavailable(directory, "Permission denied") from exc
        except OSError as exc:
            raise InputUnavailable(directory, exc.strerror or str(exc)) from exc
        files = [entry for entry in entries if entry.is_file()]
        return sorted(files, key=lambda path: path.name)

    def run(
        self, directory: Path, algorithms: Sequence[AlgorithmSpec]
    ) -> tuple[list[FileDigests], HashingStats]:
        """Hash all files; any unreadable file aborts the whole run."""
        files = self.list_files(directory)
        self.logger.info("Hashing %s files in %s", len(files), directory)

        if self.threads <= 1:
            digests = []
            for path in files:
                self._throttle()
                digests.append(self._hash_file(path, algorithms))
        else:
            with ThreadPoolExecutor(max_workers=self.threads) as executor:
                futures = []
                for path in files:
                    self._throttle()
                    futures.append(executor.submit(self._hash_file, path, algorithms))
                # Futures are collected in submission order, which is name order.
                digests = [future.result() for future in futures]

        stats = HashingStats(
            total_files=len(files),
            hashed_files=len(digests),
            total_bytes=sum(item.size for item in digests),
        )
        return digests, stats

    def _throttle(self) -> None:
        if self.monitor is not None:
            self.monitor.throttle()

    def _hash_file(self, path: Path, algorithms: Sequence[AlgorithmSpec]) -> FileDigests:
        source = FileSource(path)
        results = self.pipeline.compute(source, algorithms)
        self.logger.debug("Hashed %s (%s bytes)", path.name, source.bytes_read)
        return FileDigests(path=path, size=source.bytes_read, results=results)
