"""
Single-pass multi-digest pipeline.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from hashing.algorithms import AlgorithmSpec
from hashing.errors import DuplicateAlgorithm, EmptyAlgorithmList
from hashing.sources import InputSource

DEFAULT_CHUNK_BYTES = 4 * 1024 * 1024


@dataclass(frozen=True)
class DigestResult:
    """Finalized digest for one algorithm."""

    label: str
    digest: bytes

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


class DigestPipeline:
    """Feed one input into several hashers while reading it only once."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_BYTES,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.logger = logger or logging.getLogger("shall.performance")

    def compute(
        self, source: InputSource, algorithms: Sequence[AlgorithmSpec]
    ) -> list[DigestResult]:
        """Return one result per algorithm, in the order given.

        Every chunk goes to every hasher before the next chunk is read, so
        all digests cover the same bytes. Raises ``InputUnavailable`` if the
        source fails; no partial results are returned in that case.
        """
        specs = _validate(algorithms)
        hashers = [spec.new_hasher() for spec in specs]
        start_time = time.monotonic()
        for chunk in source.chunks(self.chunk_size):
            for hasher in hashers:
                hasher.update(chunk)
        results = [
            DigestResult(label=spec.label, digest=hasher.finalize())
            for spec, hasher in zip(specs, hashers)
        ]
        self.logger.debug(
            "Hashed %s bytes from %s with %s in %.3fs",
            source.bytes_read,
            source.describe(),
            ",".join(spec.label for spec in specs),
            time.monotonic() - start_time,
        )
        return results


def compute(
    source: InputSource,
    algorithms: Sequence[AlgorithmSpec],
    chunk_size: int = DEFAULT_CHUNK_BYTES,
) -> list[DigestResult]:
    """Compute digests of ``source`` for every algorithm in one pass."""
    return DigestPipeline(chunk_size=chunk_size).compute(source, algorithms)


def _validate(algorithms: Sequence[AlgorithmSpec]) -> list[AlgorithmSpec]:
    specs = list(algorithms)
    if not specs:
        raise EmptyAlgorithmList()
    seen: set[str] = set()
    for spec in specs:
        if spec.label in seen:
            raise DuplicateAlgorithm(spec.label)
        seen.add(spec.label)
    return specs
