"""
Supported hash algorithms and their incremental hashers.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable, Protocol


class IncrementalHasher(Protocol):
    def update(self, chunk: bytes) -> None: ...

    def finalize(self) -> bytes: ...


class HashlibHasher:
    """Incremental hasher backed by a ``hashlib`` object."""

    def __init__(self, name: str) -> None:
        # md5 and sha1 are integrity checksums here, not security primitives.
        self._state = hashlib.new(name, usedforsecurity=False)
        self._finalized = False

    def update(self, chunk: bytes) -> None:
        if self._finalized:
            raise RuntimeError("Hasher already finalized")
        self._state.update(chunk)

    def finalize(self) -> bytes:
        if self._finalized:
            raise RuntimeError("Hasher already finalized")
        self._finalized = True
        return self._state.digest()


@dataclass(frozen=True)
class AlgorithmSpec:
    """A labelled hash algorithm."""

    label: str
    hashlib_name: str

    def new_hasher(self) -> IncrementalHasher:
        """Return a fresh hasher; hashers are never shared between inputs."""
        return HashlibHasher(self.hashlib_name)

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.hashlib_name, usedforsecurity=False).digest_size


SHA1 = AlgorithmSpec("SHA1", "sha1")
SHA256 = AlgorithmSpec("SHA256", "sha256")
SHA512 = AlgorithmSpec("SHA512", "sha512")
MD5 = AlgorithmSpec("MD5", "md5")

DEFAULT_ALGORITHMS: tuple[AlgorithmSpec, ...] = (SHA1, SHA256, SHA512, MD5)
ALGORITHMS_BY_LABEL = {spec.label: spec for spec in DEFAULT_ALGORITHMS}


def get_algorithm(label: str) -> AlgorithmSpec:
    """Look up an algorithm by label, case-insensitively."""
    try:
        return ALGORITHMS_BY_LABEL[label.strip().upper()]
    except KeyError:
        supported = ", ".join(ALGORITHMS_BY_LABEL)
        raise KeyError(f"Unsupported hash algorithm: {label} (supported: {supported})") from None


def select_algorithms(
    selected: Iterable[str],
    order: Iterable[AlgorithmSpec] = DEFAULT_ALGORITHMS,
) -> list[AlgorithmSpec]:
    """Return the selected algorithms in canonical order.

    An empty selection means every algorithm in ``order``.
    """
    wanted = {get_algorithm(label).label for label in selected}
    ordered = list(order)
    if not wanted:
        return ordered
    known = {spec.label for spec in ordered}
    ordered.extend(spec for spec in DEFAULT_ALGORITHMS if spec.label not in known)
    return [spec for spec in ordered if spec.label in wanted]
