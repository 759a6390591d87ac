"""
Input sources that yield byte chunks for the digest pipeline.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from hashing.errors import InputUnavailable


class InputSource:
    """A byte stream that can be read to completion exactly once."""

    path: Optional[Path] = None

    def __init__(self) -> None:
        self._consumed = False
        self.bytes_read = 0

    def describe(self) -> str:
        raise NotImplementedError

    def chunks(self, chunk_size: int) -> Iterator[bytes]:
        """Yield the input as consecutive chunks of at most ``chunk_size`` bytes."""
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if self._consumed:
            raise InputUnavailable(self.path, f"{self.describe()} has already been read")
        self._consumed = True
        return self._counted(self._iter_chunks(chunk_size))

    def _counted(self, chunks: Iterator[bytes]) -> Iterator[bytes]:
        for chunk in chunks:
            self.bytes_read += len(chunk)
            yield chunk

    def _iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        raise NotImplementedError


class StringSource(InputSource):
    """In-memory text, encoded the way the command line delivered it."""

    def __init__(self, text: str, encoding: str = "utf-8") -> None:
        super().__init__()
        # surrogateescape restores the raw argv bytes of undecodable arguments.
        self._data = text.encode(encoding, errors="surrogateescape")

    def describe(self) -> str:
        return "string argument"

    def _iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        view = memoryview(self._data)
        for offset in range(0, len(view), chunk_size):
            yield bytes(view[offset : offset + chunk_size])


class FileSource(InputSource):
    """Contents of a file on disk, streamed in chunks."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)

    def describe(self) -> str:
        return f"file {self.path}"

    def _iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        try:
            handle = self.path.open("rb")
        except FileNotFoundError as exc:
            raise InputUnavailable(self.path, "No such file or directory") from exc
        except IsADirectoryError as exc:
            raise InputUnavailable(self.path, "Is a directory") from exc
        except PermissionError as exc:
            raise InputUnavailable(self.path, "Permission denied") from exc
        except OSError as exc:
            raise InputUnavailable(self.path, exc.strerror or str(exc)) from exc
        with handle:
            yield from _read_stream(handle, chunk_size, self.path)


class StdinSource(InputSource):
    """Bytes piped into the process on standard input."""

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        super().__init__()
        self._stream = stream

    def describe(self) -> str:
        return "standard input"

    def _iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        stream = self._stream if self._stream is not None else sys.stdin.buffer
        yield from _read_stream(stream, chunk_size, None)


def _read_stream(stream: BinaryIO, chunk_size: int, path: Optional[Path]) -> Iterator[bytes]:
    while True:
        try:
            data = stream.read(chunk_size)
        except OSError as exc:
            raise InputUnavailable(path, exc.strerror or str(exc)) from exc
        if not data:
            break
        yield data
