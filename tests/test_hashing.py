import hashlib
from pathlib import Path

import pytest

from hashing.algorithms import DEFAULT_ALGORITHMS, MD5, SHA1, SHA256, SHA512
from hashing.errors import DuplicateAlgorithm, EmptyAlgorithmList, InputUnavailable
from hashing.pipeline import DigestPipeline, compute
from hashing.sources import FileSource, StringSource

EMPTY_DIGESTS = {
    "SHA1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
    "SHA256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    "SHA512": (
        "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
        "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
    ),
    "MD5": "d41d8cd98f00b204e9800998ecf8427e",
}

BASIL_DIGESTS = {
    "SHA1": "7377ba3671fcd8c2e6decf7bf5becdaa92ba73dc",
    "SHA256": "579651b0d574971040b531b66efbc5e607b677aa0d2633ec9eca376020ad8b3d",
    "SHA512": (
        "a80e4e2e0af2d0dbcd448ddccd0787dbfa285fb14ac1f6b393f029a897021d6c"
        "4cb0421013ffb7f1a5156088ab46ad967f188866f1df991df43713b0fd2b166f"
    ),
    "MD5": "6862efb4028e93ac23a6f90a9055bae8",
}


def as_dict(results) -> dict[str, str]:
    return {result.label: result.hexdigest for result in results}


def test_empty_input_matches_known_digests() -> None:
    results = compute(StringSource(""), DEFAULT_ALGORITHMS)
    assert as_dict(results) == EMPTY_DIGESTS


def test_basil_matches_known_digests() -> None:
    results = compute(StringSource("basil"), DEFAULT_ALGORITHMS)
    assert as_dict(results) == BASIL_DIGESTS


def test_results_follow_requested_order() -> None:
    order = [MD5, SHA512, SHA1, SHA256]
    results = compute(StringSource("basil"), order)
    assert [result.label for result in results] == ["MD5", "SHA512", "SHA1", "SHA256"]
    assert results[0].hexdigest == BASIL_DIGESTS["MD5"]


def test_string_and_file_inputs_agree(tmp_path: Path) -> None:
    text = "grüße, basil\n"
    path = tmp_path / "input.txt"
    path.write_bytes(text.encode("utf-8"))

    from_string = compute(StringSource(text), DEFAULT_ALGORITHMS)
    from_file = compute(FileSource(path), DEFAULT_ALGORITHMS)

    assert from_string == from_file


@pytest.mark.parametrize("chunk_size", [1, 7, 64, 4096, 1024 * 1024])
def test_chunk_size_does_not_change_digests(tmp_path: Path, chunk_size: int) -> None:
    content = bytes(range(256)) * 513
    path = tmp_path / "blob.bin"
    path.write_bytes(content)

    results = DigestPipeline(chunk_size=chunk_size).compute(FileSource(path), DEFAULT_ALGORITHMS)

    assert as_dict(results) == {
        "SHA1": hashlib.sha1(content).hexdigest(),
        "SHA256": hashlib.sha256(content).hexdigest(),
        "SHA512": hashlib.sha512(content).hexdigest(),
        "MD5": hashlib.md5(content).hexdigest(),
    }


def test_repeated_runs_are_deterministic() -> None:
    first = compute(StringSource("basil"), DEFAULT_ALGORITHMS)
    second = compute(StringSource("basil"), DEFAULT_ALGORITHMS)
    assert first == second


def test_input_is_read_once_for_all_algorithms() -> None:
    class CountingSource(StringSource):
        reads = 0

        def _iter_chunks(self, chunk_size: int):
            for chunk in super()._iter_chunks(chunk_size):
                CountingSource.reads += 1
                yield chunk

    compute(CountingSource("x" * 10), DEFAULT_ALGORITHMS, chunk_size=4)
    assert CountingSource.reads == 3


def test_missing_file_raises_input_unavailable(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    with pytest.raises(InputUnavailable) as excinfo:
        compute(FileSource(missing), DEFAULT_ALGORITHMS)
    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)


def test_directory_path_raises_input_unavailable(tmp_path: Path) -> None:
    with pytest.raises(InputUnavailable):
        compute(FileSource(tmp_path), [SHA256])


def test_read_error_mid_stream_aborts_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "flaky.bin"
    path.write_bytes(b"a" * 100)
    real_open = Path.open

    class FlakyHandle:
        def __init__(self, handle) -> None:
            self._handle = handle
            self._reads = 0

        def read(self, size: int) -> bytes:
            self._reads += 1
            if self._reads > 1:
                raise OSError(5, "Input/output error")
            return self._handle.read(size)

        def __enter__(self):
            return self

        def __exit__(self, *exc_info) -> None:
            self._handle.close()

    def flaky_open(self, *args, **kwargs):
        return FlakyHandle(real_open(self, *args, **kwargs))

    monkeypatch.setattr(Path, "open", flaky_open)

    with pytest.raises(InputUnavailable) as excinfo:
        DigestPipeline(chunk_size=10).compute(FileSource(path), DEFAULT_ALGORITHMS)
    assert "Input/output error" in str(excinfo.value)


def test_empty_algorithm_list_is_rejected() -> None:
    with pytest.raises(EmptyAlgorithmList):
        compute(StringSource("basil"), [])


def test_duplicate_algorithms_are_rejected() -> None:
    with pytest.raises(DuplicateAlgorithm):
        compute(StringSource("basil"), [SHA1, SHA256, SHA1])


def test_validation_happens_before_reading() -> None:
    source = StringSource("basil")
    with pytest.raises(EmptyAlgorithmList):
        compute(source, [])
    assert as_dict(compute(source, [SHA1])) == {"SHA1": BASIL_DIGESTS["SHA1"]}


def test_non_positive_chunk_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        DigestPipeline(chunk_size=0)
