"""
Hashing pipeline utilities.
"""

from .algorithms import DEFAULT_ALGORITHMS, AlgorithmSpec, get_algorithm, select_algorithms
from .engine import DirectoryHasher, FileDigests, HashingStats
from .errors import (
    DuplicateAlgorithm,
    EmptyAlgorithmList,
    HashingError,
    InputUnavailable,
    InvalidArgument,
)
from .pipeline import DigestPipeline, DigestResult, compute
from .sources import FileSource, InputSource, StdinSource, StringSource

__all__ = [
    "DEFAULT_ALGORITHMS",
    "AlgorithmSpec",
    "DigestPipeline",
    "DigestResult",
    "DirectoryHasher",
    "DuplicateAlgorithm",
    "EmptyAlgorithmList",
    "FileDigests",
    "FileSource",
    "HashingError",
    "HashingStats",
    "InputSource",
    "InputUnavailable",
    "InvalidArgument",
    "StdinSource",
    "StringSource",
    "compute",
    "get_algorithm",
    "select_algorithms",
]
