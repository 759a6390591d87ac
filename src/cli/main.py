"""
Command-line entry point: compute several digests of one input.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from config import AppConfig
from hashing.algorithms import DEFAULT_ALGORITHMS, AlgorithmSpec, get_algorithm, select_algorithms
from hashing.engine import DirectoryHasher
from hashing.errors import (
    DuplicateAlgorithm,
    EmptyAlgorithmList,
    HashingError,
    InputUnavailable,
    InvalidArgument,
)
from hashing.pipeline import DEFAULT_CHUNK_BYTES, DigestPipeline
from hashing.sources import FileSource, InputSource, StdinSource, StringSource
from output import DigestFormatter, make_console, print_error
from utils import ResourceMonitor, setup_logging

EXIT_OK = 0
EXIT_INPUT_UNAVAILABLE = 1
EXIT_USAGE = 2
EXIT_CONFIG = 3

ALGORITHM_FLAGS = (("sha1", "SHA1"), ("sha256", "SHA256"), ("sha512", "SHA512"), ("md5", "MD5"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shall",
        description="Calculate various hashes of a string or file in a single pass.",
    )
    for flag, label in ALGORITHM_FLAGS:
        parser.add_argument(f"--{flag}", action="store_true", help=f"Calculate {label} hash")
    parser.add_argument("--file", metavar="FILE", default=None, help="Input file to hash")
    parser.add_argument(
        "--directory",
        metavar="DIR",
        default=None,
        help="Hash every file in a directory (non-recursive)",
    )
    parser.add_argument("--stdin", action="store_true", help="Read input from stdin")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--config", default=None, help="Optional config path override")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="The string to hash (not allowed together with --file, --stdin or --directory)",
    )
    return parser


def given_inputs(args: argparse.Namespace) -> list[str]:
    """Return the input options present on the command line; exactly one is allowed."""
    present = [
        ("INPUT", args.input is not None),
        ("--file", args.file is not None),
        ("--stdin", bool(args.stdin)),
        ("--directory", args.directory is not None),
    ]
    given = [name for name, is_present in present if is_present]
    if not given:
        raise InvalidArgument("No input given; pass a string, --file, --stdin or --directory")
    if len(given) > 1:
        raise InvalidArgument(f"Conflicting inputs {' and '.join(given)}; pass exactly one")
    return given


def resolve_source(args: argparse.Namespace) -> InputSource:
    """Return the single (non-directory) input source named by ``args``."""
    given = given_inputs(args)
    if given == ["--directory"]:
        raise InvalidArgument("--directory does not name a single input")
    if args.file is not None:
        return FileSource(args.file)
    if args.stdin:
        return StdinSource()
    return StringSource(args.input)


def configured_algorithms(config: AppConfig) -> list[AlgorithmSpec]:
    """Return the algorithm order from ``hashing.algorithms``, or the default order."""
    labels = config.get("hashing", "algorithms", default=None)
    if labels is None:
        return list(DEFAULT_ALGORITHMS)
    if isinstance(labels, str):
        labels = [labels]
    if not isinstance(labels, list):
        raise ValueError(f"hashing.algorithms must be a list of labels, got {labels!r}")
    specs: list[AlgorithmSpec] = []
    for label in labels:
        spec = get_algorithm(str(label))
        if spec in specs:
            raise DuplicateAlgorithm(spec.label)
        specs.append(spec)
    if not specs:
        raise EmptyAlgorithmList()
    return specs


def selected_labels(args: argparse.Namespace) -> list[str]:
    return [label for flag, label in ALGORITHM_FLAGS if getattr(args, flag)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    color = not args.no_color

    try:
        config = AppConfig.load(Path(args.config) if args.config else None)
        color = color and config.get_bool("output", "color", default=True)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print_error(make_console(color, stderr=True), str(exc), color=color)
        return EXIT_CONFIG

    err_console = make_console(color, stderr=True)
    console_level = "INFO" if args.verbose else str(config.get("logging", "level", default="WARNING"))
    loggers = setup_logging(config.resolve_path("paths", "logs"), console_level)
    logger = loggers["main"]
    error_logger = loggers["errors"]

    try:
        algorithms = select_algorithms(selected_labels(args), configured_algorithms(config))
        chunk_size = config.get_int("hashing", "chunk_bytes", default=DEFAULT_CHUNK_BYTES)
        pipeline = DigestPipeline(chunk_size=chunk_size, logger=loggers["performance"])
        directory_hasher = DirectoryHasher(
            pipeline,
            logger,
            threads=config.get_int("resource_limits", "threads", "hashing", default=4),
            monitor=ResourceMonitor.from_config(config, logger=logger),
        )
    except (KeyError, TypeError, ValueError) as exc:
        message = exc.args[0] if exc.args else str(exc)
        print_error(err_console, f"Invalid configuration: {message}", color=color)
        error_logger.error("Invalid configuration: %s", message)
        return EXIT_CONFIG

    formatter = DigestFormatter(color=color)
    try:
        given_inputs(args)
        if args.directory is not None:
            _run_directory(Path(args.directory), algorithms, directory_hasher, formatter, logger)
        else:
            _run_single(resolve_source(args), algorithms, pipeline, formatter, logger)
    except InvalidArgument as exc:
        parser.print_usage(sys.stderr)
        print_error(err_console, str(exc), color=color)
        return EXIT_USAGE
    except InputUnavailable as exc:
        print_error(err_console, f"Cannot read {exc}", color=color)
        error_logger.error("Aborted, input unavailable: %s", exc)
        return EXIT_INPUT_UNAVAILABLE
    except HashingError as exc:
        print_error(err_console, str(exc), color=color)
        error_logger.error("Aborted: %s", exc)
        return EXIT_CONFIG
    return EXIT_OK


def _run_single(
    source: InputSource,
    algorithms: Sequence[AlgorithmSpec],
    pipeline: DigestPipeline,
    formatter: DigestFormatter,
    logger: logging.Logger,
) -> None:
    logger.info("Reading from %s", source.describe())
    logger.info("Calculating %s", ", ".join(spec.label for spec in algorithms))
    results = pipeline.compute(source, algorithms)
    logger.info("Input size: %s bytes", source.bytes_read)
    formatter.render(results)


def _run_directory(
    directory: Path,
    algorithms: Sequence[AlgorithmSpec],
    hasher: DirectoryHasher,
    formatter: DigestFormatter,
    logger: logging.Logger,
) -> None:
    files, stats = hasher.run(directory, algorithms)
    formatter.render_files(files)
    logger.info("Hashed %s of %s files (%s bytes)", stats.hashed_files, stats.total_files, stats.total_bytes)


if __name__ == "__main__":
    raise SystemExit(main())
