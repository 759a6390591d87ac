"""
Rendering of digest results for the terminal.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from rich.console import Console
from rich.text import Text

from hashing.engine import FileDigests
from hashing.pipeline import DigestResult

MIN_LABEL_WIDTH = 8
LABEL_STYLE = "bold blue"
DIGEST_STYLE = "cyan"
FILE_STYLE = "cyan"
ERROR_STYLE = "bold red"


def label_width(labels: Iterable[str]) -> int:
    """Return the padded label column width for a set of labels."""
    longest = max((len(label) for label in labels), default=0)
    return max(MIN_LABEL_WIDTH, longest + 2)


class DigestFormatter:
    """Format digest lines, with or without terminal colors."""

    def __init__(self, color: bool = True, console: Optional[Console] = None) -> None:
        self.color = color
        self.console = console or make_console(color)

    def format_line(self, result: DigestResult, width: int, file_name: Optional[str] = None) -> Text:
        """Return ``<LABEL><padding>: <hex>`` with an optional trailing file name."""
        label_style = LABEL_STYLE if self.color else ""
        digest_style = DIGEST_STYLE if self.color else ""
        text = Text.assemble(
            (result.label.ljust(width), label_style),
            ": ",
            (result.hexdigest, digest_style),
        )
        if file_name is not None:
            text.append("  ")
            text.append(file_name, style=FILE_STYLE if self.color else "")
        return text

    def render(self, results: Sequence[DigestResult]) -> None:
        """Print one line per digest."""
        width = label_width(result.label for result in results)
        for result in results:
            self.console.print(self.format_line(result, width))

    def render_files(self, files: Sequence[FileDigests]) -> None:
        """Print one line per digest per file, file by file."""
        width = label_width(result.label for item in files for result in item.results)
        for item in files:
            for result in item.results:
                self.console.print(self.format_line(result, width, file_name=item.name))


def make_console(color: bool, stderr: bool = False) -> Console:
    """Create a console; ``color=False`` disables all escape codes."""
    return Console(
        stderr=stderr,
        color_system="auto" if color else None,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


def print_error(console: Console, message: str, color: bool = True) -> None:
    """Print an ``Error: ...`` line, red when color is enabled."""
    text = Text.assemble(("Error", ERROR_STYLE if color else ""), ": ", message)
    console.print(text)
