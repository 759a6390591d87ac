"""
Terminal output for digest results.
"""

from .formatter import DigestFormatter, label_width, make_console, print_error

__all__ = ["DigestFormatter", "label_width", "make_console", "print_error"]
