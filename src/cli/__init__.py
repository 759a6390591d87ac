"""
Command-line interface for shall.
"""

from .main import main

__all__ = ["main"]
