"""
Configuration package for shall.
"""

from .settings import AppConfig

__all__ = ["AppConfig"]
