"""
Utility modules for the resume parser application.
"""

from .config import Config

__all__ = [
    "Config",
]
