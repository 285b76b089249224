"""
tetherio Utils Module

- logger: Logging setup and configuration
- merge: Deep merge for dictionaries

Usage:
    from tetherio.utils import setup_logger, deep_merge
"""

from .logger import setup_logger, parse_module_levels
from .merge import deep_merge

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'deep_merge',
]
