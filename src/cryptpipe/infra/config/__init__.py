"""
Unified interface for loading and adapting configuration files.
"""

__all__ = [
    "load_config",
    "ConfigAdapter",
]

from .adapter import ConfigAdapter
from .file_io import load_config
