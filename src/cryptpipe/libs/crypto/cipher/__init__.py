"""
AES block primitive and the confidentiality modes built on it.
"""

__all__ = [
    "AES",
    "BaseMode",
    "Direction",
    "MODE_BY_NAME",
    "build_transform",
    "normalize_mode",
]

from . import AES
from ._mode_base import BaseMode, Direction
from .factory import MODE_BY_NAME, build_transform, normalize_mode
