"""
Cipher modes, padding and the streaming reader that applies them.
"""

__all__ = [
    "CipherReader",
    "zero_pad",
]

from .padding import zero_pad
from .reader import CipherReader
