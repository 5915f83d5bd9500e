"""
Name-keyed construction of cipher transforms.
"""

from __future__ import annotations

import logging

from cryptpipe.libs.crypto.errors import UnsupportedMode

from . import AES
from ._mode_base import BaseMode, Direction

logger = logging.getLogger(__name__)

MODE_BY_NAME: dict[str, int] = {
    "ecb": AES.MODE_ECB,
    "cbc": AES.MODE_CBC,
    "cfb": AES.MODE_CFB,
    "ofb": AES.MODE_OFB,
    "ctr": AES.MODE_CTR,
}


def normalize_mode(name: str) -> str:
    """Return the canonical mode key for ``name``.

    Raises:
        UnsupportedMode: If ``name`` is not a known mode.
    """
    key = name.strip().lower()
    if key not in MODE_BY_NAME:
        raise UnsupportedMode(f"Unsupported mode: {name!r}")
    return key


def build_transform(
    mode: str,
    key: bytes,
    *,
    iv: bytes | None = None,
    direction: Direction = Direction.ENCRYPT,
) -> BaseMode:
    """Build a ready-to-use AES transform selected by mode name.

    The mode name is resolved before the key is looked at, so an unknown mode
    is reported even when the key is also unusable.

    Args:
        mode: One of ``ecb``, ``cbc``, ``cfb``, ``ofb``, ``ctr`` (case and
            surrounding whitespace are ignored).
        key: Raw AES key bytes.
        iv: Initialization vector. Ignored by ``ecb``.
        direction: Encrypt or decrypt. Ignored by ``ofb`` and ``ctr``.

    Returns:
        A transform with its chaining or keystream state seeded.

    Raises:
        UnsupportedMode: If ``mode`` is unknown.
        InvalidKeyOrIV: If the key or IV length is invalid.
    """
    name = normalize_mode(mode)
    logger.debug("Building %s transform (direction=%s)", name, direction.value)
    return AES.new(key, MODE_BY_NAME[name], iv=iv, direction=direction)
