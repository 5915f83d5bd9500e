from __future__ import annotations

from typing import Any

from ._mode_base import BaseMode, Direction


class StreamMode(BaseMode):
    """Adapter for keystream modes (CFB, OFB, CTR) supplied by pycryptodome.

    The wrapped cipher object keeps its own feedback or counter state, so
    calls may be split at any byte boundary. The unit size is 1: these modes
    never need padding.
    """

    def __init__(
        self,
        cipher: Any,
        direction: Direction = Direction.ENCRYPT,
        symmetric: bool = False,
    ) -> None:
        """Wrap a pycryptodome cipher object in a streaming mode.

        ``direction`` is recorded as requested. For symmetric keystream
        modes (OFB, CTR) the same keystream XOR serves both directions, so
        ``cipher.encrypt`` is used even when ``direction`` is ``DECRYPT``.

        Args:
            cipher: A pycryptodome cipher object in a streaming mode.
            direction: ``DECRYPT`` selects ``cipher.decrypt`` unless
                ``symmetric`` is set.
            symmetric: The mode applies the same transform both ways.
        """
        super().__init__(1, direction)
        self._cipher = cipher
        if direction is Direction.DECRYPT and not symmetric:
            self._crypt = cipher.decrypt
        else:
            self._crypt = cipher.encrypt

    def crypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        """XOR ``src`` with the keystream into ``dst``."""
        self._check_buffers(dst, src)

        n = len(src)
        if n == 0:
            return
        out = dst if len(dst) == n else memoryview(dst)[:n]
        # src and dst may overlap
        self._crypt(bytes(src), output=out)
