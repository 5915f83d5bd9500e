from __future__ import annotations

import io
import logging
from collections.abc import Callable
from typing import BinaryIO

from .cipher import BaseMode
from .padding import zero_pad

logger = logging.getLogger(__name__)

PaddingFunc = Callable[[bytes, int], bytes]


class CipherReader(io.RawIOBase):
    """Readable byte stream that applies a cipher mode to another stream.

    Whole units of ``mode.block_size`` bytes are transformed in place as soon
    as they are available; a trailing partial unit is held back until more
    input arrives. At end of input the held-back bytes are passed through
    ``padding`` first.

    Padding is applied the same way in both directions and is never removed,
    so decrypting zero-padded data yields the trailing zero bytes as well.

    The source stream is not closed by this reader.
    """

    def __init__(
        self,
        source: BinaryIO,
        mode: BaseMode,
        padding: PaddingFunc | None = zero_pad,
    ) -> None:
        """Wrap ``source`` so reads return transformed bytes.

        Args:
            source: Binary stream to read input from.
            mode: Transform applied to the input.
            padding: Callable extending the final partial block to a multiple
                of the block size. ``None`` rejects a trailing partial block.
        """
        super().__init__()
        self._source = source
        self._mode = mode
        self._padding = padding
        self._pending = bytearray()
        self._out = bytearray()
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, b: bytearray | memoryview) -> int:  # type: ignore[override]
        """Fill ``b`` with transformed bytes.

        Returns:
            The number of bytes written into ``b``; ``0`` only once the source
            is exhausted and every transformed byte has been delivered.

        Raises:
            ValueError: If the input ends mid-block and no padding is set.
            OSError: Propagated from the source stream.
        """
        want = len(b)
        if want == 0:
            return 0

        bs = self._mode.block_size
        while not self._out and not self._eof:
            chunk = self._source.read(max(want, bs))
            if not chunk:
                self._eof = True
                self._finish()
                break

            self._pending += chunk
            aligned = len(self._pending) - len(self._pending) % bs
            if aligned:
                self._transform(self._pending[:aligned])
                del self._pending[:aligned]

        n = min(want, len(self._out))
        b[:n] = self._out[:n]
        del self._out[:n]
        return n

    def _finish(self) -> None:
        """Flush held-back input at end of stream."""
        if not self._pending:
            return

        if self._padding is None:
            raise ValueError("Input ended inside a block and no padding is set")

        bs = self._mode.block_size
        logger.debug("Padding final block: %d -> %d bytes", len(self._pending), bs)
        self._transform(bytearray(self._padding(bytes(self._pending), bs)))
        self._pending.clear()

    def _transform(self, buf: bytearray) -> None:
        view = memoryview(buf)
        self._mode.crypt_blocks(view, view)
        view.release()
        self._out += buf
