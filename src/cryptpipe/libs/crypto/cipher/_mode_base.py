from __future__ import annotations

import abc
import enum
from collections.abc import Callable

from cryptpipe.libs.crypto.errors import BufferTooSmall, InvalidLength

BlockCipherFunc = Callable[[bytes], bytes]


class Direction(enum.Enum):
    """Direction a transform runs in. Fixed when the transform is built."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class BaseMode(abc.ABC):
    """Base class for confidentiality modes.

    A mode instance turns whole units of ``block_size`` bytes from ``src``
    into the same number of bytes in ``dst``. The direction is chosen at
    construction, so callers such as :class:`~cryptpipe.libs.crypto.reader.CipherReader`
    never need to know which mode they hold.

    ``dst`` and ``src`` may refer to the same memory. Every implementation must
    produce the same result for in-place calls as for disjoint buffers.
    """

    def __init__(self, block_size: int, direction: Direction) -> None:
        """Initialize a mode instance.

        Args:
            block_size: Unit size in bytes. 16 for AES block modes, 1 for
                modes that behave as byte streams.
            direction: Whether this instance encrypts or decrypts.
        """
        self.block_size = block_size
        self.direction = direction

    @abc.abstractmethod
    def crypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        """Transform ``src`` into ``dst``.

        Args:
            dst: Writable destination. At least ``len(src)`` bytes long.
            src: Input bytes. Length must be a multiple of ``block_size``.

        Raises:
            InvalidLength: If ``len(src)`` is not a multiple of ``block_size``.
            BufferTooSmall: If ``dst`` is shorter than ``src``.
        """
        ...

    def crypt(self, data: bytes) -> bytes:
        """Transform ``data`` and return the result as new bytes."""
        out = bytearray(len(data))
        self.crypt_blocks(out, data)
        return bytes(out)

    def _check_buffers(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        """Validate the buffer contract before any state is touched."""
        if len(src) % self.block_size != 0:
            raise InvalidLength("Data length not a multiple of block size")
        if len(dst) < len(src):
            raise BufferTooSmall("Output buffer smaller than input")
