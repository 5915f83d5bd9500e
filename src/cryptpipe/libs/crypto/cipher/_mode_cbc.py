from __future__ import annotations

from cryptpipe.libs.crypto.errors import InvalidKeyOrIV

from ._mode_base import BaseMode, BlockCipherFunc, Direction


class CBCMode(BaseMode):
    """Cipher Block Chaining (CBC) mode built from a single-block primitive.

    CBC is a stateful block-cipher mode: each encrypted block depends on the
    previous ciphertext block. The chaining register is seeded with the IV and
    advanced once per block, across calls, for the lifetime of the instance.

    Encryption computes ``c_i = E(c_{i-1} ^ p_i)`` and decryption computes
    ``p_i = D(c_i) ^ c_{i-1}``, with ``c_0 = IV``. In both directions the
    register holds the last *ciphertext* block seen.
    """

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        iv: bytes | None,
        direction: Direction = Direction.ENCRYPT,
    ) -> None:
        """Initialize a CBC mode instance.

        Args:
            encrypt_block: Block encryption function.
            decrypt_block: Block decryption function.
            block_size: Block size in bytes. See :class:`BaseMode`.
            iv: Initialization vector. Must be exactly ``block_size`` bytes.
            direction: See :class:`BaseMode`.

        Raises:
            InvalidKeyOrIV: If ``iv`` is missing or does not match
                ``block_size``.
        """
        super().__init__(block_size, direction)
        if iv is None or len(iv) != block_size:
            raise InvalidKeyOrIV("Invalid IV size")

        self.encrypt_block = encrypt_block
        self.decrypt_block = decrypt_block
        self._blk = bytearray(iv)
        self._work = bytearray(block_size)

    @property
    def iv(self) -> bytes:
        """Current chaining value (the last ciphertext block, or the IV)."""
        return bytes(self._blk)

    def crypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        """Encrypt or decrypt whole blocks in CBC mode.

        Both buffer checks run before the chaining register is touched, so a
        rejected call leaves the stream state exactly as it was.

        Args:
            dst: Writable destination, at least ``len(src)`` bytes. May be the
                same memory as ``src``.
            src: Input bytes. Length must be a multiple of ``block_size``.

        Raises:
            InvalidLength: If ``len(src)`` is not a multiple of ``block_size``.
            BufferTooSmall: If ``dst`` is shorter than ``src``.
        """
        self._check_buffers(dst, src)

        if self.direction is Direction.DECRYPT:
            self._decrypt_blocks(dst, src)
        else:
            self._encrypt_blocks(dst, src)

    def _encrypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        bs = self.block_size
        blk, work = self._blk, self._work

        for off in range(0, len(src), bs):
            for i in range(bs):
                work[i] = blk[i] ^ src[off + i]
            blk[:] = self.encrypt_block(bytes(work))
            dst[off : off + bs] = blk

    def _decrypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        bs = self.block_size
        blk, work = self._blk, self._work

        for off in range(0, len(src), bs):
            work[:] = self.decrypt_block(bytes(src[off : off + bs]))
            # dst may alias src: read each ciphertext byte before its slot is
            # overwritten, and chain off the saved byte.
            for i in range(bs):
                tmp = src[off + i]
                dst[off + i] = blk[i] ^ work[i]
                blk[i] = tmp
