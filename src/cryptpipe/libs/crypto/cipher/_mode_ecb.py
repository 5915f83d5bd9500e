from __future__ import annotations

from ._mode_base import BaseMode, BlockCipherFunc, Direction


class ECBMode(BaseMode):
    """Electronic Code Book (ECB) mode.

    ECB is stateless: each block is processed independently without an IV or
    chaining, so identical plaintext blocks produce identical ciphertext
    blocks. This mode provides no semantic security.
    """

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        direction: Direction = Direction.ENCRYPT,
    ) -> None:
        """Initialize an ECB mode instance.

        Args:
            encrypt_block: Callable that encrypts a single block.
            decrypt_block: Callable that decrypts a single block.
            block_size: Block size in bytes. See :class:`BaseMode`.
            direction: See :class:`BaseMode`.
        """
        super().__init__(block_size, direction)
        if direction is Direction.DECRYPT:
            self._crypt_block = decrypt_block
        else:
            self._crypt_block = encrypt_block

    def crypt_blocks(
        self, dst: bytearray | memoryview, src: bytes | memoryview
    ) -> None:
        """Encrypt or decrypt whole blocks in ECB mode.

        Each block is copied out of ``src`` before the result is written, so
        in-place operation is safe.
        """
        self._check_buffers(dst, src)

        bs = self.block_size
        for i in range(0, len(src), bs):
            dst[i : i + bs] = self._crypt_block(bytes(src[i : i + bs]))
