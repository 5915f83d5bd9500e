from __future__ import annotations

from Crypto.Cipher import AES as _AES

from cryptpipe.libs.crypto.errors import InvalidKeyOrIV, UnsupportedMode

from ._mode_base import BaseMode, Direction

block_size = 16
key_size = (16, 24, 32)

MODE_ECB = 1  #: Electronic Code Book
MODE_CBC = 2  #: Cipher-Block Chaining
MODE_CFB = 3  #: Cipher FeedBack (full-block segments)
MODE_OFB = 5  #: Output FeedBack
MODE_CTR = 6  #: CounTer Mode


class _AESContext:
    """AES block primitive: one 16-byte block in, one 16-byte block out.

    Backed by pycryptodome's raw ECB cipher, which keeps no state besides the
    expanded key.
    """

    __slots__ = ("_ecb",)

    def __init__(self, key: bytes) -> None:
        """Initialize the AES key schedule.

        Args:
            key: Raw AES key of length 16, 24 or 32 bytes.

        Raises:
            InvalidKeyOrIV: If the key length is invalid.
        """
        if len(key) not in key_size:
            raise InvalidKeyOrIV(f"Invalid AES key size {len(key)}")
        self._ecb = _AES.new(key, _AES.MODE_ECB)

    def encrypt_block(self, plaintext: bytes) -> bytes:
        """Encrypt a single 16-byte block.

        Raises:
            ValueError: If the block size is invalid.
        """
        if len(plaintext) != block_size:
            raise ValueError("Plaintext block must be 16 bytes")
        return self._ecb.encrypt(plaintext)

    def decrypt_block(self, ciphertext: bytes) -> bytes:
        """Decrypt a single 16-byte block.

        Raises:
            ValueError: If the block size is invalid.
        """
        if len(ciphertext) != block_size:
            raise ValueError("Ciphertext block must be 16 bytes")
        return self._ecb.decrypt(ciphertext)


def _check_iv(iv: bytes | bytearray | None) -> bytes:
    if iv is None or len(iv) != block_size:
        raise InvalidKeyOrIV("Invalid IV size")
    return bytes(iv)


def new(
    key: bytes | bytearray,
    mode: int,
    iv: bytes | bytearray | None = None,
    direction: Direction = Direction.ENCRYPT,
) -> BaseMode:
    """Create an AES transform in the requested mode.

    ECB and CBC are assembled here from the single-block primitive. CFB, OFB
    and CTR are pycryptodome's own streaming modes wrapped in
    :class:`~._mode_stream.StreamMode`:

    - CFB uses 128-bit segments, so feedback operates on whole blocks.
    - OFB and CTR generate a keystream; ``direction`` has no effect on them.
    - CTR treats the full 16-byte ``iv`` as the initial counter block and
      increments it as a 128-bit big-endian integer.

    Args:
        key: AES key of length 16, 24 or 32 bytes.
        mode: One of the ``MODE_*`` constants.
        iv: Initialization vector, 16 bytes. Required by every mode except ECB,
            which ignores it.
        direction: Whether the returned transform encrypts or decrypts.

    Returns:
        A mode object implementing :class:`~._mode_base.BaseMode`.

    Raises:
        InvalidKeyOrIV: If the key or IV length is invalid.
        UnsupportedMode: If ``mode`` is not a known constant.
    """
    ctx = _AESContext(bytes(key))

    if mode == MODE_ECB:
        from ._mode_ecb import ECBMode

        return ECBMode(ctx.encrypt_block, ctx.decrypt_block, block_size, direction)

    if mode == MODE_CBC:
        from ._mode_cbc import CBCMode

        return CBCMode(
            ctx.encrypt_block,
            ctx.decrypt_block,
            block_size,
            None if iv is None else bytes(iv),
            direction,
        )

    from ._mode_stream import StreamMode

    if mode == MODE_CFB:
        cfb = _AES.new(
            bytes(key),
            _AES.MODE_CFB,
            iv=_check_iv(iv),
            segment_size=128,
        )
        return StreamMode(cfb, direction)

    if mode == MODE_OFB:
        ofb = _AES.new(bytes(key), _AES.MODE_OFB, iv=_check_iv(iv))
        return StreamMode(ofb, direction, symmetric=True)

    if mode == MODE_CTR:
        ctr = _AES.new(
            bytes(key),
            _AES.MODE_CTR,
            nonce=b"",
            initial_value=_check_iv(iv),
        )
        return StreamMode(ctr, direction, symmetric=True)

    raise UnsupportedMode("Unknown mode")
