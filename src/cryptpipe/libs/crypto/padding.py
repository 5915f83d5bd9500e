from __future__ import annotations


def zero_pad(data: bytes, block_size: int) -> bytes:
    """Extend ``data`` with zero bytes up to a multiple of ``block_size``.

    Zero padding is not self-describing: block-aligned input (including empty
    input) is returned unchanged, and there is no matching unpad step.

    Args:
        data: Raw input bytes.
        block_size: Block size in bytes. Must be in the range [1, 255].

    Returns:
        ``data`` followed by ``0..block_size-1`` zero bytes.

    Raises:
        ValueError: If ``block_size`` is out of range.
    """
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")

    remainder = len(data) % block_size
    if remainder == 0:
        return bytes(data)
    return bytes(data) + b"\x00" * (block_size - remainder)
