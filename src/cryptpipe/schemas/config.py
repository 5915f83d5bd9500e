"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass

DEFAULT_MODE = "ecb"
DEFAULT_INITIAL_VALUE = b"0123456789abcdef"
DEFAULT_CHUNK_SIZE = 256


@dataclass
class CipherConfig:
    """Configuration for building the cipher transform.

    Attributes:
        mode: Mode name (``ecb``, ``cbc``, ``cfb``, ``ofb`` or ``ctr``).
        initial_value: IV bytes handed to every mode that uses one.
        decrypt: Whether to decrypt instead of encrypt.
    """

    mode: str = DEFAULT_MODE
    initial_value: bytes = DEFAULT_INITIAL_VALUE
    decrypt: bool = False


@dataclass
class PipelineConfig:
    """Configuration for the read/write loop.

    Attributes:
        chunk_size: Bytes read from the transformed stream per iteration.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
