class CipherError(Exception):
    """Base class for cipher construction and transform failures."""


class InvalidKeyOrIV(CipherError, ValueError):
    """The key or initialization vector has an unusable length."""


class UnsupportedMode(CipherError, ValueError):
    """The requested mode name is not one of the known modes."""


class ContractViolation(CipherError, ValueError):
    """A transform was called with buffers that break its contract.

    These indicate a programming error at the caller, not an environmental
    failure, and are never retried.
    """


class InvalidLength(ContractViolation):
    """Input length is not a multiple of the block size."""


class BufferTooSmall(ContractViolation):
    """Destination buffer is shorter than the source."""
