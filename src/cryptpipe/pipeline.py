"""
Source handling and the read-transform-write loop.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from cryptpipe.schemas.config import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Reading from the source or writing to the sink failed."""


@contextlib.contextmanager
def open_source(path: str | Path | None) -> Iterator[BinaryIO]:
    """Yield the binary input stream for ``path``.

    ``None`` selects standard input, which is left open afterwards. A file is
    closed when the block exits, whether it exits normally or with an error.

    Raises:
        OSError: If the file cannot be opened.
    """
    if path is None:
        yield sys.stdin.buffer
        return

    with Path(path).open("rb") as f:
        logger.debug("Reading input from %s", path)
        yield f


def pump(
    reader: BinaryIO,
    sink: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Copy ``reader`` into ``sink`` in ``chunk_size`` pieces until exhausted.

    Each chunk is flushed as soon as it is written. Nothing is rolled back on
    failure: bytes already written stay on the sink.

    Args:
        reader: Stream to pull transformed bytes from.
        sink: Stream to write to.
        chunk_size: Maximum bytes per read.

    Returns:
        Total number of bytes written.

    Raises:
        PipelineError: If a read or a write fails.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    total = 0
    while True:
        try:
            chunk = reader.read(chunk_size)
        except OSError as e:
            raise PipelineError(f"read error {e}") from e

        if not chunk:
            break

        try:
            sink.write(chunk)
            sink.flush()
        except OSError as e:
            raise PipelineError(f"write error {e}") from e
        total += len(chunk)

    logger.debug("Wrote %d bytes", total)
    return total
