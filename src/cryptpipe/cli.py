"""
Command-line entry point: ``cryptpipe [options] [FILE]``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from cryptpipe import __version__
from cryptpipe.infra.config import ConfigAdapter, load_config
from cryptpipe.infra.logger import setup_logging
from cryptpipe.libs.crypto import CipherReader
from cryptpipe.libs.crypto.cipher import MODE_BY_NAME, Direction, build_transform
from cryptpipe.libs.crypto.errors import InvalidKeyOrIV, UnsupportedMode
from cryptpipe.pipeline import PipelineError, open_source, pump

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="cryptpipe",
        description="Encrypt or decrypt a byte stream with AES.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="input file (default: standard input)",
    )
    parser.add_argument("--key", type=os.fsencode, help="What key to use")
    parser.add_argument(
        "--mode",
        help=f"What mode to use: {', '.join(MODE_BY_NAME)} (default: ecb)",
    )
    parser.add_argument(
        "--decrypt",
        action="store_true",
        help="Whether to decrypt stream",
    )
    parser.add_argument(
        "--initial-value",
        type=os.fsencode,
        help="Initial value (default: 0123456789abcdef)",
    )
    parser.add_argument("--config", type=Path, help="configuration file")
    parser.add_argument("--log-level", help="logging level (default: WARNING)")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _load_settings(config_path: Path | None) -> ConfigAdapter:
    try:
        return ConfigAdapter(load_config(config_path))
    except FileNotFoundError:
        if config_path is not None:
            raise
        return ConfigAdapter({})


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args.config)
        cipher_cfg = settings.get_cipher_config()
        pipeline_cfg = settings.get_pipeline_config()
        setup_logging(args.log_level or settings.get_log_level())
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    if len(args.files) > 1:
        print("Too many files specified", file=sys.stderr)
        return 1

    if args.key is None:
        print("No key specified", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    if args.mode is not None:
        cipher_cfg.mode = args.mode
    if args.initial_value is not None:
        cipher_cfg.initial_value = args.initial_value
    cipher_cfg.decrypt = args.decrypt

    try:
        transform = build_transform(
            cipher_cfg.mode,
            args.key,
            iv=cipher_cfg.initial_value,
            direction=Direction.DECRYPT if cipher_cfg.decrypt else Direction.ENCRYPT,
        )
    except UnsupportedMode:
        print("Invalid mode", file=sys.stderr)
        return 1
    except InvalidKeyOrIV as e:
        print(f"Could not create aes instance: {e}", file=sys.stderr)
        return 1

    logger.debug(
        "Transform ready: mode=%s decrypt=%s", cipher_cfg.mode, cipher_cfg.decrypt
    )

    path = args.files[0] if args.files else None
    try:
        with open_source(path) as source:
            reader = CipherReader(source, transform)
            pump(reader, sys.stdout.buffer, pipeline_cfg.chunk_size)
    except PipelineError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot open {path}", file=sys.stderr)
        print(e, file=sys.stderr)
        return 1

    return 0
