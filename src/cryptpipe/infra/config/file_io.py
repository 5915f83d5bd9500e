from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from cryptpipe.infra.paths import SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ["cryptpipe.toml", "cryptpipe.json"]


def _search_paths() -> Iterator[Path]:
    """Yield the implicit config locations, most specific first."""
    cwd = Path.cwd()
    for name in LOCAL_FILENAMES:
        yield cwd / name
    yield SETTING_PATH


def _find_config_file(config_path: str | Path | None) -> Path:
    """
    Pick the configuration file to read.

    An explicit ``config_path`` must exist; it is never substituted by an
    implicit location. Without one, the first existing file from
    :func:`_search_paths` wins.

    Raises:
        FileNotFoundError: If the explicit path is missing, or no implicit
            location holds a file.
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path.resolve()

    for candidate in _search_paths():
        if candidate.is_file():
            return candidate.resolve()

    raise FileNotFoundError("No valid config file found.")


def _parse_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def _parse_toml(path: Path) -> Any:
    import tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


_PARSERS = {".json": _parse_json, ".toml": _parse_toml}


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Parse ``path`` with the reader registered for its suffix.

    Raises:
        ValueError: For an unknown suffix, unparsable content, or a root
            that is not a table.
    """
    ext = path.suffix.lower()
    parser = _PARSERS.get(ext)
    if parser is None:
        raise ValueError(f"Unsupported config file extension: {ext}")

    data = parser(path)
    if not isinstance(data, dict):
        raise ValueError(
            f"Config root must be a dict, got {type(data).__name__} in {path}"
        )
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration data from a TOML or JSON file.

    Resolution order:
        - Explicit `config_path` (if provided; must exist)
        - `cryptpipe.toml` or `cryptpipe.json` in the working directory
        - `SETTING_PATH` in the user config directory

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If the explicit path is missing, or no implicit
            config file exists.
        ValueError: If the file cannot be parsed or contains invalid structure.
    """
    path = _find_config_file(config_path)
    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)
