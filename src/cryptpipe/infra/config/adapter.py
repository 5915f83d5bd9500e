from __future__ import annotations

from typing import Any

from cryptpipe.schemas import CipherConfig, PipelineConfig
from cryptpipe.schemas.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_INITIAL_VALUE,
    DEFAULT_MODE,
)


class ConfigAdapter:
    """High-level accessor for the loaded configuration mapping.

    Values are read from the ``general`` block and fall back to built-in
    defaults. Command-line options are applied on top by the caller.

    Args:
        config (dict[str, Any]): Loaded configuration mapping, usually
            containing a ``general`` block. An empty mapping yields defaults.

    Attributes:
        _config (dict[str, Any]): Internal stored configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping.

        Returns:
            dict[str, Any]: The stored configuration.
        """
        return self._config

    def get_cipher_config(self) -> CipherConfig:
        """Build a CipherConfig from general settings.

        ``initial_value`` is given as text in the file and encoded as UTF-8.
        The decrypt flag is never taken from configuration.

        Returns:
            CipherConfig: Resolved cipher configuration.

        Raises:
            ValueError: If ``mode`` or ``initial_value`` is not a string.
        """
        cfg = self._gen_cfg()

        mode = cfg.get("mode", DEFAULT_MODE)
        if not isinstance(mode, str):
            raise ValueError(f"mode must be str, got {type(mode).__name__}")

        iv = cfg.get("initial_value")
        if iv is None:
            initial_value = DEFAULT_INITIAL_VALUE
        elif isinstance(iv, str):
            initial_value = iv.encode("utf-8")
        else:
            raise ValueError(f"initial_value must be str, got {type(iv).__name__}")

        return CipherConfig(mode=mode, initial_value=initial_value)

    def get_pipeline_config(self) -> PipelineConfig:
        """Build a PipelineConfig from general settings.

        Returns:
            PipelineConfig: Resolved pipeline configuration.

        Raises:
            ValueError: If ``chunk_size`` is not a positive integer.
        """
        chunk_size = self._gen_cfg().get("chunk_size", DEFAULT_CHUNK_SIZE)
        # bool is an int subclass
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
            raise ValueError("chunk_size must be an integer")
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        return PipelineConfig(chunk_size=chunk_size)

    def get_log_level(self) -> str:
        """Return the configured logging level.

        Returns:
            str: Logging level or ``"WARNING"`` if missing.

        Raises:
            ValueError: If ``debug`` is not a table or ``log_level`` is not
                a string.
        """
        debug_cfg = self._gen_cfg().get("debug", {})
        if not isinstance(debug_cfg, dict):
            raise ValueError(f"debug must be a table, got {type(debug_cfg).__name__}")

        level = debug_cfg.get("log_level")
        if level is None:
            return "WARNING"
        if not isinstance(level, str):
            raise ValueError(f"log_level must be str, got {type(level).__name__}")
        return level or "WARNING"

    def _gen_cfg(self) -> dict[str, Any]:
        """Return general configuration mapping.

        Returns:
            dict[str, Any]: ``general`` config or empty dict.
        """
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}
