import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the real user config and working directory."""
    monkeypatch.setattr(
        "cryptpipe.infra.config.file_io.SETTING_PATH",
        tmp_path / "user-config" / "settings.toml",
    )
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler changes made by ``setup_logging`` during a test."""
    logger = logging.getLogger("cryptpipe")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
