"""Env var config loading with pydantic-settings."""

from __future__ import annotations

import signal
from pathlib import Path

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()

DEFAULT_CATALOG_PATH = Path(__file__).parent / "directives.yaml"


class BuilderSettings(BaseSettings):
    """CSP builder configuration, overridden by CSP_BUILDER_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True
    catalog_file: str = str(DEFAULT_CATALOG_PATH)

    # HTTP API
    listen_host: str = "127.0.0.1"
    listen_port: int = 8080

    # Longest header value accepted by the API (bytes of text)
    max_header_length: int = 16 * 1024


_settings: BuilderSettings | None = None


def get_settings() -> BuilderSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> BuilderSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = BuilderSettings()
    logger.info("config_loaded", catalog_file=_settings.catalog_file, port=_settings.listen_port)
    return _settings


def register_reload_handler() -> None:
    """Register SIGHUP handler to reload settings and the directive catalog."""
    import threading

    if threading.current_thread() is not threading.main_thread():
        logger.debug("skipping_sighup_handler", reason="not main thread")
        return

    def _reload(signum, frame):
        from csp_builder.core.catalog import reset_catalog_cache

        logger.info("config_reload_triggered")
        load_settings()
        reset_catalog_cache()

    try:
        signal.signal(signal.SIGHUP, _reload)
    except (ValueError, AttributeError):
        logger.debug("skipping_sighup_handler", reason="signal not supported")
