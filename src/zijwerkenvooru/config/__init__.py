"""Configuration helpers for zijwerkenvooru."""
from __future__ import annotations

from .settings import (
    AppConfig,
    DataConfig,
    GeminiConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "DataConfig",
    "GeminiConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
