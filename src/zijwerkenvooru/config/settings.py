"""Configuration for site builds, dataset imports and summary generation."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import types
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints


ENV_PREFIX = "ZWVU_"

_DEFAULT_CONFIG_LOCATIONS = (
    Path("zijwerkenvooru.json"),
    Path.home() / ".config" / "zijwerkenvooru" / "config.json",
)


@dataclass(slots=True)
class DataConfig:
    """Where the dataset lives and how derived figures are computed."""

    source: str = "parquet"
    directory: str = "data"
    output_dir: str = "build/data"
    topics_path: Optional[str] = "data/topics.json"
    party_colors_path: Optional[str] = "data/partyColors.json"
    income_year: str = "2023"
    chamber_size: int = 150
    similarity_threshold: float = 0.9
    contributors_per_topic: int = 5
    max_workers: int = 4


@dataclass(slots=True)
class GeminiConfig:
    """Configuration for the Gemini summarisation API."""

    api_key: Optional[str] = None
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.5-flash"
    timeout: float = 60.0
    max_retries: int = 3
    enable_safety_settings: bool = False


@dataclass(slots=True)
class StorageConfig:
    """Configuration for the dataset database."""

    database_url: str = "sqlite:///zijwerkenvooru.db"
    echo_sql: bool = False


@dataclass(slots=True)
class AppConfig:
    data: DataConfig
    gemini: GeminiConfig
    storage: StorageConfig


_SECTIONS: Dict[str, type] = {
    "data": DataConfig,
    "gemini": GeminiConfig,
    "storage": StorageConfig,
}


def _load_from_env(section: str) -> Dict[str, Any]:
    """Collect ``ZWVU_<SECTION>_<FIELD>`` variables for one section."""

    prefix = f"{ENV_PREFIX}{section.upper()}_"
    return {
        key.removeprefix(prefix).lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix)
    }


def _overlay(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(target)
    merged.update({key: value for key, value in updates.items() if value is not None})
    return merged


def _load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a JSON object")
    return data


T = TypeVar("T")

_TRUE = {"true", "1", "yes", "y", "on"}
_FALSE = {"false", "0", "no", "n", "off"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
    elif isinstance(value, (int, float)):
        return bool(value)
    raise ValueError(f"Cannot convert {value!r} to bool")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to int")
    if isinstance(value, int):
        return value
    if isinstance(value, (float, str)):
        return int(float(value))
    raise ValueError(f"Cannot convert {value!r} to int")


def _to_float(value: Any) -> float:
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return float(value)
    raise ValueError(f"Cannot convert {value!r} to float")


_COERCERS: Dict[Any, Callable[[Any], Any]] = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    str: str,
}


def _coerce_value(value: Any, annotation: Any) -> Any:
    """Convert ``value`` (often an environment string) to ``annotation``."""

    if value is None:
        return None

    if get_origin(annotation) in (Union, types.UnionType):
        candidates = [arg for arg in get_args(annotation) if arg is not type(None)]  # noqa: E721
        for candidate in candidates:
            try:
                return _coerce_value(value, candidate)
            except (TypeError, ValueError):
                continue
        raise ValueError(f"Cannot convert {value!r} to {annotation}")

    coerce = _COERCERS.get(get_origin(annotation) or annotation)
    return coerce(value) if coerce else value


def _section_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    hints = get_type_hints(cls)
    kwargs: Dict[str, Any] = {}
    for item in fields(cls):
        if item.name not in data:
            continue
        try:
            kwargs[item.name] = _coerce_value(data[item.name], hints.get(item.name, item.type))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {cls.__name__}.{item.name}: {data[item.name]!r}") from exc
    return cls(**kwargs)


def resolve_config_path(explicit_path: Optional[Path] = None) -> Path:
    """Return the configuration file to read or write.

    An explicit path wins. Otherwise the first existing default location is
    used, falling back to ``~/.config/zijwerkenvooru/config.json``.
    """

    if explicit_path:
        return explicit_path
    for candidate in _DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate
    return _DEFAULT_CONFIG_LOCATIONS[-1]


def load_config(explicit_path: Optional[Path] = None) -> AppConfig:
    """Build the configuration from defaults, a JSON file and the environment.

    Later sources win. Environment variables use ``ZWVU_SECTION_FIELD``, for
    example ``ZWVU_DATA_DIRECTORY`` or ``ZWVU_GEMINI_API_KEY``.
    """

    if explicit_path:
        file_data = _load_config_file(explicit_path)
    else:
        file_data = {}
        for candidate in _DEFAULT_CONFIG_LOCATIONS:
            file_data = _load_config_file(candidate)
            if file_data:
                break

    sections: Dict[str, Any] = {}
    for name, cls in _SECTIONS.items():
        data = _overlay(asdict(cls()), file_data.get(name) or {})
        data = _overlay(data, _load_from_env(name))
        sections[name] = _section_from_dict(cls, data)
    return AppConfig(**sections)


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """Write ``config`` as JSON and return the path written to."""

    target = resolve_config_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    data = {name: asdict(getattr(config, name)) for name in _SECTIONS}
    with target.open("w", encoding="utf8") as fh:
        json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
        fh.write("\n")
    return target


__all__ = [
    "AppConfig",
    "DataConfig",
    "ENV_PREFIX",
    "GeminiConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
