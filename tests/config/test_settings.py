import json

import pytest

import zijwerkenvooru.config.settings as config_settings
from zijwerkenvooru.config import (
    AppConfig,
    DataConfig,
    GeminiConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_locations(tmp_path, monkeypatch):
    locations = (tmp_path / "zijwerkenvooru.json", tmp_path / "config" / "config.json")
    monkeypatch.setattr(config_settings, "_DEFAULT_CONFIG_LOCATIONS", locations)
    return locations


def test_defaults_without_file_or_environment():
    config = load_config()

    assert config.data.source == "parquet"
    assert config.data.income_year == "2023"
    assert config.data.similarity_threshold == pytest.approx(0.9)
    assert config.gemini.api_key is None
    assert config.storage.echo_sql is False


def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("ZWVU_DATA_CHAMBER_SIZE", "149")
    monkeypatch.setenv("ZWVU_DATA_SIMILARITY_THRESHOLD", "0.75")
    monkeypatch.setenv("ZWVU_DATA_INCOME_YEAR", "2022")
    monkeypatch.setenv("ZWVU_GEMINI_MAX_RETRIES", "4")
    monkeypatch.setenv("ZWVU_GEMINI_TIMEOUT", "15.5")
    monkeypatch.setenv("ZWVU_STORAGE_ECHO_SQL", "true")
    monkeypatch.setenv("ZWVU_GEMINI_ENABLE_SAFETY_SETTINGS", "false")

    config = load_config()

    assert config.data.chamber_size == 149 and isinstance(config.data.chamber_size, int)
    assert config.data.similarity_threshold == pytest.approx(0.75)
    assert config.data.income_year == "2022"
    assert config.gemini.max_retries == 4 and isinstance(config.gemini.max_retries, int)
    assert config.gemini.timeout == pytest.approx(15.5)
    assert config.storage.echo_sql is True
    assert config.gemini.enable_safety_settings is False


def test_invalid_boolean_environment_value_raises(monkeypatch):
    monkeypatch.setenv("ZWVU_STORAGE_ECHO_SQL", "definitely")

    with pytest.raises(ValueError):
        load_config()


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "explicit.json"
    path.write_text(
        json.dumps({"data": {"source": "database", "directory": "from-file"}, "gemini": {"model": "file-model"}}),
        encoding="utf8",
    )
    monkeypatch.setenv("ZWVU_DATA_DIRECTORY", "from-env")

    config = load_config(path)

    assert config.data.source == "database"
    assert config.data.directory == "from-env"
    assert config.gemini.model == "file-model"


def test_file_must_hold_an_object(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2]", encoding="utf8")

    with pytest.raises(ValueError):
        load_config(path)


def test_resolve_config_path_prefers_existing_file(isolated_locations):
    first, second = isolated_locations

    assert resolve_config_path(None) == second

    first.write_text("{}", encoding="utf8")
    assert resolve_config_path(None) == first
    assert resolve_config_path(second) == second


def test_save_config_writes_json(isolated_locations):
    first, _ = isolated_locations
    config = AppConfig(
        data=DataConfig(directory="dataset", income_year="2024"),
        gemini=GeminiConfig(api_key="ABC123", model="gemini-demo"),
        storage=StorageConfig(database_url="sqlite:///demo.db", echo_sql=True),
    )
    first.write_text("{}", encoding="utf8")

    saved_path = save_config(config)

    assert saved_path == first
    data = json.loads(first.read_text(encoding="utf8"))
    assert data["data"]["directory"] == "dataset"
    assert data["data"]["income_year"] == "2024"
    assert data["gemini"]["api_key"] == "ABC123"
    assert data["storage"]["echo_sql"] is True
    assert load_config().gemini.model == "gemini-demo"
