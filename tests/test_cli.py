from __future__ import annotations

import json

import pytest

from zijwerkenvooru import cli
from zijwerkenvooru.database import create_storage


@pytest.fixture()
def database_config(tmp_path, raw_tables, taxonomy, party_colors):
    database_url = f"sqlite:///{(tmp_path / 'cli.db').as_posix()}"
    storage = create_storage(database_url)
    for name, rows in raw_tables.items():
        storage.replace_rows(name, rows)
    storage.dispose()
    (tmp_path / "topics.json").write_text(json.dumps(taxonomy), encoding="utf8")
    (tmp_path / "colors.json").write_text(json.dumps(party_colors), encoding="utf8")
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "data": {
                    "source": "database",
                    "directory": str(tmp_path / "parquet"),
                    "output_dir": str(tmp_path / "site"),
                    "topics_path": str(tmp_path / "topics.json"),
                    "party_colors_path": str(tmp_path / "colors.json"),
                },
                "storage": {"database_url": database_url},
            }
        ),
        encoding="utf8",
    )
    return path


def test_build_from_database(database_config, tmp_path):
    assert cli.main(["build", "--config", str(database_config)]) == 0

    parties = json.loads((tmp_path / "site" / "parties.json").read_text(encoding="utf8"))
    assert [party["color"] for party in parties["parties"]] == ["#00aa00", "#0000aa", "gray"]


def test_build_output_override(database_config, tmp_path):
    target = tmp_path / "elsewhere"

    assert cli.main(["build", "--config", str(database_config), "--output", str(target)]) == 0
    assert (target / "lobby.json").exists()


def test_import_without_parquet_files_succeeds(database_config):
    assert cli.main(["import", "--config", str(database_config), "--without-summaries"]) == 0


def test_summarize_requires_api_key(database_config, monkeypatch):
    monkeypatch.delenv("ZWVU_GEMINI_API_KEY", raising=False)

    assert cli.main(["summarize", "--config", str(database_config)]) == 1


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        cli.main(["deploy"])
