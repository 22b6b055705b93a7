"""Test CLI functionality."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from hoteldesk.cli import cli


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # keep log lines out of the captured command output
    monkeypatch.setattr("hoteldesk.cli.setup_log", lambda *args, **kwargs: None)
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
database_path = "{tmp_path / 'hoteldesk.db'}"
log_file = "{tmp_path / 'logs' / 'hoteldesk.log'}"

[web]
port = 8123
""",
        encoding="utf-8",
    )
    return path


def test_init_db_creates_database(config_file, tmp_path):
    result = CliRunner().invoke(cli, ["-c", str(config_file), "init-db"], obj={})

    assert result.exit_code == 0, result.output
    assert (tmp_path / "hoteldesk.db").exists()


def test_show_config_prints_merged_config(config_file):
    from hoteldesk import db
    from hoteldesk.store import ModuleStore

    runner = CliRunner()
    runner.invoke(cli, ["-c", str(config_file), "init-db"], obj={})

    db.init_db(str(config_file.parent / "hoteldesk.db"))
    store = ModuleStore()
    module = store.create_module("RECEPTION", "Réception")
    sous_module = store.create_sous_module(module.id, "GUESTS", "Clients")
    event = store.create_event(
        sous_module.id, "E", "E", component_type="table", config={"actions": {"export": False}}
    )
    db.close_db()

    result = runner.invoke(cli, ["-c", str(config_file), "show-config", str(event.id)], obj={})

    assert result.exit_code == 0, result.output
    merged = json.loads(result.output)
    assert merged["actions"]["export"] is False
    assert merged["pageSize"] == 10


def test_show_config_unknown_event(config_file):
    result = CliRunner().invoke(cli, ["-c", str(config_file), "show-config", "42"], obj={})

    assert result.exit_code != 0
    assert "Event not found: 42" in result.output


def test_check_config_reports_invalid_defaults(config_file, tmp_path):
    stored = tmp_path / "form.json"
    stored.write_text(
        json.dumps({"fields": [{"key": "code", "required": True, "minLength": 3}]}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        cli, ["-c", str(config_file), "check-config", str(stored), "--type", "form"], obj={}
    )

    assert result.exit_code == 0
    assert '"pageSize": 10' in result.output
    assert "warning: default for 'code' is invalid" in result.output


def test_check_config_rejects_bad_json(config_file, tmp_path):
    stored = tmp_path / "broken.json"
    stored.write_text("{not json", encoding="utf-8")

    result = CliRunner().invoke(
        cli, ["-c", str(config_file), "check-config", str(stored), "--type", "table"], obj={}
    )

    assert result.exit_code != 0
    assert "Invalid JSON" in result.output


def test_serve_uses_config_port(config_file):
    with patch("uvicorn.run") as run:
        result = CliRunner().invoke(cli, ["-c", str(config_file), "serve"], obj={})

    assert result.exit_code == 0, result.output
    kwargs = run.call_args.kwargs
    assert kwargs["port"] == 8123
    assert kwargs["factory"] is True
    assert run.call_args.args[0] == "hoteldesk.api:create_app"


def test_invalid_config_file_is_reported(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.toml"
    path.write_text("[web]\nport = 0\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["-c", str(path), "init-db"], obj={})

    assert result.exit_code != 0
    assert "web -> port" in result.output
