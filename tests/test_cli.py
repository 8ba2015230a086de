import importlib
from types import SimpleNamespace

import pytest


@pytest.mark.parametrize("argv", [["--version"], ["-h"], []])
def test_main_basic_cli(argv, capsys):
    cli = importlib.import_module("cli")
    exit_code = cli.main(argv)

    assert exit_code == 0
    out, err = capsys.readouterr()
    assert out.strip() != ""
    assert err == ""


def test_version_comes_from_pyproject(tmp_path, capsys):
    cli = importlib.import_module("cli")

    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "x"\nversion = "9.8.7"\n', encoding="utf-8")
    assert cli._load_project_version(pyproject) == "9.8.7"

    assert cli._load_project_version(tmp_path / "missing.toml") == "0.0.0"

    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "1.0.0"


def _fake_main(monkeypatch, result):
    fake_main = SimpleNamespace(validate_environment=lambda: result)
    monkeypatch.setitem(importlib.import_module("sys").modules, "main", fake_main)


def test_doctor_summarizes_checks(capsys, monkeypatch):
    cli = importlib.import_module("cli")
    _fake_main(
        monkeypatch,
        {
            "status": "warning",
            "checks": [
                {"name": "github_token", "level": "ok", "message": "Token configured via GITHUB_TOKEN"},
                {"name": "github_api_base", "level": "warning", "message": "not https"},
            ],
        },
    )

    exit_code = cli.main(["doctor"])

    assert exit_code == 0
    out, err = capsys.readouterr()
    assert "Status: warning" in out
    assert "Checks: ok=1, warning=1, error=0" in out
    assert "- [warning] github_api_base: not https" in out
    assert err == ""


def test_doctor_fails_on_error_status(capsys, monkeypatch):
    cli = importlib.import_module("cli")
    _fake_main(
        monkeypatch,
        {
            "status": "error",
            "checks": [{"name": "github_token", "level": "error", "message": "missing"}],
        },
    )

    assert cli.main(["doctor"]) == 1
    assert "Checks: ok=0, warning=0, error=1" in capsys.readouterr().out


def test_serve_runs_selected_transport(monkeypatch):
    cli = importlib.import_module("cli")
    calls = []
    fake_main = SimpleNamespace(mcp=SimpleNamespace(run=lambda transport: calls.append(transport)))
    monkeypatch.setitem(importlib.import_module("sys").modules, "main", fake_main)

    assert cli.main(["serve", "--transport", "sse"]) == 0
    assert cli.main(["serve"]) == 0
    assert calls == ["sse", "stdio"]


def test_serve_rejects_unknown_transport(capsys):
    cli = importlib.import_module("cli")
    assert cli.main(["serve", "--transport", "carrier-pigeon"]) == 2
    assert "invalid choice" in capsys.readouterr().err
