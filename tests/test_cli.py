"""
Tests for the morph_cli command-line driver.
"""

import json
import os
import sys

import pytest


def _ensure_scripts_on_path():
    repo_root = os.path.dirname(os.path.dirname(__file__))
    scripts_dir = os.path.join(repo_root, "scripts")
    if scripts_dir not in sys.path:
        sys.path.insert(0, scripts_dir)


@pytest.fixture
def cli():
    _ensure_scripts_on_path()
    import morph_cli  # Import added to path by _ensure_scripts_on_path()

    return morph_cli


def test_version(cli, capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "0.1.0"


def test_list_layouts(cli, capsys):
    assert cli.main(["--list-layouts"]) == 0
    assert json.loads(capsys.readouterr().out) == ["table", "sphere", "helix", "grid"]


def test_list_tables_includes_bundled_table(cli, capsys):
    assert cli.main(["--list-tables"]) == 0
    tables = json.loads(capsys.readouterr().out)
    assert any(t.endswith("periodic_table.yaml") for t in tables)


def test_dry_run_summarizes_layouts(cli, capsys):
    assert cli.main(["--dry-run"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["nodes"] == 10
    assert set(out["layouts"]) == {"table", "sphere", "helix", "grid"}
    assert out["layouts"]["grid"][1]["position"] == [-400.0, 800.0, -2000.0]


def test_run_sequence(cli, capsys):
    code = cli.main(["--sequence", "sphere,grid", "--duration", "100", "--seed", "3", "--fps", "50"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    modes = [t["mode"] for t in out["transitions"]]
    assert modes == ["sphere", "grid"]
    for t in out["transitions"]:
        assert t["completed"]
        assert t["max_position_error"] == 0.0
        assert t["elapsed_ms"] >= 200.0 - 1e-6
    assert len(out["final"]["nodes"]) == 10


def test_out_file(cli, tmp_path, capsys):
    out_path = str(tmp_path / "result.json")
    table = os.path.join(os.path.dirname(os.path.dirname(__file__)), "scripts", "periodic_table.yaml")
    assert cli.main([table, "--sequence", "helix", "--duration", "50", "--coalesce-renders", "--out", out_path]) == 0
    assert capsys.readouterr().out == ""
    with open(out_path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["transitions"][0]["mode"] == "helix"


def test_unknown_layout_is_an_error(cli, capsys):
    assert cli.main(["--sequence", "torus"]) == 2
    assert "Unknown layout mode" in capsys.readouterr().err


def test_bad_table_is_an_error(cli, tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("nodes:\n  - {symbol: A, column: 1}\n", encoding="utf-8")
    assert cli.main([str(bad), "--dry-run"]) == 2
    assert "missing required attribute 'row'" in capsys.readouterr().err


def test_bad_fps(cli, capsys):
    assert cli.main(["--fps", "0"]) == 2


def test_long_duration_runs_to_completion(cli, capsys):
    code = cli.main(["--sequence", "grid", "--duration", "40000", "--fps", "10", "--seed", "1"])
    assert code == 0
    result = json.loads(capsys.readouterr().out)
    (entry,) = result["transitions"]
    assert entry["completed"] is True
    assert entry["elapsed_ms"] >= 80000.0 - 1e-6
    assert entry["max_position_error"] == 0.0


def test_stalled_transition_is_an_error(cli, monkeypatch, capsys):
    def stalled(self, frame_ms=None, max_ms=None):
        raise RuntimeError("Transition still running after 10 ms")

    monkeypatch.setattr(cli.AnimationClock, "run_until_idle", stalled)
    assert cli.main(["--sequence", "grid", "--duration", "10"]) == 2
    assert "error: Transition still running" in capsys.readouterr().err
