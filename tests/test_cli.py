"""Tests für die CLI (click.testing.CliRunner)."""

import json

import pytest
from click.testing import CliRunner

from main import cli
from models import Dataset


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def paths(tmp_path):
    return ["--config", str(tmp_path / "jadwal.yaml"), "--data", str(tmp_path / "ds.json")]


def _run(runner, paths, *args):
    return runner.invoke(cli, [*paths, *args])


def _add(runner, paths, id, room="R1", klass="PDB01", *extra):
    return _run(
        runner, paths, "add", "--id", id, "--course", "mk-1", "--room", room,
        "--class", klass, "--day", "Senin", "--time", "07:00 - 08:40", *extra,
    )


class TestCli:
    def test_config_init_and_show(self, runner, paths, tmp_path):
        result = _run(runner, paths, "config", "init")
        assert result.exit_code == 0, result.output
        assert (tmp_path / "jadwal.yaml").exists()

        result = _run(runner, paths, "config", "show")
        assert result.exit_code == 0
        assert "max_concurrent_per_lecturer" in result.output

    def test_missing_dataset(self, runner, paths):
        result = _run(runner, paths, "validate")
        assert result.exit_code == 1
        assert "jadwal init" in result.output

    def test_generate_and_validate(self, runner, paths, tmp_path):
        result = _run(runner, paths, "generate", "--seed", "3")
        assert result.exit_code == 0, result.output
        assert (tmp_path / "ds.json").exists()

        result = _run(runner, paths, "validate")
        assert result.exit_code == 0, result.output

        result = _run(runner, paths, "workload")
        assert result.exit_code == 0

    def test_portal_flow(self, runner, paths, tmp_path):
        assert _run(runner, paths, "init").exit_code == 0
        assert _add(runner, paths, "sch-1").exit_code == 0

        result = _run(runner, paths, "claim", "sch-1", "L1", "--team")
        assert result.exit_code == 0, result.output
        result = _run(runner, paths, "join", "sch-1", "L2")
        assert result.exit_code == 0, result.output

        item = Dataset.load_json(tmp_path / "ds.json").get_schedule_item("sch-1")
        assert item.lecturer_ids == ["L1", "L2"]
        assert item.pjmk_lecturer_id == "L2"

        result = _run(runner, paths, "join", "sch-1", "L3")
        assert result.exit_code == 1
        assert "AlreadyFull" in result.output

    def test_lock_blocks_portal_not_admin(self, runner, paths, tmp_path):
        _run(runner, paths, "init")
        _add(runner, paths, "sch-1", "R1", "PDB01", "--main", "L1")

        result = _run(runner, paths, "lock", "on")
        assert result.exit_code == 0
        assert "gesperrt" in result.output

        result = _run(runner, paths, "release", "sch-1", "L1")
        assert result.exit_code == 1
        assert "ScheduleLocked" in result.output

        result = _run(runner, paths, "release", "sch-1", "L1", "--admin")
        assert result.exit_code == 0, result.output
        assert Dataset.load_json(tmp_path / "ds.json").get_schedule_item("sch-1").is_open

    def test_add_conflict(self, runner, paths):
        _run(runner, paths, "init")
        assert _add(runner, paths, "sch-1", "R1", "PDB01").exit_code == 0
        result = _add(runner, paths, "sch-2", "R1", "PDB02")
        assert result.exit_code == 1
        assert "ConflictDetected" in result.output

    def test_check(self, runner, paths):
        _run(runner, paths, "init")
        _add(runner, paths, "sch-1", "R1", "PDB01", "--main", "L1")

        args = ["check", "--day", "Senin", "--time", "07:00 - 08:40"]
        assert _run(runner, paths, *args, "--room", "R2").exit_code == 0
        result = _run(runner, paths, *args, "--room", "R1")
        assert result.exit_code == 1
        assert "RoomConflict" in result.output
        assert _run(runner, paths, *args, "--lecturer", "L1").exit_code == 1
        assert _run(runner, paths, *args, "--lecturer", "L1", "--tolerant").exit_code == 0

    def test_edit_keep_team(self, runner, paths, tmp_path):
        _run(runner, paths, "init")
        _add(runner, paths, "sch-1", "R1", "PDB01", "--main", "L1", "--team", "L2")
        result = _run(runner, paths, "edit", "sch-1", "--room", "R5", "--keep-team")
        assert result.exit_code == 0, result.output
        item = Dataset.load_json(tmp_path / "ds.json").get_schedule_item("sch-1")
        assert item.room_id == "R5"
        assert item.lecturer_ids == ["L1", "L2"]
        assert item.pjmk_lecturer_id == "L1"

    def test_unknown_entry(self, runner, paths):
        _run(runner, paths, "init")
        result = _run(runner, paths, "claim", "nix", "L1")
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_diff_json(self, runner, paths, tmp_path):
        """JSON-Ausgabe bleibt auch mit --verbose frei von Log-Zeilen."""
        _run(runner, paths, "init")
        old = tmp_path / "alt.json"
        old.write_text((tmp_path / "ds.json").read_text(encoding="utf-8"), encoding="utf-8")
        _add(runner, paths, "sch-1")

        result = runner.invoke(
            cli, [*paths, "-v", "diff", str(old), str(tmp_path / "ds.json"), "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["entries_added"] == ["sch-1"]
        assert "DEBUG" in result.stderr

    def test_first_run_message_logged_to_stderr(self, runner, paths):
        """Ohne Konfigurationsdatei wird der Hinweis auf Standardwerte geloggt."""
        result = _run(runner, paths, "config", "show")
        assert result.exit_code == 0, result.output
        assert "Keine Konfiguration" in result.stderr
        assert "Keine Konfiguration unter" not in result.stdout
