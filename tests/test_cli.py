"""Tests for the command-line entry point."""
import json
import logging

import pytest
import structlog
from openpyxl import load_workbook

from staffrota.cli import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("staffrota")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestCli:
    """Tests for staffrota.cli.main."""

    def test_text_output(self, capsys):
        assert main(["--roster", "6", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "Rotation 1 (09:00 - 10:30)" in out
        assert " - Ticket: " in out

    def test_json_output(self, capsys):
        assert main(["--roster", "2", "--seed", "1", "--json"]) == 0
        doc = json.loads(capsys.readouterr().out)
        assert len(doc["rotations"]) == 5
        assert doc["seed"] == 1
        assert any(n["severity"] == "critical" for n in doc["notifications"])

    def test_seeded_runs_repeat(self, capsys):
        main(["--roster", "7", "--seed", "42", "--json"])
        first = capsys.readouterr().out
        main(["--roster", "7", "--seed", "42", "--json"])
        assert capsys.readouterr().out == first

    def test_input_document(self, tmp_path, capsys):
        path = tmp_path / "day.json"
        path.write_text(json.dumps({
            "roster_size": 5,
            "calendar": [{"id": 1, "start": "09:00", "end": "12:00"}],
            "forced_assignments": [{"rotation_id": 1, "station": "Greeter", "person": "B5"}],
            "names": {"B5": "Ana"},
        }), encoding="utf-8")
        assert main(["--input", str(path), "--seed", "0", "--json"]) == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc["rotations"][0]["assignments"]["Greeter"] == ["B5"]
        assert doc["names"]["B5"] == "Ana"

    def test_roster_flag_overrides_document(self, tmp_path, capsys):
        path = tmp_path / "day.json"
        path.write_text(json.dumps({"roster_size": 9}), encoding="utf-8")
        main(["--input", str(path), "--roster", "3", "--json"])
        doc = json.loads(capsys.readouterr().out)
        people = [p for bucket in doc["rotations"][0]["assignments"].values() for p in bucket]
        assert sorted(people) == ["B1", "B2", "B3"]

    def test_invalid_input(self, tmp_path, capsys):
        path = tmp_path / "day.json"
        path.write_text(json.dumps({"calendar": []}), encoding="utf-8")
        assert main(["--input", str(path), "--json-logs"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "invalid_input" in captured.err

    def test_exports(self, tmp_path, capsys):
        xlsx = tmp_path / "day.xlsx"
        csv = tmp_path / "day.csv"
        assert main(["--roster", "6", "--seed", "5", "--excel", str(xlsx), "--csv", str(csv)]) == 0
        assert load_workbook(xlsx).sheetnames == ["Board", "Matrix", "Notifications", "Stats"]
        assert csv.read_text(encoding="utf-8").startswith("rotation,time_range,station")

    def test_reshuffle(self, capsys):
        assert main(["--roster", "6", "--reshuffle", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["seed"] is not None
