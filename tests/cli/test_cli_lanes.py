import json
from unittest.mock import patch

import pytest

from lanechart.cli.lanes import main as lanes_main


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a", "name": "Alpha", "start": "2024-01-01", "end": "2024-01-05"},
                {"id": "b", "name": "Bravo", "start": "2024-01-03", "end": "2024-01-08"},
                {"id": "c", "name": "Charlie", "start": "2024-01-07", "end": "2024-01-09"},
            ]
        ),
        encoding="utf-8",
    )
    return str(path)


def run(argv):
    with patch("sys.argv", ["lanes.py"] + argv):
        with pytest.raises(SystemExit) as e:
            lanes_main()
    return e.value.code


def test_pack_text(items_file, capsys):
    assert run(["pack", items_file]) == 0
    out, _ = capsys.readouterr()
    assert "3 items in 2 lanes" in out
    assert "Lane 0:" in out
    assert "2024-01-01 → 2024-01-05  Alpha [a]" in out


def test_pack_with_gap(items_file, capsys):
    assert run(["pack", items_file, "--min-gap-days", "3"]) == 0
    out, _ = capsys.readouterr()
    assert "3 items in 3 lanes" in out


def test_pack_json(items_file, capsys):
    assert run(["pack", items_file, "--json"]) == 0
    out, _ = capsys.readouterr()
    lanes = json.loads(out)
    assert [[item["id"] for item in lane] for lane in lanes] == [["a", "c"], ["b"]]


def test_bounds(items_file, capsys):
    assert run(["bounds", items_file, "--padding-days", "2"]) == 0
    out, _ = capsys.readouterr()
    assert "Origin: 2023-12-30" in out
    assert "End:    2024-01-11" in out
    assert "Days:   13" in out


def test_missing_file(tmp_path):
    assert run(["pack", str(tmp_path / "missing.json")]) == 1


def test_negative_gap(items_file):
    assert run(["pack", items_file, "--min-gap-days", "-1"]) == 1


def test_invalid_content(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert run(["pack", str(path)]) == 1


def test_no_command():
    assert run([]) == 1


def test_duplicate_ids_rejected(tmp_path):
    path = tmp_path / "dupes.json"
    record = {"id": "a", "start": "2024-01-01", "end": "2024-01-02"}
    path.write_text(json.dumps([record, record]), encoding="utf-8")
    assert run(["pack", str(path)]) == 1
