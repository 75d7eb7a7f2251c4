"""Tests for the quiremap command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quiremap.cli import main

_MANUSCRIPT = """\
title = "Walters W.102"

[[quires]]
leaf-count = 8
singles = [2, 6]

[[quires]]
leaf-count = 2
singles = [1, 2]
"""


@pytest.fixture
def manuscript_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "w102.quires.toml"
    path.write_text(_MANUSCRIPT)
    return path


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "quiremap: Conjoin diagrams for manuscript quires" in out
    assert "Common usage:" in out


def test_no_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "No input specified" in capsys.readouterr().err


def test_text_output(manuscript_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(manuscript_file)]) == 0
    out = capsys.readouterr().out
    assert "Walters W.102  Quire 1" in out
    assert "Walters W.102  Quire 2" in out
    lines = out.splitlines()
    assert lines[1].split() == ["1", "n=1", "f.", "1", "conjoin", "10"]
    assert lines[4].split() == ["4", "--", "placeholder,", "conjoin", "7"]
    assert lines[7].split() == ["7", "n=6", "f.", "6", "single"]


def test_text_output_without_labels(
    manuscript_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["--no-labels", str(manuscript_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1].split() == ["1", "n=1", "conjoin", "10"]


def test_json_output(manuscript_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--format", "json", str(manuscript_file)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 1
    quires = data[0]["quires"]
    assert [q["number"] for q in quires] == [1, 2]
    first_slots = quires[0]["slots"]
    assert len(first_slots) == 10
    assert first_slots[3] == {"position": 4, "conjoin": 7, "is_placeholder": True}
    assert first_slots[0] == {
        "position": 1,
        "number": 1,
        "label": "1",
        "single": False,
        "conjoin": 10,
    }
    assert [s["conjoin"] for s in quires[1]["slots"]] == [None, None, 2, 1]
    # folio numbering continues from the first quire
    assert [s.get("label") for s in quires[1]["slots"]] == ["9", "10", None, None]


def test_format_from_config(manuscript_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (manuscript_file.parent / "quiremap.toml").write_text('[output]\nformat = "json"\n')
    assert main([str(manuscript_file)]) == 0
    assert json.loads(capsys.readouterr().out)[0]["title"] == "Walters W.102"


def test_output_file(manuscript_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "diagram.txt"
    assert main(["-o", str(output), str(manuscript_file)]) == 0
    assert "Walters W.102  Quire 1" in output.read_text()


def test_directory_input(manuscript_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list-files", "."]) == 0
    assert capsys.readouterr().out.strip() == str(manuscript_file.resolve())


def test_validate_only(manuscript_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--validate-only", str(manuscript_file)]) == 0
    assert capsys.readouterr().out.startswith("ok: ")


def test_invalid_manuscript(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "odd.quires.toml"
    path.write_text("[[quires]]\nleaf-count = 3\n")
    assert main([str(path)]) == 1
    assert "cannot be odd; found: 3" in capsys.readouterr().err


def test_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "missing.quires.toml")]) == 1
    assert "Path not found" in capsys.readouterr().err
