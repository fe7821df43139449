"""Tests for the reader API and command-line interface."""

import json

import pytest

from bankocr.api import BankOCRReader
from bankocr.cli import main
from bankocr.errors import MalformedEntryError
from bankocr.models import EntryStatus
from bankocr.rendering import render_entries


@pytest.fixture
def entries_file(tmp_path):
    path = tmp_path / "entries.txt"
    path.write_text(render_entries(["457508000", "664371495", "111111111"]))
    return path


@pytest.fixture
def trimmed_file(tmp_path):
    # Scanners often drop trailing whitespace
    path = tmp_path / "trimmed.txt"
    lines = render_entries(["222222222"]).splitlines()
    path.write_text("\n".join(line.rstrip() for line in lines) + "\n")
    return path


def _run(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["bank-ocr", *map(str, argv)])
    main()


class TestBankOCRReader:
    def test_read(self, entries_file):
        assert BankOCRReader().read(entries_file) == "457508000\n664371495\n111111111"

    def test_read_entries(self, entries_file):
        results = BankOCRReader().read_entries(entries_file)
        assert [r.status for r in results] == [
            EntryStatus.OK, EntryStatus.ERR, EntryStatus.ERR,
        ]

    def test_read_entries_with_repair(self, entries_file):
        results = BankOCRReader(repair=True).read_entries(entries_file)
        assert results[2].token == "711111111"
        assert results[2].status is EntryStatus.OK

    def test_read_annotated(self, entries_file):
        report = BankOCRReader().read_annotated(entries_file)
        assert report == "457508000\n664371495 ERR\n111111111 ERR"

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BankOCRReader().read(tmp_path / "missing.txt")

    def test_trimmed_lines_are_malformed(self, trimmed_file):
        with pytest.raises(MalformedEntryError):
            BankOCRReader().read(trimmed_file)

    def test_pad_short_lines(self, trimmed_file):
        assert BankOCRReader(pad_short_lines=True).read(trimmed_file) == "222222222"

    def test_only_newlines_split_rows(self, tmp_path):
        # A form feed inside a row is an illegible character, not a line break
        lines = render_entries(["123456789"]).splitlines()
        lines[0] = "\x0c" + lines[0][1:]
        path = tmp_path / "entries.txt"
        path.write_text("\n".join(lines) + "\n")
        assert BankOCRReader().read(path) == "?23456789"
        assert BankOCRReader().read_lines(lines) == "?23456789"

    def test_pad_ignores_trailing_blank_lines(self, trimmed_file):
        trimmed_file.write_text(trimmed_file.read_text() + "\n\n\n")
        assert BankOCRReader(pad_short_lines=True).read(trimmed_file) == "222222222"

    def test_read_lines(self):
        lines = render_entries(["000000051"]).splitlines()
        assert BankOCRReader().read_lines(lines) == "000000051"


class TestCLI:
    def test_text_output(self, monkeypatch, capsys, entries_file):
        _run(monkeypatch, entries_file)
        assert capsys.readouterr().out == "457508000\n664371495\n111111111\n"

    def test_status_output(self, monkeypatch, capsys, entries_file):
        _run(monkeypatch, entries_file, "--status")
        out = capsys.readouterr().out
        assert out == "457508000\n664371495 ERR\n111111111 ERR\n"

    def test_repair_output(self, monkeypatch, capsys, entries_file):
        _run(monkeypatch, entries_file, "--repair")
        assert capsys.readouterr().out.splitlines()[2] == "711111111"

    def test_json_output(self, monkeypatch, capsys, entries_file):
        _run(monkeypatch, entries_file, "--format", "json")
        data = json.loads(capsys.readouterr().out)
        assert [d["token"] for d in data] == ["457508000", "664371495", "111111111"]
        assert data[1]["status"] == "ERR"
        assert "confidence" not in data[0]

    def test_json_verbose_includes_confidence(self, monkeypatch, capsys, entries_file):
        _run(monkeypatch, entries_file, "--format", "json", "-v")
        data = json.loads(capsys.readouterr().out)
        assert data[0]["confidence"] == 1.0

    def test_missing_file(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, tmp_path / "missing.txt")
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_malformed_file(self, monkeypatch, capsys, trimmed_file):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, trimmed_file)
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error: Entry 0:")

    def test_pad_flag(self, monkeypatch, capsys, trimmed_file):
        _run(monkeypatch, trimmed_file, "--pad")
        assert capsys.readouterr().out == "222222222\n"
