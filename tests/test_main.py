"""tests/test_main.py — Tests for the python -m ordtree entry point."""

import io

import pytest
from ordtree.__main__ import main


class TestClinicCommand:
    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("7\n0 A 5\n0 B 5\n0 C 9\n3\n1 A 10\n3\n2 C\n3\n"))
        assert main(["clinic"]) == 0
        assert capsys.readouterr().out == "C\nA\nA\n"

    def test_reads_file(self, tmp_path, capsys):
        script = tmp_path / "ops.txt"
        script.write_text("2\n3\n3\n", encoding="utf-8")
        assert main(["clinic", str(script)]) == 0
        assert capsys.readouterr().out.splitlines() == ["The clinic is empty"] * 2

    def test_bad_script(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n7\n"))
        assert main(["clinic"]) == 2
        assert capsys.readouterr().out.startswith("Error: command 1: unknown opcode 7")

    def test_missing_file(self, tmp_path, capsys):
        assert main(["clinic", str(tmp_path / "nope.txt")]) == 2
        assert capsys.readouterr().out.startswith("Error: ")


class TestBTreeCommand:
    def test_traverse_and_search(self, capsys):
        rc = main(["btree", "--degree", "3", "--search", "6", "--search", "15",
                   "10", "20", "5", "6", "12", "30", "7", "17"])
        assert rc == 0
        assert capsys.readouterr().out.splitlines() == [
            "B-Tree traversal (sorted): 5 6 7 10 12 17 20 30",
            "Search 6: FOUND",
            "Search 15: NOT FOUND",
        ]

    def test_remove(self, capsys):
        assert main(["btree", "-t", "2", "--remove", "3", "1", "2", "3", "4"]) == 0
        assert capsys.readouterr().out.splitlines() == ["B-Tree traversal (sorted): 1 2 4"]

    def test_bad_degree(self, capsys):
        assert main(["btree", "--degree", "1", "5"]) == 2
        assert "t must be >= 2" in capsys.readouterr().out

    def test_duplicate_key(self, capsys):
        assert main(["btree", "4", "4"]) == 2
        assert capsys.readouterr().out.strip() == "Error: duplicate key 4"


class TestCheckCommand:
    def test_pass(self, capsys):
        assert main(["check", "--degree", "4", "--count", "200", "--seed", "123456789"]) == 0
        assert capsys.readouterr().out.strip() == "PASS"

    def test_fail_on_bad_parameters(self, capsys):
        assert main(["check", "--degree", "1"]) == 1
        assert capsys.readouterr().out.strip() == "FAIL: t must be >= 2"


class TestArguments:
    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            main([])
