import io
import json
from pathlib import Path

import pytest

from arclet.docopt.__main__ import main

DOC = """Usage:
  prog add <file>...
  prog rm [-f] <file>

Options:
  -f --force  Force removal.
"""


@pytest.fixture
def doc_file(tmp_path: Path) -> str:
    path = tmp_path / "usage.txt"
    path.write_text(DOC, encoding="utf-8")
    return str(path)


def test_cli_success(doc_file: str, capsys: pytest.CaptureFixture[str]):
    assert main([doc_file, "add", "a", "b"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "add": True,
        "<file>": ["a", "b"],
        "rm": False,
        "--force": False,
    }
    assert main([doc_file, "rm", "-f", "x"]) == 0
    assert json.loads(capsys.readouterr().out)["--force"] is True


def test_cli_mismatch(doc_file: str, capsys: pytest.CaptureFixture[str]):
    assert main([doc_file, "rm"]) == 1
    err = capsys.readouterr().err
    assert "Usage:\n  prog add <file>..." in err


def test_cli_bad_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "missing.txt" in capsys.readouterr().err
    bad = tmp_path / "bad.txt"
    bad.write_text("Usage: prog (add\n", encoding="utf-8")
    assert main([str(bad)]) == 2
    assert main([]) == 1


def test_cli_builtin_options(doc_file: str, capsys: pytest.CaptureFixture[str]):
    assert main([doc_file, "-h"]) == 0
    assert capsys.readouterr().out == DOC + "\n"
    assert main(["--version=1.2", doc_file, "--version"]) == 0
    assert capsys.readouterr().out == "1.2\n"
    assert main(["--no-help", doc_file, "-h"]) == 1
    assert main(["-h"]) == 0
    assert "docopt [options] <file>" in capsys.readouterr().out


def test_cli_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.setattr("sys.stdin", io.StringIO(DOC))
    assert main(["-", "rm", "x"]) == 0
    assert json.loads(capsys.readouterr().out)["<file>"] == ["x"]


if __name__ == "__main__":
    pytest.main([__file__, "-vs"])
