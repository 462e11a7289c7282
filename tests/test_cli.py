"""Tests for the orgmark CLI."""

import io
import json
import subprocess
import tempfile
from pathlib import Path

import pytest

from orgmarkup.cli import main

NOTE = """* Tasks
Read *this* and [[#setup][the setup]].
:LOGBOOK:
- Done
:END:
"""


def run(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    out = capsys.readouterr()
    return exc.value.code, out.out, out.err


@pytest.fixture
def note(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "note.org"
    path.write_text(NOTE)
    return path


def test_render_text(note, capsys):
    """Test rendering to plain text with a folded drawer."""
    code, out, _ = run(["render", str(note)], capsys)

    assert code == 0
    assert out == "* Tasks\nRead this and the setup.\n:LOGBOOK:…\n"


def test_render_unfold(note, capsys):
    """Test --unfold shows drawer content."""
    code, out, _ = run(["render", "--unfold", str(note)], capsys)

    assert code == 0
    assert out == "* Tasks\nRead this and the setup.\n:LOGBOOK:\n- Done\n:END:\n"


def test_render_unfold_from_config(note, capsys):
    """Test ui.unfold_drawers in orgmarkup.toml."""
    (note.parent / "orgmarkup.toml").write_text("[ui]\nunfold_drawers = true\n")
    code, out, _ = run(["render", str(note)], capsys)

    assert code == 0
    assert ":END:" in out


def test_render_html(note, capsys):
    """Test HTML output."""
    code, out, _ = run(["render", "--format", "html", str(note)], capsys)

    assert code == 0
    assert "<strong>this</strong>" in out
    assert 'data-property-value="setup"' in out
    assert '<details class="drawer">' in out


def test_render_json(note, capsys):
    """Test machine-readable output."""
    code, out, _ = run(["--json", "render", str(note)], capsys)

    assert code == 0
    data = json.loads(out)
    assert data["text"].startswith("* Tasks\nRead this")
    assert [s["type"] for s in data["spans"]] == ["style", "property_link", "drawer"]


def test_render_with_marks(note, capsys):
    """Test --with-marks keeps emphasis markers."""
    code, out, _ = run(["render", "--with-marks", str(note)], capsys)

    assert code == 0
    assert "Read *this* and" in out


def test_render_no_linkify(note, capsys):
    """Test --no-linkify still replaces link syntax."""
    code, out, _ = run(["--json", "render", "--no-linkify", str(note)], capsys)

    data = json.loads(out)
    assert "the setup." in data["text"]
    assert "property_link" not in [s["type"] for s in data["spans"]]


def test_render_stdin(monkeypatch, tmp_path, capsys):
    """Test reading from stdin."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("/x/ ~y~"))

    code, out, _ = run(["render", "-"], capsys)

    assert code == 0
    assert out == "x y\n"


def test_render_missing_file(tmp_path, monkeypatch, capsys):
    """Test a missing input file."""
    monkeypatch.chdir(tmp_path)
    code, _, err = run(["render", "nope.org"], capsys)

    assert code == 1
    assert "File not found" in err


def test_resolve(tmp_path, monkeypatch, capsys):
    """Test resolving a property link to a note path."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "setup.org").write_text(":PROPERTIES:\n:CUSTOM_ID: setup\n:END:\n")

    code, out, _ = run(["--notes", str(tmp_path), "resolve", "CUSTOM_ID", "setup"], capsys)
    assert code == 0
    assert out.strip() == str(tmp_path / "setup.org")

    code, out, _ = run(["--notes", str(tmp_path), "--json", "resolve", "ID", "x"], capsys)
    assert code == 1
    assert json.loads(out) == {"name": "ID", "value": "x", "paths": []}


def test_render_subprocess():
    """Test the installed orgmark command."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "a.org"
        path.write_text("*bold* https://orgmode.org\n")

        result = subprocess.run(
            ["orgmark", "--json", "render", str(path)],
            capture_output=True,
            text=True,
            cwd=tmpdir,
        )

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["text"] == "bold https://orgmode.org\n"
        assert data["spans"][1] == {
            "start": 5, "end": 24, "type": "link", "target": "https://orgmode.org"
        }


def test_render_json_unfolded(note, capsys):
    """Test that --unfold is reflected in JSON output."""
    code, out, _ = run(["--json", "render", "--unfold", str(note)], capsys)

    assert code == 0
    drawer = json.loads(out)["spans"][-1]
    assert drawer["type"] == "drawer"
    assert drawer["folded"] is False
