"""CLI tests driven through click's CliRunner."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from fretchart import __version__
from fretchart.cli import main

CHORDS_YAML = """\
g:
  name: G major
  fingering:
    frets: [3, 2, 0, 0, 0, 3]
b-barre:
  name: B major
  position: 2
  fingering:
    frets: [x, 2, 4, 4, 4, 2]
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def chords_file(tmp_path: Path) -> Path:
    path = tmp_path / "open_chords.yaml"
    path.write_text(CHORDS_YAML, encoding="utf-8")
    return path


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_to_stdout(runner: CliRunner, chords_file: Path) -> None:
    result = runner.invoke(main, ["render", str(chords_file), "g"])
    assert result.exit_code == 0
    assert 'aria-label="G major"' in result.output
    assert "</svg>" in result.output


def test_render_to_file(runner: CliRunner, chords_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "g.svg"
    result = runner.invoke(main, ["render", str(chords_file), "b-barre", "-o", str(out)])
    assert result.exit_code == 0
    content = out.read_text(encoding="utf-8")
    assert content.startswith("<svg")
    assert 'class="fret-number"' in content


def test_render_unknown_chord_writes_fallback(runner: CliRunner, chords_file: Path) -> None:
    result = runner.invoke(main, ["render", str(chords_file), "zz"])
    assert result.exit_code == 0
    assert "Chord not found: zz" in result.output


def test_render_invalid_data_exits_1(runner: CliRunner, tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("g:\n  position: 0\n", encoding="utf-8")
    result = runner.invoke(main, ["render", str(bad), "g"])
    assert result.exit_code == 1
    assert "ERROR: Invalid chord data" in result.output


def test_chart_defaults_output_path_and_title(runner: CliRunner, chords_file: Path) -> None:
    result = runner.invoke(main, ["chart", str(chords_file)])
    assert result.exit_code == 0, result.output

    out = chords_file.with_suffix(".html")
    content = out.read_text(encoding="utf-8")
    assert "<h1>open chords</h1>" in content
    assert content.count("<svg") == 2
    assert "Wrote 2 chord(s)" in result.output


def test_chart_markdown(runner: CliRunner, chords_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "chart.md"
    result = runner.invoke(
        main, ["chart", str(chords_file), "--format", "md", "--title", "Campfire", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").startswith("# Campfire")


def test_expand_uses_site_and_front_matter_chords(runner: CliRunner, chords_file: Path, tmp_path: Path) -> None:
    page = tmp_path / "post.md"
    page.write_text(
        "---\n"
        "title: Campfire\n"
        "chords:\n"
        "  em:\n"
        "    name: E minor\n"
        "    frets: [0, 2, 2, 0, 0, 0]\n"
        "---\n"
        'Verse: {% chord "g" %} {% chord "em" %}\n',
        encoding="utf-8",
    )
    out = tmp_path / "post.out.md"
    result = runner.invoke(main, ["expand", str(page), "--chords", str(chords_file), "-o", str(out)])
    assert result.exit_code == 0, result.output

    content = out.read_text(encoding="utf-8")
    assert content.startswith("---\ntitle: Campfire\n")
    assert 'aria-label="G major"' in content
    assert 'aria-label="E minor"' in content
    assert "{% chord" not in content


def test_expand_warns_on_missing_chord(runner: CliRunner, tmp_path: Path) -> None:
    page = tmp_path / "post.md"
    page.write_text('Try {% chord "nope" %}\n', encoding="utf-8")
    result = runner.invoke(main, ["expand", str(page)])
    assert result.exit_code == 0
    assert "Chord 'nope' not found" in result.output
    assert "<em>Chord not found: nope</em>" in result.output


def test_check_clean_file(runner: CliRunner, chords_file: Path) -> None:
    result = runner.invoke(main, ["check", str(chords_file)])
    assert result.exit_code == 0
    assert "OK  2 chord(s) checked." in result.output


def test_check_reports_problems(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "chords.yaml"
    path.write_text(
        "low:\n  position: 5\n  frets: [3, x, 5, 5, 5, x]\nempty:\n  name: Empty\n",
        encoding="utf-8",
    )
    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert "low: string 1 is fretted below position 5" in result.output
    assert "empty: no fret data" in result.output
    assert "Found 2 problem(s) in 2 chord(s)." in result.output


def test_expand_warns_on_chord_without_fret_data(runner: CliRunner, tmp_path: Path) -> None:
    page = tmp_path / "post.md"
    page.write_text(
        "---\nchords:\n  todo:\n    name: Someday\n---\n" 'Later {% chord "todo" %}\n',
        encoding="utf-8",
    )
    result = runner.invoke(main, ["expand", str(page)])
    assert result.exit_code == 0
    assert "Chord 'todo' not found" in result.output
    assert "<em>Chord not found: todo</em>" in result.output


def test_chart_unwritable_output_exits_1(runner: CliRunner, chords_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "missing_dir" / "chart.html"
    result = runner.invoke(main, ["chart", str(chords_file), "-o", str(out)])
    assert result.exit_code == 1
    assert "ERROR: Could not read chord data or write output file" in result.output
