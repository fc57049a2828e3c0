"""fretchart CLI entry point."""

import sys
from pathlib import Path

import click

from fretchart import __version__
from fretchart.chord_loader import load_chords, page_chords, split_front_matter
from fretchart.chord_models import ChordLookup
from fretchart.diagram_renderer import ChordDiagramRenderer
from fretchart.shortcodes import expand_chord_shortcodes, find_chord_ids


def _load_or_exit(chords_file: str) -> ChordLookup:
    """Load a chord data file, printing an error and exiting on failure."""
    try:
        return load_chords(chords_file)
    except OSError as exc:
        click.echo(f"  ERROR: Could not read chord data — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Invalid chord data — {exc}", err=True)
        sys.exit(1)


def _write_or_echo(content: str, output: str | None) -> None:
    if output is None:
        click.echo(content)
        return
    try:
        Path(output).write_text(content, encoding="utf-8")
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretchart")
def main() -> None:
    """fretchart — guitar chord diagrams as inline SVG."""


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("chords_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.argument("chord_id")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination SVG file path. Prints to stdout when omitted.",
)
def render(chords_file: str, chord_id: str, output: str | None) -> None:
    """
    Render a single chord diagram as SVG.

    CHORDS_FILE is a YAML or JSON chord data file; CHORD_ID is the key to draw.

    \b
    Examples:
      fretchart render _data/chords.yaml g-major
      fretchart render _data/chords.yaml a-minor -o a-minor.svg
    """
    chords = _load_or_exit(chords_file)
    chord = chords.get(chord_id)
    if chord is None or not chord.has_fingering:
        click.echo(f"  WARNING: Chord '{chord_id}' not found in {chords_file}; writing fallback text.", err=True)

    content = ChordDiagramRenderer().render(chords, chord_id)
    _write_or_echo(content, output)
    if output is not None:
        click.echo(f"Done!  Wrote '{output}'.")


# ── chart subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("chords_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination chart file path. Defaults to extension based on --format.",
)
@click.option(
    "--title",
    default=None,
    metavar="TEXT",
    help="Title shown in the chart header. Defaults to the data filename stem.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "md"], case_sensitive=False),
    default="html",
    show_default=True,
    help="Chart output format: self-contained HTML or Markdown with inline SVG.",
)
def chart(chords_file: str, output: str | None, title: str | None, output_format: str) -> None:
    """
    Render every chord in a data file onto one chart page.

    \b
    Examples:
      fretchart chart _data/chords.yaml
      fretchart chart _data/chords.yaml -o chords.html --title "Open Chords"
      fretchart chart _data/chords.yaml --format md -o chords.md
    """
    from fretchart.chart_exporter import ChartExporter

    chords_path = Path(chords_file)
    resolved_title = title if title is not None else chords_path.stem.replace("_", " ").replace("-", " ")
    normalized_format = output_format.lower()

    exporter = ChartExporter(title=resolved_title, output_format=normalized_format)
    resolved_output = (
        output if output is not None else str(chords_path.with_suffix(exporter.default_extension))
    )

    click.echo(f"fretchart v{__version__}")
    click.echo(f"  Chords : {chords_file}")
    click.echo(f"  Format : {normalized_format}")
    click.echo(f"  Title  : {resolved_title}")
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    try:
        count = exporter.export(chords_file, resolved_output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not read chord data or write output file — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Could not render chart — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Wrote {count} chord(s) to '{resolved_output}'.")


# ── expand subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("page_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--chords",
    "chords_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, readable=True),
    metavar="PATH",
    help="Site-wide chord data file. Page front matter 'chords:' entries take precedence.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination page path. Prints to stdout when omitted.",
)
def expand(page_file: str, chords_file: str | None, output: str | None) -> None:
    """
    Replace {% chord "id" %} shortcodes in a page with inline SVG diagrams.

    \b
    Examples:
      fretchart expand content/blog/campfire.md --chords _data/chords.yaml
      fretchart expand content/blog/campfire.md -o _site/campfire.md
    """
    site_chords = _load_or_exit(chords_file) if chords_file is not None else {}

    try:
        text = Path(page_file).read_text(encoding="utf-8")
        front_matter, raw_front_matter, body = split_front_matter(text)
        chords = page_chords(front_matter, site_chords)
    except OSError as exc:
        click.echo(f"  ERROR: Could not read page — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Invalid page front matter — {exc}", err=True)
        sys.exit(1)

    missing = sorted(
        {
            chord_id
            for chord_id in find_chord_ids(body)
            if chord_id not in chords or not chords[chord_id].has_fingering
        }
    )
    for chord_id in missing:
        click.echo(f"  WARNING: Chord '{chord_id}' not found; inlining fallback text.", err=True)

    _write_or_echo(raw_front_matter + expand_chord_shortcodes(body, chords), output)
    if output is not None:
        click.echo(f"Done!  Wrote '{output}'.")


# ── check subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("chords_file", type=click.Path(exists=True, dir_okay=False, readable=True))
def check(chords_file: str) -> None:
    """
    Report chords that would not draw cleanly.

    Flags chords with no fret data and fretted strings that sit below the
    chord's position (their dots land above the grid). Exits 1 if any are found.
    """
    chords = _load_or_exit(chords_file)

    problems = 0
    for chord_id, chord in chords.items():
        if not chord.has_fingering:
            click.echo(f"  {chord_id}: no fret data")
            problems += 1
            continue
        for string_index in chord.out_of_range_strings():
            click.echo(
                f"  {chord_id}: string {string_index + 1} is fretted below position {chord.position}"
            )
            problems += 1

    if problems:
        click.echo(f"Found {problems} problem(s) in {len(chords)} chord(s).", err=True)
        sys.exit(1)
    click.echo(f"OK  {len(chords)} chord(s) checked.")
