"""ChartExporter: converts a chord data file into an HTML or Markdown chord chart."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from fretchart.chart_renderers import ChartRenderer, HtmlChartRenderer, MarkdownChartRenderer
from fretchart.chord_loader import load_chords
from fretchart.chord_models import ChartDiagram, ChordChart, ChordLookup
from fretchart.diagram_renderer import ChordDiagramRenderer

SUPPORTED_FORMATS: Final[set[str]] = {"html", "md"}


class ChartExporter:
    """
    Render every chord in a lookup onto one page via a pluggable renderer.

    Supported formats:
    - ``html``: self-contained HTML page, one ``<figure>`` per chord.
    - ``md``: Markdown page, one heading and inline SVG per chord.
    """

    def __init__(
        self,
        title: str = "",
        output_format: str = "html",
        diagram_renderer: ChordDiagramRenderer | None = None,
    ) -> None:
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)
        self.diagram_renderer = diagram_renderer or ChordDiagramRenderer()

    def _build_renderer(self, output_format: str) -> ChartRenderer:
        if output_format == "html":
            return HtmlChartRenderer()
        return MarkdownChartRenderer()

    @property
    def default_extension(self) -> str:
        return self.renderer.default_extension

    def build_chart(self, chords: ChordLookup) -> ChordChart:
        """Render each chord in lookup order. Chords without fingering keep their fallback text."""
        diagrams = [
            ChartDiagram(
                chord_id=chord_id,
                name=chord.name,
                svg=self.diagram_renderer.render(chords, chord_id),
            )
            for chord_id, chord in chords.items()
        ]
        return ChordChart(title=self.title, diagrams=diagrams)

    def render(self, chords: ChordLookup) -> str:
        return self.renderer.render(self.build_chart(chords))

    def export(self, chords_path: Path | str, output_path: Path | str) -> int:
        """
        Load a chord data file, render the chart and write it to disk.

        Returns:
            The number of chords written.

        Raises:
            ValueError: If the chord data is invalid.
            OSError: If the data file cannot be read or the output written.
        """
        chords = load_chords(chords_path)
        content = self.render(chords)

        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
        return len(chords)
