"""Renderer implementations for chord chart output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fretchart.chord_models import ChartDiagram, ChordChart
from fretchart.diagram_renderer import escape_markup


class ChartRenderer(ABC):
    """Abstract chord chart renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, chart: ChordChart) -> str:
        """Render a chart into a file content string."""


class HtmlChartRenderer(ChartRenderer):
    """Render a chord chart as a self-contained HTML page of inline SVG figures."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, chart: ChordChart) -> str:
        return self.build_html(chart.title, chart.diagrams)

    def build_html(self, title: str, diagrams: list[ChartDiagram]) -> str:
        """
        Wrap rendered diagrams in a self-contained HTML document.

        Each diagram sits in its own ``<figure>`` with the chord id as a
        caption. The grid wraps on screen; print styles keep figures whole.
        """
        title_safe = escape_markup(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        figures = "\n".join(self._figure(diagram) for diagram in diagrams)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Georgia, serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      text-align: center;
      font-size: 1.6rem;
      margin-bottom: 2rem;
      color: #222;
    }}
    .chart {{
      display: flex;
      flex-wrap: wrap;
      gap: 1.5rem;
      justify-content: center;
      max-width: 860px;
      margin: 0 auto;
    }}
    .chord {{
      margin: 0;
      text-align: center;
    }}
    .chord figcaption {{
      font-size: 0.8rem;
      color: #555;
      margin-top: 0.25rem;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
      }}
      .chord {{
        break-inside: avoid;
      }}
    }}
  </style>
</head>
<body>
{heading}  <div class="chart">
{figures}
  </div>
</body>
</html>"""

    def _figure(self, diagram: ChartDiagram) -> str:
        chord_id = escape_markup(diagram.chord_id, quote=True)
        return (
            f'    <figure class="chord" id="chord-{chord_id}">{diagram.svg}'
            f"<figcaption>{escape_markup(diagram.chord_id)}</figcaption></figure>"
        )


class MarkdownChartRenderer(ChartRenderer):
    """Render a chord chart as Markdown with each diagram inlined as raw SVG."""

    @property
    def default_extension(self) -> str:
        return ".md"

    def render(self, chart: ChordChart) -> str:
        sections = [f"# {escape_markup(chart.title)}" if chart.title else ""]
        for diagram in chart.diagrams:
            sections.append(f"## {escape_markup(diagram.name)}\n\n<figure>{diagram.svg}</figure>")
        return "\n\n".join(section for section in sections if section) + "\n"
