"""ChordDiagramRenderer: draws a chord descriptor as a self-contained inline SVG."""

from __future__ import annotations

import re
from collections.abc import Mapping

from fretchart.chord_models import STRING_COUNT, ChordDescriptor, Fretted, Marker, Muted, Open

# Characters outside the XML 1.0 Char production.
_XML_INVALID_RE = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def escape_markup(text: str, *, quote: bool = False) -> str:
    """
    Escape characters that are unsafe in HTML/SVG text (and attributes when ``quote``).

    Characters that XML cannot carry at all, such as C0 controls, are dropped.
    """
    escaped = _XML_INVALID_RE.sub("", text)
    escaped = escaped.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


def _num(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class ChordDiagramRenderer:
    """
    Render chord diagrams as SVG strings.

    The diagram is a fixed 160x200 grid card: six vertical strings, six
    horizontal fret lines, the chord name on top and one marker per string.
    Output is deterministic, so identical input gives byte-identical SVG.
    """

    # Canvas (SVG user units)
    _VIEW_WIDTH: int = 160
    _VIEW_HEIGHT: int = 200
    _DISPLAY_WIDTH: int = 100
    _FRAME_INSET: float = 0.5
    _FRAME_RADIUS: int = 10

    # Grid
    _GRID_LEFT: int = 30
    _GRID_TOP: int = 60
    _STRING_SPACING: int = 20
    _FRET_SPACING: int = 24
    _FRET_LINES: int = 6

    # Labels and markers
    _NAME_Y: int = 30
    _POSITION_X: int = 140
    _POSITION_Y: int = 76
    _MUTE_Y: int = 55
    _OPEN_Y: int = 50
    _OPEN_RADIUS: int = 4
    _DOT_RADIUS: int = 6

    _STYLE: str = (
        "<style>"
        ".grid { stroke: #333; stroke-width: 1 } "
        ".grid-thick { stroke: #333; stroke-width: 3 } "
        ".dot { fill: #333 } "
        ".open { fill: none; stroke: #333; stroke-width: 2 } "
        ".mute { font: 18px sans-serif; text-anchor: middle } "
        ".label { font: 20px sans-serif; text-anchor: middle } "
        ".fret-number { font: 16px sans-serif } "
        ".frame { fill: white; stroke: #333; stroke-width: 1 }"
        "</style>"
    )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def grid_right(self) -> int:
        return self.string_x(STRING_COUNT - 1)

    @property
    def grid_bottom(self) -> int:
        return self.fret_y(self._FRET_LINES - 1)

    def string_x(self, index: int) -> int:
        """Horizontal position of string ``index`` (0 = leftmost)."""
        return self._GRID_LEFT + index * self._STRING_SPACING

    def fret_y(self, index: int) -> int:
        """Vertical position of fret line ``index`` (0 = top line)."""
        return self._GRID_TOP + index * self._FRET_SPACING

    def dot_y(self, fret: int, position: int) -> float:
        """Vertical centre of a fretted dot, in the cell ``fret - position`` below the top line."""
        return self._GRID_TOP + (fret - position + 0.5) * self._FRET_SPACING

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, chord_lookup: Mapping[str, ChordDescriptor] | None, chord_id: str) -> str:
        """
        Resolve ``chord_id`` in ``chord_lookup`` and render its diagram.

        Unknown ids and chords without fingering degrade to an inline
        ``<em>`` fallback instead of raising, so one bad reference cannot
        break a whole page.
        """
        chord = (chord_lookup or {}).get(chord_id)
        if chord is None or chord.frets is None:
            return self.render_fallback(chord_id)
        return self.render_diagram(chord)

    def render_fallback(self, chord_id: str) -> str:
        return f"<em>Chord not found: {escape_markup(str(chord_id))}</em>"

    def render_diagram(self, chord: ChordDescriptor) -> str:
        """Render a descriptor that carries fingering. Missing fingering draws an empty grid."""
        parts = [self._open_tag(chord), self._STYLE, self._frame(), self._name(chord)]
        parts.extend(self._strings())
        parts.extend(self._frets(chord.position))
        if chord.position != 1:
            parts.append(
                f'<text class="fret-number" x="{self._POSITION_X}" y="{self._POSITION_Y}">'
                f"{chord.position}</text>"
            )
        for index, marker in enumerate(chord.frets or ()):
            element = self._marker(index, marker, chord.position)
            if element:
                parts.append(element)
        parts.append("</svg>")
        return "\n".join(parts)

    # ------------------------------------------------------------------
    # SVG pieces
    # ------------------------------------------------------------------

    def _open_tag(self, chord: ChordDescriptor) -> str:
        label = escape_markup(chord.name, quote=True)
        return (
            f'<svg viewBox="0 0 {self._VIEW_WIDTH} {self._VIEW_HEIGHT}" width="{self._DISPLAY_WIDTH}" '
            f'xmlns="http://www.w3.org/2000/svg" role="img" aria-label="{label}">'
        )

    def _frame(self) -> str:
        inset = self._FRAME_INSET
        return (
            f'<rect class="frame" x="{_num(inset)}" y="{_num(inset)}" '
            f'width="{_num(self._VIEW_WIDTH - 2 * inset)}" height="{_num(self._VIEW_HEIGHT - 2 * inset)}" '
            f'rx="{self._FRAME_RADIUS}" ry="{self._FRAME_RADIUS}"/>'
        )

    def _name(self, chord: ChordDescriptor) -> str:
        return (
            f'<text class="label" x="{_num(self._VIEW_WIDTH / 2)}" y="{self._NAME_Y}">'
            f"{escape_markup(chord.name)}</text>"
        )

    def _strings(self) -> list[str]:
        return [
            f'<line class="grid" x1="{x}" y1="{self._GRID_TOP}" x2="{x}" y2="{self.grid_bottom}"/>'
            for x in (self.string_x(i) for i in range(STRING_COUNT))
        ]

    def _frets(self, position: int) -> list[str]:
        lines = []
        for i in range(self._FRET_LINES):
            css = "grid-thick" if i == 0 and position == 1 else "grid"
            y = self.fret_y(i)
            lines.append(f'<line class="{css}" x1="{self._GRID_LEFT}" y1="{y}" x2="{self.grid_right}" y2="{y}"/>')
        return lines

    def _marker(self, index: int, marker: Marker | None, position: int) -> str:
        x = self.string_x(index)
        if isinstance(marker, Muted):
            return f'<text class="mute" x="{x}" y="{self._MUTE_Y}">x</text>'
        if isinstance(marker, Open):
            return f'<circle class="open" cx="{x}" cy="{self._OPEN_Y}" r="{self._OPEN_RADIUS}"/>'
        if isinstance(marker, Fretted):
            y = self.dot_y(marker.fret, position)
            return f'<circle class="dot" cx="{x}" cy="{_num(y)}" r="{self._DOT_RADIUS}"/>'
        return ""


_DEFAULT_RENDERER = ChordDiagramRenderer()


def render_chord(chord_lookup: Mapping[str, ChordDescriptor] | None, chord_id: str) -> str:
    """Render ``chord_id`` from ``chord_lookup`` with the default renderer."""
    return _DEFAULT_RENDERER.render(chord_lookup, chord_id)
