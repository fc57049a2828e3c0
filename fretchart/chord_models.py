"""Data models for chord diagrams: string markers and chord descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Union

STRING_COUNT: Final[int] = 6

#: Spellings accepted for a muted (unplayed) string in chord data files.
MUTED_SPELLINGS: Final[frozenset[str]] = frozenset({"x", "X", "muted"})


@dataclass(frozen=True)
class Muted:
    """String is not played."""


@dataclass(frozen=True)
class Open:
    """String is played without pressing a fret."""


@dataclass(frozen=True)
class Fretted:
    """String is pressed at an absolute fret number (1 or higher)."""

    fret: int


Marker = Union[Muted, Open, Fretted]


def parse_marker(value: Any) -> Marker | None:
    """
    Decide the marker kind for one raw fret value from a data file.

    Returns None for values that are neither muted, open, nor a positive
    fret number; the renderer draws nothing for those strings.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if text in MUTED_SPELLINGS:
            return Muted()
        if not (text.isascii() and text.isdigit()):
            return None
        value = int(text)
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    if value == 0:
        return Open()
    if value > 0:
        return Fretted(value)
    return None


@dataclass(frozen=True)
class ChordDescriptor:
    """
    One chord as drawn in a diagram.

    Attributes:
        name:     Display name, e.g. "G major".
        position: Fret represented by the top fret line (1 = the nut).
        frets:    Six markers ordered low string (left) to high string (right),
                  or None when the source data carried no fingering.
    """

    name: str
    position: int = 1
    frets: tuple[Marker | None, ...] | None = None

    @property
    def has_fingering(self) -> bool:
        return self.frets is not None

    def out_of_range_strings(self) -> list[int]:
        """Indices of strings fretted below ``position`` (drawn above the grid)."""
        if self.frets is None:
            return []
        return [
            index
            for index, marker in enumerate(self.frets)
            if isinstance(marker, Fretted) and marker.fret < self.position
        ]


ChordLookup = dict[str, ChordDescriptor]


@dataclass(frozen=True)
class ChartDiagram:
    """One rendered diagram on a chord chart page."""

    chord_id: str
    name: str
    svg: str


@dataclass(frozen=True)
class ChordChart:
    """Neutral chart representation consumed by the chart renderers."""

    title: str
    diagrams: list[ChartDiagram]
