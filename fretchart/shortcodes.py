"""Expand ``{% chord "id" %}`` shortcodes in page text into inline chord diagrams."""

from __future__ import annotations

import re
from collections.abc import Mapping

from fretchart.chord_models import ChordDescriptor
from fretchart.diagram_renderer import ChordDiagramRenderer

CHORD_SHORTCODE_RE = re.compile(
    r"""\{%-?\s*chord\s+(?P<quote>["'])(?P<chord_id>.*?)(?P=quote)\s*-?%\}"""
)


def find_chord_ids(text: str) -> list[str]:
    """Chord ids referenced by shortcodes in ``text``, in order of appearance."""
    return [match.group("chord_id") for match in CHORD_SHORTCODE_RE.finditer(text)]


def expand_chord_shortcodes(
    text: str,
    chord_lookup: Mapping[str, ChordDescriptor] | None,
    renderer: ChordDiagramRenderer | None = None,
) -> str:
    """
    Replace every chord shortcode in ``text`` with its rendered diagram.

    The rendered markup is inlined verbatim; text outside the shortcodes is
    returned unchanged. Unknown ids inline the renderer's fallback.
    """
    active = renderer if renderer is not None else ChordDiagramRenderer()
    return CHORD_SHORTCODE_RE.sub(
        lambda match: active.render(chord_lookup, match.group("chord_id")),
        text,
    )
