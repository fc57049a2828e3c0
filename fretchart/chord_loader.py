"""ChordLoader: builds chord lookups from YAML/JSON data files and page front matter."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

from fretchart.chord_models import STRING_COUNT, ChordDescriptor, ChordLookup, parse_marker

YAML_SUFFIXES: Final[set[str]] = {".yml", ".yaml"}
JSON_SUFFIXES: Final[set[str]] = {".json"}

# Opening "---" on the first line, closing "---" on its own line.
_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


class ChordDataError(ValueError):
    """Chord data could not be turned into descriptors."""


def chord_from_mapping(chord_id: str, entry: Any) -> ChordDescriptor:
    """
    Convert one raw data-file entry into a ChordDescriptor.

    Fret values are accepted either under ``fingering.frets`` or a top-level
    ``frets`` key. A missing fret list yields a descriptor without fingering,
    which the renderer reports as not found.

    Raises:
        ChordDataError: If the entry is not a mapping, the position is not a
            positive integer, or the fret list does not have six items.
    """
    if not isinstance(entry, Mapping):
        raise ChordDataError(f"Chord '{chord_id}' must be a mapping, got {type(entry).__name__}.")

    name = entry.get("name")
    if name is None:
        name = chord_id

    position = entry.get("position", 1)
    if isinstance(position, bool) or not isinstance(position, int) or position < 1:
        raise ChordDataError(f"Chord '{chord_id}' has invalid position {position!r}; expected an integer >= 1.")

    raw_frets = _extract_raw_frets(entry)
    if raw_frets is None:
        return ChordDescriptor(name=str(name), position=position, frets=None)

    if not isinstance(raw_frets, list) or len(raw_frets) != STRING_COUNT:
        raise ChordDataError(f"Chord '{chord_id}' must list exactly {STRING_COUNT} frets, got {raw_frets!r}.")

    return ChordDescriptor(
        name=str(name),
        position=position,
        frets=tuple(parse_marker(value) for value in raw_frets),
    )


def _extract_raw_frets(entry: Mapping[str, Any]) -> Any:
    fingering = entry.get("fingering")
    if isinstance(fingering, Mapping) and "frets" in fingering:
        return fingering["frets"]
    return entry.get("frets")


def chords_from_mapping(data: Any) -> ChordLookup:
    """Convert a ``{chord_id: entry}`` mapping into a chord lookup, preserving order."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ChordDataError(f"Chord data must be a mapping of chord ids, got {type(data).__name__}.")
    return {str(chord_id): chord_from_mapping(str(chord_id), entry) for chord_id, entry in data.items()}


def load_chords(path: Path | str) -> ChordLookup:
    """
    Load a chord lookup from a ``.yml``/``.yaml`` or ``.json`` data file.

    A top-level ``chords:`` key is unwrapped when present, so the same file
    layout works for site data files and page front matter.

    Raises:
        ChordDataError: If the file cannot be parsed or holds invalid chords.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
        supported = ", ".join(sorted(YAML_SUFFIXES | JSON_SUFFIXES))
        raise ChordDataError(f"Unsupported chord data file '{path.name}'. Use one of: {supported}.")

    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()

    if suffix in JSON_SUFFIXES:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ChordDataError(f"Invalid JSON in '{path}': {exc}") from exc
    else:
        data = _safe_load_yaml(text, source=str(path))

    return chords_from_mapping(_unwrap_chords_key(data))


def _unwrap_chords_key(data: Any) -> Any:
    if isinstance(data, Mapping) and set(data.keys()) == {"chords"}:
        return data["chords"]
    return data


def _safe_load_yaml(text: str, source: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ChordDataError(f"Invalid YAML in '{source}': {exc}") from exc


def split_front_matter(text: str) -> tuple[dict[str, Any], str, str]:
    """
    Split a page into (front-matter data, raw front-matter block, body).

    Pages without front matter return ``({}, "", text)``. The raw block
    includes both ``---`` fences so callers can write it back unchanged.
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, "", text

    data = _safe_load_yaml(match.group(1), source="front matter")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ChordDataError("Front matter must be a YAML mapping.")
    return data, match.group(0), text[match.end():]


def page_chords(front_matter: Mapping[str, Any], site_chords: ChordLookup | None = None) -> ChordLookup:
    """Merge a page's ``chords:`` front matter over the site-wide lookup."""
    merged: ChordLookup = dict(site_chords or {})
    merged.update(chords_from_mapping(front_matter.get("chords")))
    return merged
