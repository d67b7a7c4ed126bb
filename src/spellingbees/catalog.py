"""Word catalog loading and randomized traversal order."""

from __future__ import annotations

import json
import random
from collections.abc import Sequence
from importlib import resources
from pathlib import Path
from typing import Any

from .models import WordEntry

CONTENT_PACKAGE = "spellingbees.content"
CATALOG_RESOURCE = "words.json"


def _entry_from_dict(raw: dict[str, Any]) -> WordEntry:
    """Build a catalog entry from raw JSON content."""
    word = str(raw.get("word", "")).strip()
    if not word:
        raise ValueError(f"Catalog entry with cue '{raw.get('cue', '<unknown>')}' has no word.")
    return WordEntry(cue=str(raw.get("cue", "")), word=word)


def _catalog_from_dict(raw: dict[str, Any]) -> list[WordEntry]:
    """Build and validate a catalog from a parsed JSON document."""
    return validate_catalog([_entry_from_dict(item) for item in raw.get("words", [])])


def load_catalog() -> list[WordEntry]:
    """Load the bundled word catalog."""
    text = resources.files(CONTENT_PACKAGE).joinpath(CATALOG_RESOURCE).read_text(encoding="utf-8-sig")
    return _catalog_from_dict(json.loads(text))


def load_catalog_from_path(path: Path | str) -> list[WordEntry]:
    """Load a catalog from a JSON file on disk."""
    raw = json.loads(Path(path).read_text(encoding="utf-8-sig"))
    if not isinstance(raw, dict):
        raise ValueError("Catalog file root must be a JSON object.")
    return _catalog_from_dict(raw)


def validate_catalog(entries: Sequence[WordEntry]) -> list[WordEntry]:
    """Return the entries as a list, failing fast when there is nothing to play."""
    if not entries:
        raise ValueError("Word catalog is empty.")
    return list(entries)


def shuffle(entries: Sequence[WordEntry], rng: random.Random | None = None) -> list[WordEntry]:
    """Return a uniformly random permutation of ``entries`` (Fisher-Yates).

    The input sequence is left untouched.
    """
    source = rng if rng is not None else random
    order = list(entries)
    for i in range(len(order) - 1, 0, -1):
        j = source.randint(0, i)
        order[i], order[j] = order[j], order[i]
    return order


def draw(order: Sequence[WordEntry], cursor: int) -> tuple[WordEntry, int]:
    """Return the entry at ``cursor`` and the advanced cursor.

    Reshuffling an exhausted order is up to the caller.
    """
    if cursor >= len(order):
        raise IndexError(f"Cursor {cursor} is past the end of an order of {len(order)} entries.")
    return order[cursor], cursor + 1
