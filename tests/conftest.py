from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from spellingbees.models import WordEntry  # noqa: E402
from spellingbees.session import SessionListener  # noqa: E402


class RecordingListener(SessionListener):
    """Collects every notification as (name, args) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, tuple[Any, ...]]] = []

    def on_round_loaded(self, cue: str, letter_count: int) -> None:
        self.events.append(("round_loaded", (cue, letter_count)))

    def on_letters_revealed(self, indices: frozenset[int], letters: tuple[str | None, ...]) -> None:
        self.events.append(("letters_revealed", (indices, letters)))

    def on_feedback(self, kind: Any, remaining_hidden: int) -> None:
        self.events.append(("feedback", (kind, remaining_hidden)))

    def on_round_won(self, score: int, high_score: int) -> None:
        self.events.append(("round_won", (score, high_score)))

    def on_invalid_action(self, reason: str) -> None:
        self.events.append(("invalid_action", (reason,)))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def last(self, name: str) -> tuple[Any, ...]:
        for event_name, args in reversed(self.events):
            if event_name == name:
                return args
        raise AssertionError(f"No {name} event recorded.")


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def small_catalog() -> list[WordEntry]:
    return [
        WordEntry(cue="🐝", word="bee"),
        WordEntry(cue="☀️", word="sun"),
        WordEntry(cue="🐱", word="cat"),
    ]
