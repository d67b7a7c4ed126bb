"""Core domain models for the spelling game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class WordEntry:
    """One catalog item: a pictogram cue and the word it stands for."""

    cue: str
    word: str


class SessionPhase(Enum):
    """Lifecycle phase of a game session."""

    IDLE = "idle"
    ROUND_ACTIVE = "round_active"
    ROUND_COMPLETE = "round_complete"


class FeedbackKind(Enum):
    """Advisory feedback after a guess that did not finish the round."""

    PARTIAL = "partial"
    NONE = "none"
