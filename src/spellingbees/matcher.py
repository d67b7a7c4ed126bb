"""Strict prefix matching of guesses against a target word."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one guess."""

    match_count: int
    newly_revealed: tuple[int, ...]
    revealed: tuple[bool, ...]

    @property
    def newly_revealed_count(self) -> int:
        return len(self.newly_revealed)


def normalize(text: str) -> str:
    """Return the case-insensitive comparable form of a word or guess."""
    return text.casefold()


def prefix_length(target: str, guess: str) -> int:
    """Return how many leading characters of ``guess`` spell ``target``.

    Comparison stops at the first mismatch, so a wrong first letter means no
    match at all no matter what follows.
    """
    count = 0
    for expected, actual in zip(target, guess):
        # Per character so the count stays within len(target) even when
        # casefolding expands a letter.
        if normalize(expected) != normalize(actual):
            break
        count += 1
    return count


def match(target: str, revealed_before: Sequence[bool], guess: str) -> MatchResult:
    """Reveal every not-yet-revealed position inside the matched prefix.

    Already revealed positions stay revealed even when the guess no longer
    covers them.
    """
    if len(revealed_before) != len(target):
        raise ValueError("Revealed flags must have one entry per target letter.")

    match_count = prefix_length(target, guess)
    revealed = list(revealed_before)
    newly_revealed: list[int] = []
    for index in range(match_count):
        if not revealed[index]:
            revealed[index] = True
            newly_revealed.append(index)
    return MatchResult(match_count=match_count, newly_revealed=tuple(newly_revealed), revealed=tuple(revealed))
