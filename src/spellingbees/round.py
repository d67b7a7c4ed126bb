"""State of one in-progress round."""

from __future__ import annotations

from .matcher import MatchResult, match
from .models import WordEntry


class RoundState:
    """Target word, per-letter reveal flags and attempt count for one round."""

    def __init__(self, target: WordEntry) -> None:
        self.target = target
        self.revealed: list[bool] = []
        self.attempts = 0
        self.initialize(target)

    def initialize(self, target: WordEntry) -> None:
        """Start over with every letter hidden and no attempts."""
        self.target = target
        self.revealed = [False] * len(target.word)
        self.attempts = 0

    def apply_guess(self, guess: str) -> MatchResult:
        """Count the attempt and merge the guess's reveals into this round."""
        self.attempts += 1
        result = match(self.target.word, self.revealed, guess)
        self.revealed[:] = result.revealed
        return result

    def is_complete(self) -> bool:
        return all(self.revealed)

    def remaining_hidden(self) -> int:
        return self.revealed.count(False)

    def revealed_letters(self) -> list[str | None]:
        """Return the letter at each revealed position and ``None`` elsewhere."""
        return [letter if shown else None for letter, shown in zip(self.target.word, self.revealed)]
