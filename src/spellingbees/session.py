"""Session controller: round-to-round flow, streak and high score."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .catalog import draw, shuffle, validate_catalog
from .models import FeedbackKind, SessionPhase, WordEntry
from .round import RoundState
from .scores import PersistenceError

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    """Key-value persistence for the high score."""

    def load_high_score(self) -> int: ...

    def save_high_score(self, value: int) -> None: ...


class SessionListener:
    """Receives presentation notifications from a session.

    Every callback is a no-op here; front ends override what they render.
    ``on_letters_revealed`` also carries the round's letters with hidden
    positions as ``None``, so a view never has to reach back into the session.
    """

    def on_round_loaded(self, cue: str, letter_count: int) -> None:
        pass

    def on_letters_revealed(self, indices: frozenset[int], letters: tuple[str | None, ...]) -> None:
        pass

    def on_feedback(self, kind: FeedbackKind, remaining_hidden: int) -> None:
        pass

    def on_round_won(self, score: int, high_score: int) -> None:
        pass

    def on_invalid_action(self, reason: str) -> None:
        pass


@dataclass(frozen=True)
class GuessOutcome:
    """Result of one accepted guess."""

    newly_revealed: tuple[int, ...]
    remaining_hidden: int
    attempts: int
    completed: bool


class SessionController:
    """Owns the session state and the single live round."""

    def __init__(
        self,
        catalog: Sequence[WordEntry],
        store: ScoreStore,
        listener: SessionListener | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Validate the catalog, read the high score and shuffle the first order."""
        self.catalog = validate_catalog(catalog)
        self.store = store
        self.listener = listener if listener is not None else SessionListener()
        self._rng = rng if rng is not None else random.Random()
        self._order = shuffle(self.catalog, self._rng)
        self._cursor = 0
        self._score = 0
        self._high_score = self._load_high_score()
        self._round: RoundState | None = None
        self._phase = SessionPhase.IDLE

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def order(self) -> tuple[WordEntry, ...]:
        return tuple(self._order)

    @property
    def current_round(self) -> RoundState | None:
        return self._round

    def start(self) -> bool:
        """Load the next word and begin accepting guesses."""
        if self._phase is not SessionPhase.IDLE:
            self._reject(f"Cannot start a round while {self._phase.value}.")
            return False
        self._load_next_round()
        return True

    def submit_guess(self, text: str) -> GuessOutcome | None:
        """Apply one typed guess to the live round.

        Returns None when the guess is ignored (blank input or wrong phase).
        """
        if self._phase is not SessionPhase.ROUND_ACTIVE or self._round is None:
            self._reject(f"Cannot guess while {self._phase.value}.")
            return None
        guess = text.strip()
        if not guess:
            return None

        current = self._round
        result = current.apply_guess(guess)
        self.listener.on_letters_revealed(frozenset(result.newly_revealed), tuple(current.revealed_letters()))

        completed = current.is_complete()
        if completed:
            self._complete_round(current)
        elif result.newly_revealed_count > 0:
            self.listener.on_feedback(FeedbackKind.PARTIAL, current.remaining_hidden())
        else:
            self.listener.on_feedback(FeedbackKind.NONE, current.remaining_hidden())

        return GuessOutcome(
            newly_revealed=result.newly_revealed,
            remaining_hidden=current.remaining_hidden(),
            attempts=current.attempts,
            completed=completed,
        )

    def advance(self) -> bool:
        """Move from a won round to the next word."""
        if self._phase is not SessionPhase.ROUND_COMPLETE:
            self._reject(f"Cannot advance while {self._phase.value}.")
            return False
        self._load_next_round()
        return True

    def reset_session(self) -> None:
        """Clear the streak, reshuffle and go back to idle; the high score is kept."""
        self._score = 0
        self._order = shuffle(self.catalog, self._rng)
        self._cursor = 0
        self._round = None
        self._phase = SessionPhase.IDLE
        logger.debug("Session reset")

    def _load_next_round(self) -> None:
        if self._cursor >= len(self._order):
            self._order = shuffle(self.catalog, self._rng)
            self._cursor = 0
            logger.debug("Catalog exhausted, reshuffled %d words", len(self._order))
        entry, self._cursor = draw(self._order, self._cursor)
        if self._round is None:
            self._round = RoundState(entry)
        else:
            self._round.initialize(entry)
        self._phase = SessionPhase.ROUND_ACTIVE
        logger.debug("Round loaded: %d letters (cursor %d/%d)", len(entry.word), self._cursor, len(self._order))
        self.listener.on_round_loaded(entry.cue, len(entry.word))

    def _complete_round(self, current: RoundState) -> None:
        self._phase = SessionPhase.ROUND_COMPLETE
        self._score += 1
        if self._score > self._high_score:
            self._high_score = self._score
            logger.info("New high score: %d", self._high_score)
            self._save_high_score()
        logger.info("Round won after %d attempts, streak %d", current.attempts, self._score)
        self.listener.on_round_won(self._score, self._high_score)

    def _load_high_score(self) -> int:
        try:
            return self.store.load_high_score()
        except PersistenceError as exc:
            logger.warning("Could not read high score, starting from 0: %s", exc)
            return 0

    def _save_high_score(self) -> None:
        try:
            self.store.save_high_score(self._high_score)
        except PersistenceError as exc:
            logger.warning("Could not persist high score %d: %s", self._high_score, exc)

    def _reject(self, reason: str) -> None:
        logger.debug("Invalid action: %s", reason)
        self.listener.on_invalid_action(reason)
