"""Terminal front end for the spelling game."""

from __future__ import annotations

import argparse
import logging
import random
import time
from collections.abc import Callable
from pathlib import Path

from .catalog import load_catalog, load_catalog_from_path
from .models import FeedbackKind, SessionPhase
from .scores import HighScoreStore, MemoryScoreStore, PersistenceError
from .session import SessionController, SessionListener

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
PauseFn = Callable[[float], None]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(".spellingbees") / "scores.db"
NEXT_COMMANDS = {":next", ":n"}
RESET_COMMANDS = {":reset"}
QUIT_COMMANDS = {":quit", ":exit", ":q"}
CONGRATS_MESSAGES = (
    "Great spelling! 🌟",
    "You did it! 🎉",
    "Wonderful! ⭐",
    "Amazing work! 🏆",
    "Bee-utiful! 🐝",
    "Super speller! 💪",
)


def congrats_delay(letter_count: int) -> float:
    """Seconds to let the reveal settle before congratulating."""
    return (letter_count * 70 + 800) / 1000


class TerminalView(SessionListener):
    """Renders session notifications as lines of text."""

    def __init__(
        self,
        print_fn: PrintFn = print,
        pause_fn: PauseFn | None = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.print_fn = print_fn
        self.pause_fn = pause_fn
        self.rng = rng if rng is not None else random.Random()
        self.letter_count = 0

    def on_round_loaded(self, cue: str, letter_count: int) -> None:
        self.letter_count = letter_count
        self.print_fn(f"\n{cue}")
        self.print_fn(" ".join("_" for _ in range(letter_count)))

    def on_letters_revealed(self, indices: frozenset[int], letters: tuple[str | None, ...]) -> None:
        if indices:
            self.print_fn(" ".join(letter if letter is not None else "_" for letter in letters))

    def on_feedback(self, kind: FeedbackKind, remaining_hidden: int) -> None:
        if kind is FeedbackKind.PARTIAL:
            plural = "" if remaining_hidden == 1 else "s"
            self.print_fn(f"Nice! {remaining_hidden} letter{plural} left. Try again!")
        else:
            self.print_fn("Not quite, try again!")

    def on_round_won(self, score: int, high_score: int) -> None:
        if self.pause_fn is not None:
            self.pause_fn(congrats_delay(self.letter_count))
        self.print_fn(self.rng.choice(CONGRATS_MESSAGES))
        self.print_fn(f"Score: {score}  High score: {high_score}")
        self.print_fn("Press Enter for the next word.")

    def on_invalid_action(self, reason: str) -> None:
        self.print_fn(reason)


def _open_store(db_path: Path) -> HighScoreStore | MemoryScoreStore:
    """Open the score database, keeping the high score in memory when that fails."""
    try:
        return HighScoreStore(db_path)
    except PersistenceError as exc:
        logger.warning("High score will not be saved this session: %s", exc)
        return MemoryScoreStore()


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="spellingbees", description="Spell the word behind the picture")
    parser.add_argument("command", nargs="?", default="play", choices=["play"])
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="high score database path")
    parser.add_argument("--memory", action="store_true", help="keep the high score in memory only")
    parser.add_argument("--words", type=Path, default=None, help="JSON word catalog to play instead of the bundled one")
    parser.add_argument("--seed", type=int, default=None, help="seed for word order and messages")
    parser.add_argument("--no-delay", action="store_true", help="congratulate without waiting")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    catalog = load_catalog_from_path(args.words) if args.words is not None else load_catalog()
    store = MemoryScoreStore() if args.memory else _open_store(args.db)
    rng = random.Random(args.seed)
    view = TerminalView(pause_fn=None if args.no_delay else time.sleep, rng=rng)
    try:
        controller = SessionController(catalog, store, listener=view, rng=rng)
        return play_shell(controller, view)
    finally:
        store.close()


def play_shell(controller: SessionController, view: TerminalView, input_fn: InputFn = input) -> int:
    """Read guesses and commands until the player quits."""
    print_fn = view.print_fn
    print_fn("=== Spelling Bees ===")
    print_fn("Type the word for each picture. Commands: :next, :reset, :q")
    print_fn(f"Score: {controller.score}  High score: {controller.high_score}")
    controller.start()

    while True:
        try:
            text = input_fn("Guess: ")
        except EOFError:
            return 0
        command = text.strip().lower()
        if command in QUIT_COMMANDS:
            return 0
        if command in RESET_COMMANDS:
            controller.reset_session()
            print_fn("Session reset.")
            print_fn(f"Score: {controller.score}  High score: {controller.high_score}")
            controller.start()
        elif command in NEXT_COMMANDS or (not command and controller.phase is SessionPhase.ROUND_COMPLETE):
            controller.advance()
        else:
            controller.submit_guess(text)


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
