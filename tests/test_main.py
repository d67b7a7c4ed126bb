import json
import logging
import random
from pathlib import Path
from typing import Any

import spellingbees.main as main
from spellingbees.models import FeedbackKind, WordEntry
from spellingbees.scores import HIGH_SCORE_KEY, HighScoreStore, MemoryScoreStore
from spellingbees.session import SessionController


def _play(words: list[str], inputs: list[str], store: Any = None) -> tuple[int, list[str], list[float]]:
    outputs: list[str] = []
    pauses: list[float] = []
    view = main.TerminalView(print_fn=outputs.append, pause_fn=pauses.append, rng=random.Random(0))
    catalog = [WordEntry(cue=f"<{word}>", word=word) for word in words]
    controller = SessionController(
        catalog,
        store if store is not None else MemoryScoreStore(),
        listener=view,
        rng=random.Random(0),
    )
    feed = iter(inputs)
    code = main.play_shell(controller, view, input_fn=lambda _: next(feed))
    return code, outputs, pauses


def test_congrats_delay_scales_with_word_length() -> None:
    assert main.congrats_delay(3) == 1.01
    assert main.congrats_delay(0) == 0.8


def test_play_shell_partial_and_win() -> None:
    code, outputs, pauses = _play(["bee"], ["be", "bee", ":q"])
    assert code == 0
    assert "<bee>" in outputs[3]
    assert "_ _ _" in outputs
    assert "b e _" in outputs
    assert "Nice! 1 letter left. Try again!" in outputs
    assert "b e e" in outputs
    assert any(line in main.CONGRATS_MESSAGES for line in outputs)
    assert "Score: 1  High score: 1" in outputs
    assert pauses == [main.congrats_delay(3)]


def test_play_shell_no_progress_message() -> None:
    _, outputs, _ = _play(["sun"], ["fun", ":quit"])
    assert "Not quite, try again!" in outputs


def test_plural_remaining_letters() -> None:
    _, outputs, _ = _play(["honey"], ["h", ":q"])
    assert "Nice! 4 letters left. Try again!" in outputs


def test_enter_after_win_loads_next_word() -> None:
    _, outputs, _ = _play(["cat"], ["", "cat", "", "cat", ":q"])
    assert outputs.count("\n<cat>") == 2
    assert "Score: 2  High score: 2" in outputs


def test_guess_after_win_is_rejected() -> None:
    _, outputs, _ = _play(["cat"], ["cat", "cat", ":q"])
    assert "Cannot guess while round_complete." in outputs


def test_next_command_before_win_is_rejected() -> None:
    _, outputs, _ = _play(["cat"], [":next", ":q"])
    assert "Cannot advance while round_active." in outputs


def test_reset_command_clears_streak() -> None:
    store = MemoryScoreStore()
    _, outputs, _ = _play(["cat"], ["cat", ":reset", ":q"], store)
    assert "Session reset." in outputs
    assert "Score: 0  High score: 1" in outputs
    assert store.values[HIGH_SCORE_KEY] == "1"


def test_end_of_input_exits_cleanly() -> None:
    outputs: list[str] = []
    view = main.TerminalView(print_fn=outputs.append, pause_fn=None)
    controller = SessionController([WordEntry(cue="🐝", word="bee")], MemoryScoreStore(), listener=view)

    def raise_eof(_: str) -> str:
        raise EOFError

    assert main.play_shell(controller, view, input_fn=raise_eof) == 0


def test_view_renders_from_notifications_alone() -> None:
    outputs: list[str] = []
    pauses: list[float] = []
    view = main.TerminalView(print_fn=outputs.append, pause_fn=pauses.append, rng=random.Random(1))
    view.on_round_loaded("🍯", 5)
    view.on_letters_revealed(frozenset({0, 1}), ("h", "o", None, None, None))
    view.on_letters_revealed(frozenset(), ("h", "o", None, None, None))
    view.on_feedback(FeedbackKind.NONE, 3)
    view.on_round_won(3, 4)
    assert outputs[:4] == ["\n🍯", "_ _ _ _ _", "h o _ _ _", "Not quite, try again!"]
    assert outputs[-2] == "Score: 3  High score: 4"
    assert pauses == [main.congrats_delay(5)]


def test_corrupt_database_falls_back_to_memory_store(monkeypatch: Any, tmp_path: Path, caplog: Any) -> None:
    db_path = tmp_path / "scores.db"
    db_path.write_bytes(b"this is not an sqlite database, just noise" * 64)
    captured: dict[str, Any] = {}

    def fake_play_shell(controller: SessionController, view: main.TerminalView) -> int:
        captured["store"] = controller.store
        captured["high_score"] = controller.high_score
        controller.start()
        controller.submit_guess(controller.current_round.target.word)  # type: ignore[union-attr]
        captured["score"] = controller.score
        return 0

    monkeypatch.setattr(main, "play_shell", fake_play_shell)
    with caplog.at_level(logging.WARNING, logger="spellingbees.main"):
        code = main.run(["--db", str(db_path), "--no-delay"])
    assert code == 0
    assert isinstance(captured["store"], MemoryScoreStore)
    assert captured["high_score"] == 0
    assert captured["score"] == 1
    assert "High score will not be saved" in caplog.text


def test_uncreatable_database_directory_falls_back(monkeypatch: Any, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    captured: dict[str, Any] = {}

    def fake_play_shell(controller: SessionController, view: main.TerminalView) -> int:
        captured["store"] = controller.store
        return 0

    monkeypatch.setattr(main, "play_shell", fake_play_shell)
    assert main.run(["--db", str(blocker / "nested" / "scores.db"), "--no-delay"]) == 0
    assert isinstance(captured["store"], MemoryScoreStore)


def test_run_uses_words_file_and_database(monkeypatch: Any, tmp_path: Path) -> None:
    words_path = tmp_path / "words.json"
    words_path.write_text(json.dumps({"words": [{"cue": "🐸", "word": "frog"}]}), encoding="utf-8")
    db_path = tmp_path / "scores.db"
    captured: dict[str, Any] = {}

    def fake_play_shell(controller: SessionController, view: main.TerminalView) -> int:
        captured["catalog"] = controller.catalog
        captured["pause_fn"] = view.pause_fn
        controller.start()
        controller.submit_guess("frog")
        return 0

    monkeypatch.setattr(main, "play_shell", fake_play_shell)
    code = main.run(["play", "--words", str(words_path), "--db", str(db_path), "--seed", "3", "--no-delay"])
    assert code == 0
    assert captured["catalog"] == [WordEntry(cue="🐸", word="frog")]
    assert captured["pause_fn"] is None

    store = HighScoreStore(db_path)
    assert store.load_high_score() == 1
    store.close()


def test_run_memory_store_with_bundled_catalog(monkeypatch: Any) -> None:
    captured: dict[str, Any] = {}

    def fake_play_shell(controller: SessionController, view: main.TerminalView) -> int:
        captured["store"] = controller.store
        captured["words"] = len(controller.catalog)
        return 0

    monkeypatch.setattr(main, "play_shell", fake_play_shell)
    assert main.run(["--memory"]) == 0
    assert isinstance(captured["store"], MemoryScoreStore)
    assert captured["words"] > 1


def test_main_entry_exits_with_run_code(monkeypatch: Any) -> None:
    monkeypatch.setattr(main, "run", lambda: 0)
    try:
        main.main_entry()
        raise AssertionError("Expected SystemExit.")
    except SystemExit as exc:
        assert exc.code == 0
