"""Tests for the command-line interface and the text front-end."""

import json
import random

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_game.cli import main, play_loop, render, _parse_move
from sudoku_game.config import GameConfig
from sudoku_game.generator import SudokuGenerator, Difficulty
from sudoku_game.history import History, HistoryEntry, JsonHistoryStore
from sudoku_game.session import GameSession, SessionState


class ManualTimer:
    def __init__(self, interval, callback):
        self.callback = callback

    def start(self):
        pass

    def cancel(self):
        pass


def make_session(history=None):
    return GameSession(
        generator=SudokuGenerator(seed=1),
        history=history if history is not None else History(),
        timer_factory=ManualTimer,
        rng=random.Random(1),
    )


def run_script(session, commands):
    output = []
    inputs = iter(commands)

    def read(prompt):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    play_loop(session, read=read, write=output.append)
    return "\n".join(output)


class TestPlayLoop:
    """Tests for the interactive loop."""

    def test_moves_are_one_based(self):
        session = make_session()
        session.start(Difficulty.FACIL)
        row, col = session.board.get_empty_cells()[0]

        run_script(session, [f"{row + 1} {col + 1} 7"])
        assert session.get_cell(row, col).value == 7

    def test_win_through_commands(self):
        session = make_session()
        session.start(Difficulty.TUTORIAL)
        moves = [
            f"{r + 1} {c + 1} {session.solution.get(r, c)}"
            for r, c in session.board.get_empty_cells()
        ]

        output = run_script(session, moves + ["quit"])
        assert session.state is SessionState.WON
        assert "Solved in" in output
        assert len(session.history) == 1

    def test_fixed_cell_message(self):
        session = make_session()
        session.start(Difficulty.TUTORIAL)
        row, col = next((r, c) for r in range(9) for c in range(9) if session.board.is_fixed(r, c))

        output = run_script(session, [f"{row + 1} {col + 1} 0"])
        assert "can't be changed" in output

    def test_hint_pause_giveup(self):
        session = make_session()
        session.start(Difficulty.MEDIO)

        output = run_script(session, ["hint", "pause", "hint", "resume", "giveup"])
        assert "Revealed" in output
        assert "only available while playing" in output
        assert session.hints_remaining == 2
        assert session.state is SessionState.GAVE_UP
        assert "Solution revealed" in output

    def test_no_hints_left(self):
        session = make_session()
        session.start(Difficulty.EXPERT)
        assert "No hints left." in run_script(session, ["hint"])

    def test_history_command(self):
        history = History()
        history.record(HistoryEntry.create("facil", 125, 1, "0" * 81))
        session = make_session(history)
        session.start(Difficulty.FACIL)

        output = run_script(session, ["history"])
        assert "facil" in output
        assert "02:05" in output
        assert not session.history_open

    def test_new_game(self):
        session = make_session()
        session.start(Difficulty.FACIL)
        output = run_script(session, ["new expert", "new nonsense"])
        assert session.difficulty is Difficulty.EXPERT
        assert "Unknown difficulty" in output

    def test_unknown_command(self):
        session = make_session()
        session.start(Difficulty.FACIL)
        assert "Unknown command" in run_script(session, ["dance"])

    def test_render_status(self):
        session = make_session()
        session.start(Difficulty.DIFICIL)
        text = render(session)
        assert "dificil | playing | time 00:00 | hints 1/1" in text

    @pytest.mark.parametrize("words, expected", [
        (["1", "1", "5"], (0, 0, 5)),
        (["9", "9", "0"], (8, 8, 0)),
        (["0", "1", "5"], None),
        (["10", "1", "5"], None),
        (["1", "a", "5"], None),
        (["1", "1"], None),
    ])
    def test_parse_move(self, words, expected):
        assert _parse_move(words) == expected


class TestMain:
    """Tests for the argparse entry point."""

    def test_generate_to_json(self, tmp_path, capsys):
        output = tmp_path / "puzzles.json"
        main(["generate", "-n", "2", "-d", "tutorial", "-s", "4", "-o", str(output)])

        data = json.loads(output.read_text())
        assert len(data) == 2
        assert data[0]["difficulty"] == "tutorial"
        assert data[0]["clues"] == 71
        assert data[0]["hints"] == 7
        assert len(data[0]["solution"]) == 81
        assert "Total puzzles generated: 2" in capsys.readouterr().out

    def test_generate_to_folder(self, tmp_path):
        main(["generate", "-n", "1", "-d", "facil", "-s", "4", "--folder", str(tmp_path)])
        assert (tmp_path / "facil" / "puzzle_facil_1.txt").exists()

    def test_history_summary(self, tmp_path, capsys):
        path = tmp_path / "history.json"
        history = History(JsonHistoryStore(str(path)))
        history.record(HistoryEntry.create("medio", 200, 2, "0" * 81))
        history.record(HistoryEntry.create("medio", 100, 0, "1" * 81))

        main(["history", "--history-file", str(path)])
        out = capsys.readouterr().out
        assert "Games: 2" in out
        assert "Best Time: 01:40" in out
        assert "Avg Time: 02:30" in out

    def test_history_plot_and_clear(self, tmp_path, capsys):
        path = tmp_path / "history.json"
        History(JsonHistoryStore(str(path))).record(HistoryEntry.create("facil", 90, 0, "0" * 81))

        main(["history", "--history-file", str(path), "--plot", str(tmp_path / "charts")])
        assert (tmp_path / "charts" / "time_by_difficulty.png").exists()

        main(["history", "--history-file", str(path), "--clear"])
        assert json.loads(path.read_text()) == []

    def test_empty_history(self, tmp_path, capsys):
        main(["history", "--history-file", str(tmp_path / "none.json")])
        assert "No games recorded yet." in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestGameConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = GameConfig()
        assert config.max_history == 50
        assert config.max_generation_attempts == 10
        assert config.tick_seconds == 1.0

    def test_load_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_history": 20, "history_path": "h.json", "unknown": 1}))
        config = GameConfig.load(str(path))
        assert config.max_history == 20
        assert config.history_path == "h.json"
        assert config.max_generation_attempts == 10

    def test_missing_file_gives_defaults(self, tmp_path):
        assert GameConfig.load(str(tmp_path / "missing.json")) == GameConfig()
        assert GameConfig.load(None) == GameConfig()

    @pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"max_history": 0}', '{"tick_seconds": "fast"}'])
    def test_bad_file_gives_defaults(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)
        assert GameConfig.load(str(path)) == GameConfig()

    def test_override_ignores_none(self):
        config = GameConfig().override(history_path=None, max_history=5)
        assert config.history_path == GameConfig().history_path
        assert config.max_history == 5

    def test_override_validates(self):
        with pytest.raises(ValueError):
            GameConfig().override(max_generation_attempts=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
