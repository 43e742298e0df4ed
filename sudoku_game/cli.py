"""Command-line interface for the Sudoku game."""

import argparse
import json
import logging
import os
import sys
from typing import Callable, Optional

from .config import GameConfig
from .generator import SudokuGenerator, Difficulty
from .history import History, JsonHistoryStore, summarize, format_elapsed
from .session import GameSession, SessionState

DIFFICULTY_CHOICES = [d.value for d in Difficulty]

PLAY_HELP = """Commands:
  <row> <col> <value>   write a value (rows/cols 1-9, value 0 clears)
  hint                  reveal one cell
  pause / resume        stop or restart the clock
  history               show won games
  giveup                reveal the solution
  new [difficulty]      start another game
  show                  redraw the board
  quit                  leave"""


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku puzzle generator and game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 medio puzzles into a JSON file
  sudoku-game generate --count 5 --difficulty medio --output puzzles.json

  # Play a game in the terminal
  sudoku-game play --difficulty facil

  # Show history and draw charts of it
  sudoku-game history --plot results/
        """
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON settings file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log debug information"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="medio",
        help="Difficulty level (default: medio)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--folder", type=str, default=None,
        help="Also save each puzzle as a text file under this folder"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default="facil",
        help="Difficulty level (default: facil)"
    )
    play_parser.add_argument(
        "--history-file", type=str, default=None,
        help="History JSON file (default: from config)"
    )
    play_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # History command
    hist_parser = subparsers.add_parser("history", help="Show won games")
    hist_parser.add_argument(
        "--history-file", type=str, default=None,
        help="History JSON file (default: from config)"
    )
    hist_parser.add_argument(
        "--plot", type=str, default=None, metavar="DIR",
        help="Write charts of the history to DIR"
    )
    hist_parser.add_argument(
        "--clear", action="store_true",
        help="Delete all recorded games"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = GameConfig.load(args.config)
        if hasattr(args, "history_file"):
            config = config.override(history_path=args.history_file)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "play":
        cmd_play(args, config)
    elif args.command == "history":
        cmd_history(args, config)


def load_history(config: GameConfig) -> History:
    return History(JsonHistoryStore(config.history_path), max_entries=config.max_history)


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed)

    if args.difficulty == "all":
        difficulties = list(Difficulty)
    else:
        difficulties = [Difficulty(args.difficulty)]

    all_puzzles = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        pairs = generator.generate_batch(args.count, difficulty, show_progress=True)

        for i, (puzzle, solution) in enumerate(pairs, 1):
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.to_string(),
                "solution": solution.to_string(),
                "clues": puzzle.count_filled(),
                "hints": difficulty.hint_budget,
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({puzzle.count_filled()} clues) ---")
            print(puzzle)

        if args.folder:
            diff_dir = os.path.join(args.folder, difficulty.value)
            SudokuGenerator.save_to_folder(pairs, diff_dir, prefix=f"puzzle_{difficulty.value}")

    if args.folder:
        print(f"\nPuzzles also saved individually in the '{args.folder}/' directory")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_play(args, config: GameConfig):
    """Handle the play command."""
    session = GameSession(
        generator=SudokuGenerator(seed=args.seed),
        history=load_history(config),
        tick_seconds=config.tick_seconds,
        max_generation_attempts=config.max_generation_attempts,
    )
    session.start(args.difficulty)
    try:
        play_loop(session)
    finally:
        session.reset()


def render(session: GameSession) -> str:
    """Board plus a status line."""
    lines = [str(session.board)]
    status = (f"{session.difficulty.value} | {session.state.value} | "
              f"time {format_elapsed(session.elapsed_seconds)} | "
              f"hints {session.hints_remaining}/{session.hint_budget}")
    lines.append(status)
    conflicts = session.conflicts()
    if conflicts and session.state is SessionState.PLAYING:
        cells = ", ".join(f"({r + 1},{c + 1})" for r, c in sorted(conflicts))
        lines.append(f"Conflicts: {cells}")
    return "\n".join(lines)


def render_history(history: History) -> str:
    if not len(history):
        return "No games recorded yet."
    lines = []
    for i, entry in enumerate(history, 1):
        lines.append(f"{i:2d}. {entry.date[:19]}  {entry.difficulty:<8}  "
                     f"{format_elapsed(entry.time)}  hints used: {entry.hints_used}")
    return "\n".join(lines)


def play_loop(session: GameSession,
              read: Callable[[str], str] = input,
              write: Callable[[str], None] = print) -> None:
    """
    Drive a session from text commands until the player quits or input ends.

    ``read`` and ``write`` stand in for input() and print().
    """
    write(PLAY_HELP)
    write(render(session))

    while True:
        try:
            line = read("> ").strip()
        except EOFError:
            return
        if not line:
            continue

        words = line.lower().split()
        command = words[0]

        if command in ("quit", "exit", "q"):
            return
        elif command == "help":
            write(PLAY_HELP)
            continue
        elif command == "show":
            pass
        elif command == "hint":
            revealed = _run_hint(session)
            write(revealed)
        elif command == "pause":
            session.pause()
        elif command == "resume":
            session.resume()
        elif command == "giveup":
            session.give_up()
        elif command == "history":
            session.open_history()
            write(render_history(session.history))
            session.close_history()
            continue
        elif command == "new":
            difficulty = words[1] if len(words) > 1 else session.difficulty
            try:
                session.start(difficulty)
            except ValueError as e:
                write(str(e))
                continue
        else:
            move = _parse_move(words)
            if move is None:
                write("Unknown command, type 'help' for the list.")
                continue
            row, col, value = move
            if not session.set_cell(row, col, value):
                write("That cell can't be changed right now.")

        write(render(session))
        if session.state is SessionState.WON:
            write(f"Solved in {format_elapsed(session.elapsed_seconds)}! "
                  f"Type 'new' for another game or 'quit'.")
        elif session.state is SessionState.GAVE_UP:
            write("Solution revealed. Type 'new' for another game or 'quit'.")


def _run_hint(session: GameSession) -> str:
    if session.state is not SessionState.PLAYING:
        return "Hints are only available while playing."
    if session.hints_remaining <= 0:
        return "No hints left."
    cell = session.use_hint()
    if cell is None:
        return "No empty cell to reveal."
    return f"Revealed ({cell[0] + 1},{cell[1] + 1})."


def _parse_move(words) -> Optional[tuple]:
    if len(words) != 3 or not all(w.isdigit() for w in words):
        return None
    row, col, value = (int(w) for w in words)
    if not (1 <= row <= 9 and 1 <= col <= 9):
        return None
    return row - 1, col - 1, value


def cmd_history(args, config: GameConfig):
    """Handle the history command."""
    history = load_history(config)

    if args.clear:
        history.clear()
        print(f"History cleared ({config.history_path})")
        return

    print(render_history(history))

    summary = summarize(history)
    if summary:
        print("\nBy difficulty:")
        print("-" * 50)
        for difficulty, stats in summary.items():
            print(f"\n{difficulty}:")
            print(f"  Games: {stats['games']}")
            print(f"  Best Time: {format_elapsed(stats['best_time'])}")
            print(f"  Avg Time: {format_elapsed(round(stats['avg_time']))}")
            print(f"  Avg Hints Used: {stats['avg_hints_used']:.1f}")

    if args.plot:
        from .history.visualizer import HistoryVisualizer

        charts = HistoryVisualizer(history, args.plot).generate_all()
        if not charts:
            print("\nNothing to plot yet.")
        else:
            print(f"\nCharts saved to {args.plot}/")
            for chart in charts:
                print(f"  - {os.path.basename(chart)}")


if __name__ == "__main__":
    main()
