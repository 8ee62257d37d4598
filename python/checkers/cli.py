"""Command-line interface for playing checkers against an AI opponent."""

from __future__ import annotations

import sys
from typing import List, Optional

from .ai import GreedyAgent, MinimaxAgent
from .game.board import Board, Color, Move
from .game.match import Game, GameResult
from .game.rules import apply_move


QUIT_WORDS = {"q", "quit", "exit"}
MAX_AI_TURNS = 300


def _render_board(board: Board, turn: Color) -> None:
    print(f"\nTurn: {turn.name}")
    print(board.ascii())


def _parse_move(text: str, options: List[Move]) -> Optional[Move]:
    # Accept either a list index or a path such as "5,2 3,4"
    if text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(options):
            return options[index]
        return None

    try:
        coords = [tuple(int(part) for part in token.split(",")) for token in text.split()]
        candidate = Move.from_coords(coords)
    except ValueError:
        return None
    return next((move for move in options if move.path == candidate.path), None)


def _prompt_depth(prompt: str, default: int = 3) -> int:
    try:
        depth_input = input(prompt).strip()
        return max(1, int(depth_input)) if depth_input else default
    except ValueError:
        print(f"Invalid depth entered; using default depth of {default}.")
        return default


def _human_turn(game: Game) -> bool:
    options = game.legal_moves()
    while True:
        _render_board(game.board, game.turn)
        for number, move in enumerate(options, start=1):
            print(f"  {number:2}) {move}")

        try:
            text = input("Choose a move by number or path (e.g. 5,2 4,3), q to quit: ").strip()
        except EOFError:
            return False
        if text.lower() in QUIT_WORDS:
            return False

        move = _parse_move(text, options)
        if move is None:
            print("Not one of the legal moves. Try again.")
            continue

        result = game.apply_player_move(game.human_color, move)
        if not result.legal:
            print(f"Illegal move: {result.error}. Try again.")
            continue

        print(f"You played {move}.")
        if result.captured:
            print(f"Captured {len(result.captured)} piece(s).")
        return True


def _ai_turn(game: Game) -> bool:
    move = game.ai_move_if_turn()
    if move is None:
        return False
    print(f"AI plays {move}.")
    return True


def _announce(game: Game) -> None:
    _render_board(game.board, game.turn)
    winner = game.result.winner
    if winner is None:
        return
    if winner is game.human_color:
        print("Congratulations! You win!")
    else:
        print("AI wins! Better luck next time.")


def _choose_color() -> Color:
    while True:
        choice = input("Play as Red (R) or Black (B)? Red moves first [R/B]: ").strip().lower()
        if choice in {"r", "red"}:
            return Color.RED
        if choice in {"b", "black"}:
            return Color.BLACK
        print("Please type 'R' or 'B'.")


def _run_human_vs_ai() -> int:
    human = _choose_color()
    depth = _prompt_depth("Select AI search depth [default 3]: ")
    game = Game(ai_depth=depth, ai_color=human.opponent())

    print("Game start! Enter 'q' at any prompt to quit.")

    while game.result is GameResult.ONGOING:
        if game.turn is game.human_color:
            if not _human_turn(game):
                print("Thanks for playing!")
                return 0
        elif not _ai_turn(game):
            break

    _announce(game)
    return 0


def _run_ai_vs_ai() -> int:
    depth = _prompt_depth("Select Minimax search depth for AI 1 (Red) [default 3]: ")
    show_board = input("Display board after each move? [y/N]: ").strip().lower() in {"y", "yes"}

    agents = {
        Color.RED: ("AI 1 (Minimax)", MinimaxAgent(depth=depth)),
        Color.BLACK: ("AI 2 (Greedy)", GreedyAgent()),
    }

    print("Game start! AI 1 plays Red (first), AI 2 plays Black.")

    board = Board.initial()
    turn = Color.RED
    for turn_counter in range(1, MAX_AI_TURNS + 1):
        label, agent = agents[turn]
        move = agent.choose_move(board, turn)
        if move is None:
            print(f"{label} has no legal moves. {agents[turn.opponent()][0]} wins!")
            break

        board = apply_move(board, move)
        print(f"Turn {turn_counter}: {label} plays {move}.")
        if show_board:
            _render_board(board, turn.opponent())
        turn = turn.opponent()
    else:
        print(f"No result after {MAX_AI_TURNS} moves; calling it a draw.")

    print("AI vs AI match complete.")
    return 0


def main(argv: list[str] | None = None) -> int:
    while True:
        mode = input("Select mode: 1) Human vs AI  2) AI vs AI : ").strip()
        if mode in {"1", "2"}:
            break
        print("Invalid selection. Please choose 1 or 2.")

    if mode == "1":
        return _run_human_vs_ai()

    return _run_ai_vs_ai()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
