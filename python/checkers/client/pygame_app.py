"""Pygame front-end for playing checkers against the minimax AI."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise SystemExit(
        "Pygame is required for the graphical client. Install it with 'pip install pygame'."
    ) from exc

from ..ai import MinimaxAgent
from ..game.board import BOARD_SIZE, Color, Move, Square
from ..game.match import Game, GameResult
from ..game.rules import has_capture


# ---------------------------------------------------------------------------
# Rendering configuration
# ---------------------------------------------------------------------------

WINDOW_WIDTH = 1020
WINDOW_HEIGHT = 760
FPS = 30

BOARD_LEFT = 300
BOARD_TOP = 40
CELL = 80

LIGHT_SQUARE = (240, 217, 181)
DARK_SQUARE = (121, 85, 72)
PIECE_COLORS = {Color.RED: (211, 47, 47), Color.BLACK: (38, 38, 38)}
PIECE_OUTLINE = (250, 250, 250)
KING_MARK = (255, 193, 7)
SELECTION_COLOR = (255, 152, 0)
HIGHLIGHT_MOVE = (129, 199, 132, 140)
HIGHLIGHT_CAPTURE = (239, 83, 80, 160)
TEXT_COLOR = (33, 33, 33)

PIECE_RADIUS = 30
DEPTH_CYCLE = {1: 3, 3: 5, 5: 1}
HISTORY_LIMIT = 40


def square_at(pos: Tuple[int, int]) -> Optional[Square]:
    x, y = pos
    col = (x - BOARD_LEFT) // CELL
    row = (y - BOARD_TOP) // CELL
    square = Square(row, col)
    if x < BOARD_LEFT or y < BOARD_TOP or not square.on_board:
        return None
    return square


def square_center(square: Square) -> Tuple[int, int]:
    return (
        BOARD_LEFT + square.col * CELL + CELL // 2,
        BOARD_TOP + square.row * CELL + CELL // 2,
    )


@dataclass
class Button:
    label: str
    rect: pygame.Rect

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, hovered: bool) -> None:
        base_color = (76, 175, 80) if "Depth" in self.label else (33, 150, 243)
        color = tuple(min(c + 40, 255) for c in base_color) if hovered else base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=6)
        pygame.draw.rect(surface, (13, 71, 161), self.rect, width=2, border_radius=6)
        text_surf = font.render(self.label, True, (255, 255, 255))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


class CheckersPygameApp:
    def __init__(self) -> None:
        pygame.init()
        pygame.display.set_caption("Checkers - Human vs AI (Pygame)")
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        self.font_small = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 32)

        self.buttons = [
            Button("New Game", pygame.Rect(40, WINDOW_HEIGHT - 70, 140, 45)),
            Button("Undo", pygame.Rect(40, WINDOW_HEIGHT - 130, 100, 45)),
            Button("Depth: 3", pygame.Rect(40, WINDOW_HEIGHT - 190, 140, 45)),
            Button("Switch Color", pygame.Rect(40, WINDOW_HEIGHT - 250, 160, 45)),
        ]

        self.human_player = Color.RED
        self.depth = 3
        self.game = Game(ai_depth=self.depth, ai_color=self.human_player.opponent())

        self.partial_path: List[Square] = []
        self.highlight_moves: List[Move] = []
        self.message: Optional[str] = None

        self.history: List[Game] = []
        self.pending_ai: bool = False

    # ------------------------------------------------------------------
    # Game flow helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.game = Game(ai_depth=self.depth, ai_color=self.human_player.opponent())
        self.partial_path = []
        self.highlight_moves = []
        self.message = None
        self.history = []
        self.pending_ai = self.game.turn is self.game.ai_color

    def toggle_player_color(self) -> None:
        self.human_player = self.human_player.opponent()
        self.reset()

    def set_ai_depth(self, depth: int) -> None:
        self.depth = depth
        self.game.agent = MinimaxAgent(depth=depth)
        self.buttons[2].label = f"Depth: {depth}"

    def undo(self) -> None:
        if not self.history:
            return
        self.game = self.history.pop()
        # Snapshots carry the agent they were taken with
        self.game.agent = MinimaxAgent(depth=self.depth)
        self.message = "Undid last move"
        self.partial_path = []
        self.highlight_moves = []
        self.pending_ai = False

    def _push_history(self) -> None:
        # Boards are replaced, never mutated, so a shallow copy is a full snapshot
        self.history.append(copy.copy(self.game))
        if len(self.history) > HISTORY_LIMIT:
            self.history = self.history[-HISTORY_LIMIT:]

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_click(self, pos: Tuple[int, int]) -> None:
        for button in self.buttons:
            if button.contains(pos):
                self._handle_button(button)
                return

        if self.game.result is not GameResult.ONGOING or self.game.turn is not self.human_player:
            return

        clicked = square_at(pos)
        if clicked is None:
            self._clear_selection()
            return

        piece = self.game.board.piece_at(clicked)
        if piece is not None and piece.color is self.human_player and not self.partial_path[1:]:
            self.partial_path = [clicked]
            self.highlight_moves = [m for m in self.game.legal_moves() if m.origin == clicked]
            if not self.highlight_moves and has_capture(self.game.board, self.human_player):
                self.message = "A capture is available - you must jump"
            return

        if not self.partial_path:
            return

        path = self.partial_path + [clicked]
        matching = [m for m in self.highlight_moves if list(m.path[: len(path)]) == path]
        if not matching:
            return

        complete = next((m for m in matching if len(m.path) == len(path)), None)
        if complete is None:
            # Multi-jump in progress
            self.partial_path = path
            self.highlight_moves = matching
            self.message = "Continue capture with the same piece"
            return

        self._push_history()
        result = self.game.apply_player_move(self.human_player, complete)
        if not result.legal:
            self.message = f"Illegal move: {result.error}"
            return

        self.message = self._format_move_message("You", complete)
        self._clear_selection()
        if not self._report_winner():
            self.pending_ai = True

    def _handle_button(self, button: Button) -> None:
        if button.label.startswith("New"):
            self.reset()
        elif button.label.startswith("Undo"):
            self.undo()
        elif button.label.startswith("Depth"):
            self.set_ai_depth(DEPTH_CYCLE.get(self.depth, 3))
        elif button.label.startswith("Switch"):
            self.toggle_player_color()

    def _clear_selection(self) -> None:
        self.partial_path = []
        self.highlight_moves = []

    def _report_winner(self) -> bool:
        winner = self.game.result.winner
        if winner is None:
            return False
        self.message = "You win!" if winner is self.human_player else "AI wins!"
        self.pending_ai = False
        return True

    # ------------------------------------------------------------------
    # AI turn
    # ------------------------------------------------------------------
    def update_ai(self) -> None:
        if not self.pending_ai or self.game.turn is not self.game.ai_color:
            return

        move = self.game.ai_move_if_turn()
        self.pending_ai = False
        if move is None:
            self.message = "AI has no moves. You win!"
            return

        self.message = self._format_move_message("AI", move)
        self._report_winner()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill((250, 250, 250))
        self._draw_squares()
        self._draw_highlights()
        self._draw_pieces()
        self._draw_ui()

    def _draw_squares(self) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                color = DARK_SQUARE if (row + col) % 2 == 1 else LIGHT_SQUARE
                rect = pygame.Rect(BOARD_LEFT + col * CELL, BOARD_TOP + row * CELL, CELL, CELL)
                pygame.draw.rect(self.screen, color, rect)

    def _draw_pieces(self) -> None:
        for square, piece in self.game.board.pieces():
            x, y = square_center(square)
            pygame.draw.circle(self.screen, PIECE_COLORS[piece.color], (x, y), PIECE_RADIUS)
            pygame.draw.circle(self.screen, PIECE_OUTLINE, (x, y), PIECE_RADIUS, 3)
            if piece.king:
                pygame.draw.circle(self.screen, KING_MARK, (x, y), PIECE_RADIUS // 3)

        for square in self.partial_path:
            pygame.draw.circle(self.screen, SELECTION_COLOR, square_center(square), PIECE_RADIUS + 5, width=3)

    def _draw_highlights(self) -> None:
        step = len(self.partial_path)
        for move in self.highlight_moves:
            if step >= len(move.path):
                continue
            x, y = square_center(move.path[step])
            surf = pygame.Surface((CELL, CELL), pygame.SRCALPHA)
            color = HIGHLIGHT_CAPTURE if move.is_capture() else HIGHLIGHT_MOVE
            pygame.draw.circle(surf, color, (CELL // 2, CELL // 2), PIECE_RADIUS - 4)
            self.screen.blit(surf, (x - CELL // 2, y - CELL // 2))

    def _draw_ui(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(self.screen, self.font_small, button.contains(mouse_pos))

        status_lines = [
            f"You: {self.human_player.name.title()}",
            f"Turn: {'You' if self.game.turn is self.human_player else 'AI'}",
            f"Depth: {self.depth}",
        ]

        for idx, line in enumerate(status_lines):
            text = self.font_medium.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (40, 40 + idx * 32))

        if self.message:
            msg = self.font_small.render(self.message, True, (94, 53, 177))
            self.screen.blit(msg, (40, 160))

        counts = self.font_small.render(
            f"You: {self.game.remaining(self.human_player)}  |  AI: {self.game.remaining(self.game.ai_color)}",
            True,
            TEXT_COLOR,
        )
        self.screen.blit(counts, (40, 200))

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _format_move_message(actor: str, move: Move) -> str:
        if move.is_capture():
            return f"{actor} captured {len(move.captured_squares())}: {move}"
        return f"{actor} moved {move}"

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.update_ai()
            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()
        sys.exit(0)


def main() -> int:
    app = CheckersPygameApp()
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
