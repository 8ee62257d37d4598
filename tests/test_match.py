import pytest

from checkers.ai import SearchConfigError
from checkers.game.board import Board, Color, Move, Piece
from checkers.game.match import Game, GameResult


def test_new_game_state():
    game = Game()
    assert game.turn is Color.RED
    assert game.result is GameResult.ONGOING
    assert game.ai_color is Color.BLACK
    assert game.human_color is Color.RED
    assert game.remaining(Color.RED) == 12
    assert game.remaining(Color.BLACK) == 12
    assert len(game.id) == 32
    assert Game().id != game.id
    assert Game(game_id="fixed").id == "fixed"


def test_invalid_depth_fails_fast():
    with pytest.raises(SearchConfigError):
        Game(ai_depth=0)


def test_rejects_wrong_turn():
    game = Game(ai_depth=1)
    result = game.apply_player_move(Color.BLACK, Move.from_coords([(2, 1), (3, 0)]))
    assert not result.legal
    assert result.error == "not_your_turn"
    assert game.board == Board.initial()


def test_rejects_move_not_in_legal_list():
    game = Game(ai_depth=1)
    result = game.apply_player_move(Color.RED, Move.from_coords([(5, 0), (3, 2)]))
    assert not result.legal
    assert result.error == "illegal_move"
    assert game.turn is Color.RED


def test_move_then_ai_reply():
    game = Game(ai_depth=2)
    assert game.ai_move_if_turn() is None

    result = game.apply_player_move(Color.RED, Move.from_coords([(5, 0), (4, 1)]))
    assert result.legal
    assert result.captured == ()
    assert result.winner is None
    assert game.turn is Color.BLACK
    assert game.board.get(4, 1) == Piece(Color.RED)

    reply = game.ai_move_if_turn()
    assert reply is not None
    assert reply.origin.row == 2
    assert game.turn is Color.RED


def test_ai_opens_when_playing_red():
    game = Game(ai_depth=1, ai_color=Color.RED)
    assert game.human_color is Color.BLACK
    move = game.ai_move_if_turn()
    assert move is not None
    assert game.turn is Color.BLACK
    assert game.remaining(Color.RED) == 12


def test_capturing_last_piece_wins():
    game = Game(ai_depth=1)
    board = Board()
    board.set(5, 2, Piece(Color.RED))
    board.set(4, 3, Piece(Color.BLACK))
    game.board = board

    result = game.apply_player_move(Color.RED, Move.from_coords([(5, 2), (3, 4)]))
    assert result.legal
    assert [(sq.row, sq.col) for sq in result.captured] == [(4, 3)]
    assert result.winner is Color.RED
    assert game.result is GameResult.RED_WIN
    assert game.ai_move_if_turn() is None

    again = game.apply_player_move(Color.BLACK, Move.from_coords([(3, 4), (2, 5)]))
    assert again.error == "game_over"


def test_blocked_side_loses():
    game = Game(ai_depth=1)
    board = Board()
    board.set(1, 6, Piece(Color.BLACK))
    board.set(0, 7, Piece(Color.RED, True))
    board.set(2, 5, Piece(Color.RED))
    board.set(3, 4, Piece(Color.RED))
    board.set(3, 6, Piece(Color.RED))
    game.board = board

    # Closing (2,7) leaves Black's only man without a step or a jump.
    result = game.apply_player_move(Color.RED, Move.from_coords([(3, 6), (2, 7)]))
    assert result.legal
    assert game.remaining(Color.BLACK) == 1
    assert game.result is GameResult.RED_WIN
    assert game.result.winner is Color.RED


def test_ascii_shows_turn():
    game = Game(ai_depth=1)
    text = game.ascii()
    assert text.startswith("Turn: RED\n")
    assert " r " in text and " b " in text
