from checkers.game.board import Board, Color, Move, Piece
from checkers.game.rules import apply_move, has_capture, legal_moves


def paths(moves):
    return [[(sq.row, sq.col) for sq in move.path] for move in moves]


def board_with(*placements):
    board = Board()
    for (row, col), piece in placements:
        board.set(row, col, piece)
    return board


RED = Piece(Color.RED)
BLACK = Piece(Color.BLACK)
RED_KING = Piece(Color.RED, True)


def test_opening_moves_in_scan_order():
    moves = legal_moves(Board.initial(), Color.RED)
    assert paths(moves) == [
        [(5, 0), (4, 1)],
        [(5, 2), (4, 1)],
        [(5, 2), (4, 3)],
        [(5, 4), (4, 3)],
        [(5, 4), (4, 5)],
        [(5, 6), (4, 5)],
        [(5, 6), (4, 7)],
    ]
    assert len(legal_moves(Board.initial(), Color.BLACK)) == 7


def test_single_man_has_two_steps():
    board = board_with(((5, 1), RED))
    assert paths(legal_moves(board, Color.RED)) == [[(5, 1), (4, 0)], [(5, 1), (4, 2)]]


def test_black_men_move_down():
    board = board_with(((2, 3), BLACK))
    assert paths(legal_moves(board, Color.BLACK)) == [[(2, 3), (3, 2)], [(2, 3), (3, 4)]]


def test_capture_is_forced():
    board = board_with(((5, 2), RED), ((4, 3), BLACK))
    moves = legal_moves(board, Color.RED)
    assert paths(moves) == [[(5, 2), (3, 4)]]
    assert moves[0].is_capture()
    assert has_capture(board, Color.RED)


def test_forced_capture_applies_across_pieces():
    board = board_with(((5, 2), RED), ((4, 3), BLACK), ((6, 7), RED))
    moves = legal_moves(board, Color.RED)
    assert moves and all(move.is_capture() for move in moves)


def test_multi_jump_chain():
    board = board_with(((5, 2), RED), ((4, 3), BLACK), ((2, 5), BLACK))
    assert paths(legal_moves(board, Color.RED)) == [[(5, 2), (3, 4), (1, 6)]]


def test_shorter_maximal_chains_are_kept():
    # The longest-capture variant is not enforced: both branches are legal.
    board = board_with(
        ((5, 2), RED),
        ((4, 1), BLACK),
        ((4, 3), BLACK),
        ((2, 5), BLACK),
    )
    assert paths(legal_moves(board, Color.RED)) == [
        [(5, 2), (3, 0)],
        [(5, 2), (3, 4), (1, 6)],
    ]


def test_men_do_not_capture_backwards():
    board = board_with(((2, 3), RED), ((3, 4), BLACK))
    moves = legal_moves(board, Color.RED)
    assert not any(move.is_capture() for move in moves)
    assert paths(moves) == [[(2, 3), (1, 2)], [(2, 3), (1, 4)]]


def test_king_moves_and_captures_backwards():
    board = board_with(((4, 3), RED_KING))
    assert paths(legal_moves(board, Color.RED)) == [
        [(4, 3), (3, 2)],
        [(4, 3), (3, 4)],
        [(4, 3), (5, 2)],
        [(4, 3), (5, 4)],
    ]

    board = board_with(((2, 3), RED_KING), ((3, 4), BLACK))
    assert paths(legal_moves(board, Color.RED)) == [[(2, 3), (4, 5)]]


def test_man_crowned_mid_chain_keeps_man_directions():
    # A king could continue over (1,4); a man landing on row 0 stops.
    board = board_with(((2, 1), RED), ((1, 2), BLACK), ((1, 4), BLACK))
    moves = legal_moves(board, Color.RED)
    assert paths(moves) == [[(2, 1), (0, 3)]]

    after = apply_move(board, moves[0])
    assert after.get(0, 3) == RED_KING
    assert after.get(1, 2) is None
    assert after.get(1, 4) == BLACK


def test_blocked_landing_square_is_not_a_capture():
    board = board_with(((5, 2), RED), ((4, 3), BLACK), ((3, 4), BLACK))
    moves = legal_moves(board, Color.RED)
    assert paths(moves) == [[(5, 2), (4, 1)]]


def test_no_legal_moves():
    board = board_with(((0, 1), RED), ((1, 0), BLACK))
    assert legal_moves(board, Color.RED) == []
    assert legal_moves(Board(), Color.BLACK) == []
    assert not has_capture(board, Color.RED)


def test_apply_capture_leaves_input_untouched():
    board = board_with(((5, 2), RED), ((4, 3), BLACK))
    after = apply_move(board, Move.from_coords([(5, 2), (3, 4)]))
    assert after.get(5, 2) is None
    assert after.get(4, 3) is None
    assert after.get(3, 4) == RED
    assert board.get(5, 2) == RED
    assert board.get(4, 3) == BLACK


def test_apply_multi_jump_removes_every_jumped_piece():
    board = board_with(((5, 2), RED), ((4, 3), BLACK), ((2, 5), BLACK))
    after = apply_move(board, Move.from_coords([(5, 2), (3, 4), (1, 6)]))
    assert after.count(Color.BLACK) == 0
    assert after.get(1, 6) == RED


def test_apply_promotes_on_back_rank():
    board = board_with(((1, 2), RED), ((6, 3), BLACK), ((1, 4), RED_KING))
    after = apply_move(board, Move.from_coords([(1, 2), (0, 1)]))
    assert after.get(0, 1) == RED_KING

    after = apply_move(board, Move.from_coords([(6, 3), (7, 4)]))
    assert after.get(7, 4) == Piece(Color.BLACK, True)

    after = apply_move(board, Move.from_coords([(1, 4), (0, 5)]))
    assert after.get(0, 5) == RED_KING


def test_playout_properties():
    board = Board.initial()
    turn = Color.RED
    for ply in range(120):
        moves = legal_moves(board, turn)
        if not moves:
            break
        if any(move.is_capture() for move in moves):
            assert all(move.is_capture() for move in moves)

        # Vary the choice so the game does not shuffle the same pieces.
        move = moves[ply % len(moves)]
        mine, theirs = board.count(turn), board.count(turn.opponent())
        after = apply_move(board, move)

        assert after.count(turn) == mine
        expected = theirs - (len(move.path) - 1) if move.is_capture() else theirs
        assert after.count(turn.opponent()) == expected
        assert all(square.playable for square, _ in after.pieces())

        final = after.piece_at(move.destination)
        assert final is not None and final.color is turn
        if move.destination.row == turn.back_rank:
            assert final.king

        board, turn = after, turn.opponent()
