"""
notation.py
FEN glue between python-chess positions and endgame states.

Only used for diagnostics and interchange; the packing core never imports
python-chess boards.
"""

from typing import Union

import chess

from endgame.config import EDITOR_URL, FEN_SUFFIX_BLACK, FEN_SUFFIX_WHITE
from endgame.square import Square
from endgame.state import State


def state_from_fen(fen: str, target: Union[Square, str]) -> State:
    """
    Build a state from a FEN with white K+3N against a lone black king.

    Args:
        fen: Position in FEN (castling/en passant fields are ignored)
        target: Rim square, as Square or algebraic text

    Returns:
        State as found on the board (not normalized)

    Raises:
        ValueError: Malformed FEN, wrong piece counts, or bad target
    """
    board = chess.Board(fen)

    if isinstance(target, str):
        target = Square.parse(target)

    black_king = board.king(chess.BLACK)
    white_king = board.king(chess.WHITE)

    if black_king is None:
        raise ValueError("No black king found")
    if white_king is None:
        raise ValueError("No white king found")

    knights = board.pieces(chess.KNIGHT, chess.WHITE)
    if len(knights) != 3:
        raise ValueError(f"Wrong amount of white knights: expected 3, got {len(knights)}")

    white_count = chess.popcount(board.occupied_co[chess.WHITE])
    if white_count != 4:
        raise ValueError(f"Wrong amount of white pieces: expected 4, got {white_count}")

    black_count = chess.popcount(board.occupied_co[chess.BLACK])
    if black_count != 1:
        raise ValueError(f"Wrong amount of black pieces: expected 1, got {black_count}")

    return State(
        king_a=Square.from_chess(white_king),
        king_b=Square.from_chess(black_king),
        knights=tuple(Square.from_chess(sq) for sq in knights),
        target=target,
        side_to_move=board.turn == chess.WHITE,
    )


def state_to_board(state: State) -> chess.Board:
    """Place the normalized state on an empty python-chess board."""
    s = state.normalize()

    board = chess.Board.empty()
    board.set_piece_at(s.king_a.to_chess(), chess.Piece(chess.KING, chess.WHITE))
    board.set_piece_at(s.king_b.to_chess(), chess.Piece(chess.KING, chess.BLACK))
    for knight in s.knights:
        board.set_piece_at(knight.to_chess(), chess.Piece(chess.KNIGHT, chess.WHITE))
    board.turn = chess.WHITE if s.side_to_move else chess.BLACK

    return board


def state_to_fen(state: State) -> str:
    """FEN of the normalized state, e.g. "8/8/8/8/8/8/8/KNNN3k w - - 0 1"."""
    s = state.normalize()
    placement = state_to_board(s).board_fen()
    return placement + (FEN_SUFFIX_WHITE if s.side_to_move else FEN_SUFFIX_BLACK)


def editor_url(state: State) -> str:
    """Board-editor link showing the normalized state."""
    return EDITOR_URL + state_to_fen(state).replace(" ", "_")
