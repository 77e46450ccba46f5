"""
test_notation.py
Unit tests for FEN glue.
"""

import chess
import pytest
from endgame.notation import editor_url, state_from_fen, state_to_board, state_to_fen
from endgame.square import Square

BASIC_FEN = "8/8/8/8/8/8/8/KNNN3k w - - 0 1"
# White king on h8, knights g8 h7 h6, black king a1
ROTATED_FEN = "6NK/7N/7N/8/8/8/8/k7 b - - 0 1"


class TestStateFromFen:
    """Test construction from FEN."""

    def test_basic(self):
        """Pieces, target and turn are read from the FEN."""
        state = state_from_fen(BASIC_FEN, "h1")
        assert state.king_a == Square(0, 0)
        assert state.king_b == Square(7, 0)
        assert set(state.knights) == {Square(1, 0), Square(2, 0), Square(3, 0)}
        assert state.target == Square(7, 0)
        assert state.side_to_move is True

    def test_black_to_move(self):
        """"b" in the FEN means black to move."""
        assert state_from_fen(ROTATED_FEN, "a8").side_to_move is False

    def test_target_as_square(self):
        """Target may be given as a Square."""
        assert state_from_fen(BASIC_FEN, Square(0, 4)).target == Square(0, 4)

    def test_two_knights(self):
        """Two knights are rejected."""
        with pytest.raises(ValueError, match="knights"):
            state_from_fen("8/8/8/8/8/8/8/KNN4k w - - 0 1", "h1")

    def test_missing_black_king(self):
        """Missing black king is reported."""
        with pytest.raises(ValueError, match="No black king"):
            state_from_fen("8/8/8/8/8/8/8/KNNN4 w - - 0 1", "h1")

    def test_missing_white_king(self):
        """Missing white king is reported."""
        with pytest.raises(ValueError, match="No white king"):
            state_from_fen("8/8/8/8/8/8/8/1NNN3k w - - 0 1", "h1")

    def test_extra_white_piece(self):
        """A fifth white piece is reported."""
        with pytest.raises(ValueError, match="white pieces"):
            state_from_fen("8/8/8/8/8/8/8/KNNNR2k w - - 0 1", "h1")

    def test_extra_black_piece(self):
        """A second black piece is reported."""
        with pytest.raises(ValueError, match="black pieces"):
            state_from_fen("8/8/8/8/8/8/p7/KNNN3k w - - 0 1", "h1")

    def test_target_off_rim(self):
        """Off-rim target is reported."""
        with pytest.raises(ValueError, match="rim"):
            state_from_fen(BASIC_FEN, "d4")

    def test_bad_target_text(self):
        """Unparseable target text is reported."""
        with pytest.raises(ValueError, match="file"):
            state_from_fen(BASIC_FEN, "z1")

    def test_malformed_fen(self):
        """Malformed FEN raises ValueError."""
        with pytest.raises(ValueError):
            state_from_fen("not a fen", "h1")


class TestStateToFen:
    """Rendering always emits the normalized form."""

    def test_already_normalized(self):
        """Canonical positions render unchanged."""
        assert state_to_fen(state_from_fen(BASIC_FEN, "h1")) == BASIC_FEN

    def test_rotated_position(self):
        """Rotated positions render in canonical form."""
        state = state_from_fen(ROTATED_FEN, "h8")
        assert state_to_fen(state) == "7k/8/8/8/8/N7/N7/KN6 b - - 0 1"

    def test_roundtrip_equivalent(self):
        """Re-parsing the rendered FEN gives an equal state."""
        state = state_from_fen(ROTATED_FEN, "h8")
        # target h8 rotates to a1 under the half turn
        restored = state_from_fen(state_to_fen(state), "a1")
        assert restored == state
        assert restored.pack() == state.pack()

    def test_board_pieces(self):
        """Board holds the normalized pieces and turn."""
        board = state_to_board(state_from_fen(ROTATED_FEN, "h8"))
        assert board.king(chess.WHITE) == chess.A1
        assert board.king(chess.BLACK) == chess.H8
        assert board.pieces(chess.KNIGHT, chess.WHITE) == chess.SquareSet([chess.B1, chess.A2, chess.A3])
        assert board.turn == chess.BLACK


class TestEditorUrl:
    """Test board-editor link."""

    def test_url(self):
        """Editor link is the FEN with underscores."""
        url = editor_url(state_from_fen(BASIC_FEN, "h1"))
        assert url == "https://lichess.org/editor/8/8/8/8/8/8/8/KNNN3k_w_-_-_0_1"

    def test_no_spaces(self):
        """Editor link contains no spaces."""
        assert " " not in editor_url(state_from_fen(ROTATED_FEN, "h8"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
