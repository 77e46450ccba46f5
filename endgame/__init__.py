"""
endgame package
Canonicalization and dense packing of KNNN vs K endgame states.
"""

from endgame.square import Square
from endgame.state import State
from endgame.errors import ContractViolation
from endgame.notation import state_from_fen, state_to_fen, editor_url

__all__ = ['Square', 'State', 'ContractViolation', 'state_from_fen', 'state_to_fen', 'editor_url']
