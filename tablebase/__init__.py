"""
tablebase package
Helpers for walking the packed-id space of the endgame table.
"""

from tablebase.index_space import is_valid_packed, valid_mask, count_valid_states, iter_valid_ids, sample_states

__all__ = ['is_valid_packed', 'valid_mask', 'count_valid_states', 'iter_valid_ids', 'sample_states']
