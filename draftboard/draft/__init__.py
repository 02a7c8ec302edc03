"""
Draft state subsystem for the ADP draft board.

This package tracks which team owns each player, lays players out on a
snake-ordered board, and exposes the board over HTTP.
"""

from .draft_state import DraftState, create_initial_draft_state
from .draft_state_manager import DraftStateManager
from .team_name_store import TeamNameStore
from .board_layout import BoardCell, CellStatus, build_board, build_board_cells
from .board_session import BoardSession, ClickResult

__all__ = [
    'DraftState',
    'create_initial_draft_state',
    'DraftStateManager',
    'TeamNameStore',
    'BoardCell',
    'CellStatus',
    'build_board',
    'build_board_cells',
    'BoardSession',
    'ClickResult',
]
