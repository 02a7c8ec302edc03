"""
Snake-ordered board layout.

Row 0 fills left to right, row 1 right to left, and so on, mirroring the
pick order of a snake draft.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .. import config
from ..player import Player
from .draft_state import DraftState


class CellStatus(str, Enum):
    EMPTY = 'empty'
    UNDRAFTED = 'undrafted'
    DRAFTED_BY_CURRENT = 'drafted_by_current'
    DRAFTED_BY_OTHER = 'drafted_by_other'


@dataclass(frozen=True)
class BoardCell:
    """One rendered board cell."""

    row: int
    col: int
    player: Optional[Player]
    status: CellStatus
    drafted_by: Optional[str] = None  # owning team's display name


def snake_index(row: int, col: int, cols: int) -> int:
    """Index into the player list shown at (row, col)."""
    col_index = col if row % 2 == 0 else cols - 1 - col
    return row * cols + col_index


def build_board(
    players: List[Player],
    rows: int = config.BOARD_ROWS,
    cols: int = config.BOARD_COLS
) -> List[List[Optional[Player]]]:
    """
    Lay players out in snake order.

    Args:
        players: Players in board order
        rows: Board rows (rounds)
        cols: Board columns (teams)

    Returns:
        rows x cols grid; cells past the end of the list are None
    """
    grid = []
    for r in range(rows):
        row = []
        for c in range(cols):
            index = snake_index(r, c, cols)
            row.append(players[index] if index < len(players) else None)
        grid.append(row)
    return grid


def cell_status(player: Optional[Player], state: DraftState) -> CellStatus:
    """How a cell should be styled for the team currently being edited."""
    if player is None:
        return CellStatus.EMPTY

    owner = state.drafted_players.get(player.identity)
    if owner is None:
        return CellStatus.UNDRAFTED
    if owner == state.current_team:
        return CellStatus.DRAFTED_BY_CURRENT
    return CellStatus.DRAFTED_BY_OTHER


def build_board_cells(
    players: List[Player],
    state: DraftState,
    rows: int = config.BOARD_ROWS,
    cols: int = config.BOARD_COLS
) -> List[List[BoardCell]]:
    """
    Build the snake grid with per-cell draft status.

    Args:
        players: Players in board order
        state: Current draft state
        rows: Board rows
        cols: Board columns

    Returns:
        rows x cols grid of BoardCell
    """
    team_ids = state.team_ids
    cells = []
    for r, row in enumerate(build_board(players, rows, cols)):
        cell_row = []
        for c, player in enumerate(row):
            drafted_by = None
            if player is not None:
                owner = state.drafted_players.get(player.identity)
                if owner in team_ids:
                    drafted_by = state.team_names[team_ids.index(owner)]
            cell_row.append(BoardCell(
                row=r,
                col=c,
                player=player,
                status=cell_status(player, state),
                drafted_by=drafted_by,
            ))
        cells.append(cell_row)
    return cells
