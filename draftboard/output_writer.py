"""
Render the draft board and rosters as tables and CSV files.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from . import config
from .draft.board_layout import BoardCell, CellStatus

logger = logging.getLogger(__name__)

# Marker appended to a cell label per draft status
STATUS_MARKERS = {
    CellStatus.EMPTY: '',
    CellStatus.UNDRAFTED: '',
    CellStatus.DRAFTED_BY_CURRENT: ' *',
    CellStatus.DRAFTED_BY_OTHER: ' x',
}


def cell_label(cell: BoardCell) -> str:
    """Short text for one board cell, e.g. "Bijan Robinson (RB) *"."""
    if cell.player is None:
        return ''
    return f"{cell.player.name} ({cell.player.position}){STATUS_MARKERS[cell.status]}"


def board_to_dataframe(cells: List[List[BoardCell]]) -> pd.DataFrame:
    """
    Convert a board grid into a DataFrame.

    Rows are labelled by round (1-based), columns by board column (1-based).

    Args:
        cells: Grid from BoardSession.board()

    Returns:
        DataFrame of cell labels, empty for an empty board
    """
    if not cells:
        return pd.DataFrame()

    df = pd.DataFrame([[cell_label(cell) for cell in row] for row in cells])
    df.index = [f"Round {i + 1}" for i in range(len(df))]
    df.columns = [str(i + 1) for i in range(len(df.columns))]
    return df


def board_to_records(cells: List[List[BoardCell]]) -> pd.DataFrame:
    """
    Flatten a board into one row per populated cell.

    Returns:
        DataFrame with round, column, player fields, status and drafted_by
    """
    records = []
    for row in cells:
        for cell in row:
            if cell.player is None:
                continue
            records.append({
                'round': cell.row + 1,
                'column': cell.col + 1,
                **cell.player.to_dict(),
                'status': cell.status.value,
                'drafted_by': cell.drafted_by,
            })
    return pd.DataFrame(records)


class OutputWriter:
    """Writes board and roster tables to CSV files."""

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the output writer.

        Args:
            output_dir: Directory for relative output paths (default from config)
        """
        self.output_dir = Path(output_dir or config.OUTPUT_DIR)

    def _resolve(self, filename: str) -> Path:
        path = Path(filename)
        if not path.is_absolute():
            path = self.output_dir / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def write_board(self, cells: List[List[BoardCell]], filename: str) -> Path:
        """
        Write the board, one row per drafted-or-available player.

        Args:
            cells: Grid from BoardSession.board()
            filename: Output file (relative to output_dir unless absolute)

        Returns:
            Path written
        """
        path = self._resolve(filename)
        df = board_to_records(cells)
        df.to_csv(path, index=False)

        logger.info(f"Wrote board with {len(df)} players → {path}")
        return path

    def write_rosters(self, session, filename: str) -> Path:
        """
        Write every team's roster, one row per drafted player.

        Args:
            session: BoardSession
            filename: Output file (relative to output_dir unless absolute)

        Returns:
            Path written
        """
        records = []
        for team_id in session.state.team_ids:
            team_name = session.manager.team_name(team_id)
            for slot, names in session.manager.get_roster(team_id).items():
                for pick, name in enumerate(names, 1):
                    records.append({
                        'team_id': team_id,
                        'team_name': team_name,
                        'slot': slot,
                        'slot_pick': pick,
                        'player_name': name,
                    })

        path = self._resolve(filename)
        df = pd.DataFrame(records, columns=['team_id', 'team_name', 'slot', 'slot_pick', 'player_name'])
        df.to_csv(path, index=False)

        logger.info(f"Wrote {len(df)} rostered players → {path}")
        return path
