"""
API serializers for the draft board endpoints.

Transforms session state into response models.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from ..player import Player
from .board_layout import BoardCell


# ========== Requests ==========

class SelectSourceRequest(BaseModel):
    source: str = Field(..., description="ADP source label (e.g. 'Sleeper')")


class SelectTeamRequest(BaseModel):
    team_id: str = Field(..., description="Team id (team1..teamN)")


class RenameTeamRequest(BaseModel):
    name: str = Field(..., description="New display name for the current team")


class ClickRequest(BaseModel):
    player_id: str = Field(..., description="Clicked player's id")
    source: Optional[str] = Field(None, description="Source of the player (defaults to current)")


# ========== Board ==========

class PlayerResponse(BaseModel):
    id: str
    name: str
    team: str
    bye: str
    position: str
    adp: float
    tier: int
    source: str


class BoardCellResponse(BaseModel):
    row: int
    col: int
    player: Optional[PlayerResponse] = None
    status: str = Field(description="empty / undrafted / drafted_by_current / drafted_by_other")
    drafted_by: Optional[str] = Field(None, description="Owning team's display name")


class BoardResponse(BaseModel):
    """Response for GET /board."""
    source: str
    current_team: str
    current_team_name: str
    rows: int
    cols: int
    message: Optional[str] = Field(None, description="Set when the source has no data")
    cells: List[List[BoardCellResponse]] = Field(description="Snake-ordered grid")


class ClickResponse(BaseModel):
    """Response for POST /board/click."""
    action: str = Field(description="drafted / undrafted / ignored")
    player_id: str
    player_name: str
    owner: Optional[str] = Field(None, description="Owning team id after the click")
    owner_name: Optional[str] = None


# ========== Teams ==========

class TeamResponse(BaseModel):
    team_id: str
    team_name: str
    is_current: bool
    roster: Dict[str, List[str]]


class TeamsResponse(BaseModel):
    """Response for GET /teams."""
    current_team: str
    teams: List[TeamResponse]


class StatusResponse(BaseModel):
    success: bool = Field(..., description="Whether the operation changed anything")
    message: str = Field(..., description="Human-readable status message")


# ========== Serializer Functions ==========

def serialize_player(player: Player) -> PlayerResponse:
    return PlayerResponse(**player.to_dict())


def serialize_cell(cell: BoardCell) -> BoardCellResponse:
    return BoardCellResponse(
        row=cell.row,
        col=cell.col,
        player=serialize_player(cell.player) if cell.player else None,
        status=cell.status.value,
        drafted_by=cell.drafted_by,
    )


def serialize_board(session, source: str, available_only: bool = False) -> BoardResponse:
    """
    Build the board response for a source.

    Args:
        session: BoardSession
        source: Source label (must exist)
        available_only: Leave drafted players off the board

    Returns:
        BoardResponse; cells is empty and message set when there is no data
    """
    cells = session.board(source, available_only=available_only)
    current_team = session.state.current_team

    return BoardResponse(
        source=source,
        current_team=current_team,
        current_team_name=session.manager.team_name(current_team),
        rows=session.rows,
        cols=session.cols,
        message=None if cells else session.empty_message(source),
        cells=[[serialize_cell(cell) for cell in row] for row in cells],
    )


def serialize_team(session, team_id: str) -> TeamResponse:
    return TeamResponse(
        team_id=team_id,
        team_name=session.manager.team_name(team_id),
        is_current=team_id == session.state.current_team,
        roster={slot: list(names) for slot, names in session.manager.get_roster(team_id).items()},
    )


def serialize_teams(session) -> TeamsResponse:
    return TeamsResponse(
        current_team=session.state.current_team,
        teams=[serialize_team(session, team_id) for team_id in session.state.team_ids],
    )
