"""
FastAPI server for the draft board.

Exposes the board intents: pick a source, pick a team, rename the team,
and click a player to draft / undraft them.
"""

import logging
from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .. import config
from .board_session import BoardSession
from .draft_state_manager import ACTION_IGNORED
from .api_serializers import (
    SelectSourceRequest,
    SelectTeamRequest,
    RenameTeamRequest,
    ClickRequest,
    BoardResponse,
    ClickResponse,
    TeamResponse,
    TeamsResponse,
    StatusResponse,
    serialize_board,
    serialize_team,
    serialize_teams,
)

logger = logging.getLogger(__name__)


def create_app(session: BoardSession) -> FastAPI:
    """
    Build the API around an already loaded session.

    Args:
        session: BoardSession with feeds loaded

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title=config.API_TITLE,
        description="Snake-ordered ADP draft board with per-team rosters",
        version=config.API_VERSION
    )

    # CORS middleware for web UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ===== Board =====

    @app.get("/sources")
    def get_sources():
        """Source label -> number of players, plus the displayed source."""
        return {
            'current_source': session.current_source,
            'sources': session.source_counts(),
        }

    @app.post("/board/source", response_model=StatusResponse)
    def select_source(request: SelectSourceRequest):
        """
        Switch the displayed source.

        Raises:
            404 Not Found: If the source was never loaded
        """
        try:
            session.select_source(request.source)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown source: {request.source}")

        return StatusResponse(success=True, message=f"Showing {request.source}")

    @app.get("/board", response_model=BoardResponse)
    def get_board(
        source: Optional[str] = Query(None, description="Source label (defaults to current)"),
        available_only: bool = Query(False, description="Hide players any team has drafted")
    ):
        """
        Get the snake-ordered board.

        Raises:
            404 Not Found: If the source was never loaded
            500 Internal Server Error: On unexpected failure
        """
        target = source or session.current_source
        try:
            return serialize_board(session, target, available_only=available_only)

        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown source: {target}")

        except Exception as e:
            logger.error(f"Failed to build board for {target}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Backend error: {e}")

    @app.post("/board/click", response_model=ClickResponse)
    def click_player(request: ClickRequest):
        """
        Toggle a player for the current team.

        Players owned by another team are left alone (action 'ignored').

        Raises:
            404 Not Found: If the player or source does not exist
        """
        try:
            result = session.click(request.player_id, request.source)

        except KeyError as e:
            raise HTTPException(status_code=404, detail=str(e.args[0]) if e.args else "Not found")

        except Exception as e:
            logger.error(f"Failed to apply click on {request.player_id}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Backend error: {e}")

        if result.action == ACTION_IGNORED:
            logger.info(f"Ignored click on {result.player.name}: drafted by {result.owner}")

        return ClickResponse(
            action=result.action,
            player_id=result.player.id,
            player_name=result.player.name,
            owner=result.owner,
            owner_name=session.manager.team_name(result.owner) if result.owner else None,
        )

    # ===== Teams =====

    @app.get("/teams", response_model=TeamsResponse)
    def get_teams():
        """All teams with their rosters."""
        return serialize_teams(session)

    @app.get("/teams/summary")
    def get_team_summary():
        """Per-team roster counts by slot."""
        summary_df = session.manager.get_team_summary()

        teams = summary_df.to_dict('records')
        for team in teams:
            # Convert numpy types to Python types
            for key, value in team.items():
                if hasattr(value, 'item'):
                    team[key] = value.item()

        return {'teams': teams}

    @app.post("/teams/current", response_model=StatusResponse)
    def select_team(request: SelectTeamRequest):
        """
        Switch the team being edited.

        Raises:
            404 Not Found: If the team does not exist
        """
        try:
            session.select_team(request.team_id)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown team: {request.team_id}")

        return StatusResponse(
            success=True,
            message=f"Editing {session.manager.team_name(request.team_id)}"
        )

    @app.post("/teams/current/rename", response_model=StatusResponse)
    def rename_current_team(request: RenameTeamRequest):
        """Rename the team being edited; empty names are ignored."""
        renamed = session.rename_current_team(request.name)
        current = session.state.current_team

        if not renamed:
            return StatusResponse(success=False, message="Team name cannot be empty")

        return StatusResponse(
            success=True,
            message=f"{current} renamed to {session.manager.team_name(current)}"
        )

    @app.get("/teams/{team_id}/roster", response_model=TeamResponse)
    def get_roster(team_id: str):
        """
        Roster for one team.

        Raises:
            404 Not Found: If the team does not exist
        """
        try:
            return serialize_team(session, team_id)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown team: {team_id}")

    # ===== Meta =====

    @app.get("/config")
    def get_frontend_config():
        """Board settings needed by a frontend."""
        return {
            'num_teams': session.state.num_teams,
            'board_rows': session.rows,
            'board_cols': session.cols,
            'roster_slots': config.ROSTER_SLOTS,
            'tier_size': config.TIER_SIZE,
            'sources': list(session.adp_data),
        }

    @app.get("/health")
    def health_check():
        """Simple health check endpoint."""
        return {
            "status": "ok",
            "service": config.API_TITLE,
            "version": config.API_VERSION
        }

    logger.info(f"Draft board API ready: {len(session.adp_data)} sources, {session.state.num_teams} teams")

    return app
