"""
Draft board session: the single owner of loaded feeds and draft state.

A BoardSession is built once at startup and passed explicitly to whatever
presents the board (CLI or API). It coordinates:
- Loading every ADP feed (joined before the first board is built)
- Applying stored team names
- Turning board clicks into draft / undraft actions for the current team
- Persisting team names and optional draft checkpoints after each change
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .. import config
from ..feed_fetcher import FeedFetcher
from ..mock_data import generate_mock_players
from ..player import Player
from .board_layout import BoardCell, build_board_cells
from .draft_state import create_initial_draft_state
from .draft_state_manager import DraftStateManager, ACTION_IGNORED
from .team_name_store import TeamNameStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClickResult:
    """Outcome of one board click."""

    action: str              # drafted / undrafted / ignored
    player: Player
    owner: Optional[str]     # owning team id after the click


class BoardSession:
    """Loaded ADP data plus draft state for one draft."""

    def __init__(
        self,
        num_teams: int = config.NUM_TEAMS,
        rows: int = config.BOARD_ROWS,
        cols: Optional[int] = None,
        team_name_store: Optional[TeamNameStore] = None,
        checkpoint_path: Optional[Path] = None
    ):
        """
        Initialize a board session.

        Args:
            num_teams: Number of teams in the league
            rows: Board rows (rounds shown)
            cols: Board columns (default: num_teams)
            team_name_store: Optional durable store for team names
            checkpoint_path: Optional JSON checkpoint; loaded if it exists and
                             rewritten after every draft change
        """
        self.rows = rows
        self.cols = cols or num_teams
        self.team_name_store = team_name_store
        self.checkpoint_path = Path(checkpoint_path) if checkpoint_path else None

        if self.checkpoint_path and self.checkpoint_path.exists():
            self.manager = DraftStateManager.load_checkpoint(self.checkpoint_path)
            if self.manager.state.num_teams != num_teams:
                raise ValueError(
                    f"Checkpoint has {self.manager.state.num_teams} teams, "
                    f"expected {num_teams}"
                )
        else:
            self.manager = DraftStateManager(create_initial_draft_state(num_teams))

        if self.team_name_store:
            stored_names = self.team_name_store.load(num_teams)
            if stored_names is not None:
                self.manager.state.team_names = stored_names

        self.adp_data: Dict[str, List[Player]] = {}
        self.current_source = config.DEFAULT_SOURCE

        # FastAPI runs sync endpoints on a threadpool
        self._lock = threading.Lock()

    @property
    def state(self):
        return self.manager.state

    # ===== Sources =====

    def load_feeds(self, fetcher: FeedFetcher, sources: Optional[List[str]] = None) -> None:
        """
        Load ADP feeds; failed feeds become empty sources.

        Args:
            fetcher: FeedFetcher to load with
            sources: Feed labels (default: every location the fetcher knows)
        """
        loaded = fetcher.fetch_all(sources)

        with self._lock:
            self.adp_data.update(loaded)
            if self.current_source not in self.adp_data and self.adp_data:
                self.current_source = next(iter(self.adp_data))

        for source, players in loaded.items():
            logger.info(f"{source}: {len(players)} players")

    def add_mock_source(
        self,
        source: str,
        count: int = config.MOCK_PLAYER_COUNT,
        seed: int = config.MOCK_SEED
    ) -> None:
        """Register synthetic players for a source without a live feed."""
        with self._lock:
            self.adp_data[source] = generate_mock_players(source, count=count, seed=seed)
        logger.info(f"{source}: {count} mock players")

    def source_counts(self) -> Dict[str, int]:
        """Source label -> number of players."""
        return {source: len(players) for source, players in self.adp_data.items()}

    def _require_source(self, source: str) -> List[Player]:
        if source not in self.adp_data:
            raise KeyError(f"Unknown source: {source}")
        return self.adp_data[source]

    def select_source(self, source: str) -> None:
        """
        Switch the displayed source.

        Raises:
            KeyError: If the source was never loaded
        """
        self._require_source(source)
        self.current_source = source
        logger.debug(f"Rendering source: {source}")

    def find_player(self, player_id: str, source: Optional[str] = None) -> Player:
        """
        Look up a player by id.

        Args:
            player_id: Player id ("<source>-<row>")
            source: Source to search (default: current source)

        Raises:
            KeyError: If the source or player does not exist
        """
        for player in self._require_source(source or self.current_source):
            if player.id == player_id:
                return player
        raise KeyError(f"Unknown player: {player_id}")

    # ===== Board =====

    def board(
        self,
        source: Optional[str] = None,
        available_only: bool = False
    ) -> List[List[BoardCell]]:
        """
        Snake-ordered board for a source.

        Args:
            source: Source label (default: current source)
            available_only: Drop players any team has drafted before laying out

        Returns:
            Grid of cells, or an empty list when the source has no players
        """
        players = self._require_source(source or self.current_source)
        if available_only:
            players = self.manager.get_available_players(players)
        if not players:
            return []
        return build_board_cells(players, self.state, self.rows, self.cols)

    def empty_message(self, source: Optional[str] = None) -> str:
        return f"No data available for {source or self.current_source}"

    def click(self, player_id: str, source: Optional[str] = None) -> ClickResult:
        """
        Toggle a player for the current team.

        Args:
            player_id: Clicked player's id
            source: Source the player belongs to (default: current source)

        Returns:
            ClickResult with 'drafted', 'undrafted', or 'ignored' (owned by
            another team) and the owner right after the click

        Raises:
            KeyError: If the player does not exist
        """
        player = self.find_player(player_id, source)

        with self._lock:
            action = self.manager.toggle(player)
            owner = self.manager.owner_of(player.name)
            if action != ACTION_IGNORED:
                self._autosave()

        return ClickResult(action=action, player=player, owner=owner)

    # ===== Teams =====

    def select_team(self, team_id: str) -> None:
        """Switch the team being edited (ValueError for unknown ids)."""
        with self._lock:
            self.manager.select_team(team_id)

    def rename_current_team(self, new_name: str) -> bool:
        """
        Rename the team being edited and persist all names.

        Returns:
            False if the name was empty (nothing changed)
        """
        with self._lock:
            team_index = self.manager.team_index(self.state.current_team)
            renamed = self.manager.rename(team_index, new_name)
            if renamed:
                self._save_team_names()
                self._autosave()

        return renamed

    def roster_lines(self, team_id: Optional[str] = None) -> List[str]:
        """Roster as display lines, e.g. ["QB: Josh Allen", "RB: —", ...]."""
        roster = self.manager.get_roster(team_id)
        return [f"{slot}: {', '.join(names) or '—'}" for slot, names in roster.items()]

    # Persistence failures keep the in-memory change; the next save retries

    def _save_team_names(self) -> None:
        if not self.team_name_store:
            return
        try:
            self.team_name_store.save(self.state.team_names)
        except OSError as e:
            logger.error(f"Failed to save team names: {e}", exc_info=True)

    def _autosave(self) -> None:
        if not self.checkpoint_path:
            return
        try:
            self.manager.save_checkpoint(self.checkpoint_path)
        except OSError as e:
            logger.error(f"Failed to save checkpoint {self.checkpoint_path}: {e}", exc_info=True)
