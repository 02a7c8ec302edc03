"""
Manage draft board state and apply draft actions.

The DraftStateManager is responsible for:
- Drafting / undrafting players for a team (with a shared ownership guard)
- Toggling a player on a board click
- Renaming teams and switching the team being edited
- Filtering player pools to exclude drafted players
- Checkpointing state to JSON
"""

import logging
import json
import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime

from .. import config
from ..player import Player, canonical_player_name
from .draft_state import DraftState

logger = logging.getLogger(__name__)

# Outcomes of toggle()
ACTION_DRAFTED = 'drafted'
ACTION_UNDRAFTED = 'undrafted'
ACTION_IGNORED = 'ignored'


def roster_slot_for(position: str) -> str:
    """Roster bucket for a position, FLEX when it has no dedicated bucket."""
    if position in config.ROSTER_SLOTS and position != config.FLEX_SLOT:
        return position
    return config.FLEX_SLOT


class DraftStateManager:
    """Manages draft board state and applies draft actions."""

    def __init__(self, initial_state: DraftState):
        """
        Initialize state manager with a draft state.

        Args:
            initial_state: Starting draft state (fresh or loaded from checkpoint)
        """
        self.state = initial_state

    # ===== Teams =====

    def _require_team(self, team_id: str) -> None:
        if team_id not in self.state.team_rosters:
            raise ValueError(f"Unknown team_id: {team_id}")

    def team_index(self, team_id: str) -> int:
        """0-based index of a team id ("team3" -> 2)."""
        self._require_team(team_id)
        return self.state.team_ids.index(team_id)

    def team_name(self, team_id: str) -> str:
        """Display name for a team id."""
        return self.state.team_names[self.team_index(team_id)]

    def select_team(self, team_id: str) -> None:
        """
        Switch the team being edited / viewed.

        Raises:
            ValueError: If team_id does not exist
        """
        self._require_team(team_id)
        self.state.current_team = team_id
        logger.debug(f"Current team: {team_id} ({self.team_name(team_id)})")

    def rename(self, team_index: int, new_name: str) -> bool:
        """
        Replace a team's display name.

        Args:
            team_index: 0-based team index
            new_name: New display name (surrounding whitespace is dropped)

        Returns:
            True if renamed, False if the name was empty

        Raises:
            ValueError: If team_index is out of range
        """
        if not 0 <= team_index < self.state.num_teams:
            raise ValueError(f"Unknown team index: {team_index}")

        name = (new_name or '').strip()
        if not name:
            logger.debug(f"Ignored empty rename for team index {team_index}")
            return False

        old_name = self.state.team_names[team_index]
        self.state.team_names[team_index] = name
        logger.info(f"Renamed team {team_index + 1}: {old_name} → {name}")
        return True

    def get_roster(self, team_id: Optional[str] = None) -> Dict[str, List[str]]:
        """Slot -> drafted names for a team (default: current team)."""
        team_id = team_id or self.state.current_team
        self._require_team(team_id)
        return self.state.team_rosters[team_id]

    # ===== Draft actions =====

    def owner_of(self, player_name: str) -> Optional[str]:
        """Team id that drafted a player, or None if undrafted."""
        return self.state.drafted_players.get(canonical_player_name(player_name))

    def draft(self, player: Player, team_id: Optional[str] = None) -> bool:
        """
        Draft a player onto a team.

        The player goes into the bucket for their position (FLEX when there
        is no dedicated bucket). Drafting a player the team already owns
        changes nothing.

        Args:
            player: Player to draft
            team_id: Drafting team (default: current team)

        Returns:
            True if the team owns the player afterwards, False if another
            team already owns them (nothing changed)
        """
        team_id = team_id or self.state.current_team
        self._require_team(team_id)

        owner = self.owner_of(player.name)
        if owner == team_id:
            return True
        if owner is not None:
            logger.debug(f"{player.name} already drafted by {owner}, ignoring {team_id}")
            return False

        slot = roster_slot_for(player.position)
        bucket = self.state.team_rosters[team_id][slot]
        if player.name not in bucket:
            bucket.append(player.name)
        self.state.drafted_players[player.identity] = team_id

        logger.info(f"Drafted {player.name} ({player.position}) → {self.team_name(team_id)} [{slot}]")
        return True

    def undraft(self, player: Player, team_id: Optional[str] = None) -> bool:
        """
        Remove a player from a team and clear their ownership.

        Guarded by the same ownership check as draft(): only the owning team
        can release a player.

        Args:
            player: Player to release
            team_id: Acting team (default: current team)

        Returns:
            True if the player was released, False if team_id is not the owner
        """
        team_id = team_id or self.state.current_team
        self._require_team(team_id)

        owner = self.owner_of(player.name)
        if owner != team_id:
            logger.debug(f"{team_id} does not own {player.name} (owner: {owner}), ignoring")
            return False

        roster = self.state.team_rosters[team_id]
        key = player.identity
        slot = roster_slot_for(player.position)

        remaining = [name for name in roster[slot] if canonical_player_name(name) != key]
        if len(remaining) == len(roster[slot]):
            # Drafted from a feed listing a different position
            other_slot = next(
                (s for s, names in roster.items()
                 if any(canonical_player_name(n) == key for n in names)),
                None
            )
            if other_slot is not None:
                logger.warning(f"{player.name} not in {slot}, removing from {other_slot}")
                slot = other_slot
                remaining = [name for name in roster[slot] if canonical_player_name(name) != key]

        roster[slot] = remaining
        del self.state.drafted_players[key]

        logger.info(f"Undrafted {player.name} from {self.team_name(team_id)} [{slot}]")
        return True

    def toggle(self, player: Player, team_id: Optional[str] = None) -> str:
        """
        Apply a board click for a team.

        Args:
            player: Clicked player
            team_id: Acting team (default: current team)

        Returns:
            ACTION_DRAFTED, ACTION_UNDRAFTED, or ACTION_IGNORED when another
            team owns the player
        """
        team_id = team_id or self.state.current_team
        self._require_team(team_id)

        owner = self.owner_of(player.name)
        if owner is not None and owner != team_id:
            return ACTION_IGNORED
        if owner == team_id:
            self.undraft(player, team_id)
            return ACTION_UNDRAFTED

        self.draft(player, team_id)
        return ACTION_DRAFTED

    # ===== Queries =====

    def get_available_players(self, players: List[Player]) -> List[Player]:
        """
        Filter a player list to undrafted players.

        Args:
            players: Players from any source

        Returns:
            Players whose identity is not owned by any team, in input order
        """
        available = [p for p in players if p.identity not in self.state.drafted_players]

        logger.debug(
            f"Filtered player pool: {len(players)} → {len(available)} "
            f"({len(players) - len(available)} drafted players removed)"
        )

        return available

    def get_team_summary(self) -> pd.DataFrame:
        """
        Get per-team roster counts.

        Returns:
            DataFrame with team_id, team_name, one count column per roster
            slot, and total
        """
        summary_data = []
        for team_id, roster in self.state.team_rosters.items():
            row = {
                'team_id': team_id,
                'team_name': self.team_name(team_id),
            }
            for slot in config.ROSTER_SLOTS:
                row[slot] = len(roster.get(slot, []))
            row['total'] = sum(len(names) for names in roster.values())
            summary_data.append(row)

        return pd.DataFrame(summary_data, columns=['team_id', 'team_name', *config.ROSTER_SLOTS, 'total'])

    # ===== Checkpoints =====

    def save_checkpoint(self, filepath: Path) -> None:
        """
        Save current state to JSON.

        Args:
            filepath: Path for checkpoint file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        checkpoint_data = {
            'state': self.state.to_dict(),
            'checkpoint_time': datetime.now().isoformat()
        }

        # Atomic write: write to temp file, then rename
        temp_path = filepath.with_suffix('.tmp')
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(checkpoint_data, f, indent=2)

        temp_path.replace(filepath)

        logger.info(f"Saved checkpoint: {self.state.total_drafted()} drafted players → {filepath}")

    @classmethod
    def load_checkpoint(cls, filepath: Path) -> 'DraftStateManager':
        """
        Load state from JSON checkpoint.

        Args:
            filepath: Path to checkpoint file

        Returns:
            DraftStateManager with loaded state

        Raises:
            FileNotFoundError: If checkpoint doesn't exist
            ValueError: If the checkpoint state is inconsistent
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Checkpoint not found: {filepath}")

        with open(filepath, 'r', encoding='utf-8') as f:
            checkpoint_data = json.load(f)

        state = DraftState.from_dict(checkpoint_data['state'])
        state.validate()

        logger.info(f"Loaded checkpoint: {state.total_drafted()} drafted players ← {filepath}")

        return cls(state)
