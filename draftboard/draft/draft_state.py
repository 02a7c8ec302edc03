"""
Core data structures for draft board state.

Ownership and roster membership key off the player's name (canonicalized),
not the source-qualified player id, so the same player shown by two
different ADP feeds can only ever belong to one team.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import json

from .. import config
from ..player import canonical_player_name


def team_id_for_index(index: int) -> str:
    """0-based team index -> team id ("team1" for index 0)."""
    return f"{config.TEAM_ID_PREFIX}{index + 1}"


def empty_roster() -> Dict[str, List[str]]:
    """A roster with every slot bucket empty."""
    return {slot: [] for slot in config.ROSTER_SLOTS}


@dataclass
class DraftState:
    """Complete state of the draft board."""

    team_rosters: Dict[str, Dict[str, List[str]]]        # team_id -> slot -> player names
    team_names: List[str]                                # index-aligned to team1..teamN
    drafted_players: Dict[str, str] = field(default_factory=dict)  # identity -> team_id
    current_team: str = 'team1'

    @property
    def num_teams(self) -> int:
        return len(self.team_names)

    @property
    def team_ids(self) -> List[str]:
        return [team_id_for_index(i) for i in range(self.num_teams)]

    def validate(self) -> None:
        """
        Validate that ownership and roster membership agree.

        Raises:
            ValueError: If state is inconsistent
        """
        if list(self.team_rosters) != self.team_ids:
            raise ValueError(
                f"Roster teams {list(self.team_rosters)} do not match "
                f"{self.num_teams} team names"
            )

        if self.current_team not in self.team_rosters:
            raise ValueError(f"Unknown current_team: {self.current_team}")

        rostered: Dict[str, str] = {}
        for team_id, roster in self.team_rosters.items():
            for slot, names in roster.items():
                for name in names:
                    key = canonical_player_name(name)
                    if key in rostered:
                        raise ValueError(
                            f"Player {name} appears on multiple rosters "
                            f"({rostered[key]}, {team_id})"
                        )
                    rostered[key] = team_id

        if rostered != self.drafted_players:
            raise ValueError(
                "drafted_players does not match rostered players"
            )

    def total_drafted(self) -> int:
        """Count players drafted across all teams."""
        return len(self.drafted_players)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'team_rosters': self.team_rosters,
            'team_names': self.team_names,
            'drafted_players': self.drafted_players,
            'current_team': self.current_team,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DraftState':
        """Create DraftState from dictionary."""
        team_rosters = {}
        for team_id, roster in data['team_rosters'].items():
            team_rosters[team_id] = empty_roster()
            for slot, names in roster.items():
                team_rosters[team_id][slot] = list(names)

        return cls(
            team_rosters=team_rosters,
            team_names=list(data['team_names']),
            drafted_players=dict(data.get('drafted_players', {})),
            current_team=data.get('current_team', team_id_for_index(0)),
        )

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'DraftState':
        """Create DraftState from JSON string."""
        return cls.from_dict(json.loads(json_str))


def create_initial_draft_state(
    num_teams: int = config.NUM_TEAMS,
    team_names: Optional[List[str]] = None
) -> DraftState:
    """
    Create the draft state at the start of a session.

    Args:
        num_teams: Number of teams in the league
        team_names: Optional display names; applied only if there is exactly
                    one per team

    Returns:
        DraftState with empty rosters and team1 selected
    """
    if num_teams < 1:
        raise ValueError(f"num_teams must be at least 1, got {num_teams}")

    names = [f"Team {i + 1}" for i in range(num_teams)]
    if team_names is not None and len(team_names) == num_teams:
        names = list(team_names)

    return DraftState(
        team_rosters={team_id_for_index(i): empty_roster() for i in range(num_teams)},
        team_names=names,
        drafted_players={},
        current_team=team_id_for_index(0),
    )
