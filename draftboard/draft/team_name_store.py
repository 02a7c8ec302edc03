"""
Durable storage for team display names.

Names are kept as a JSON list, index-aligned to team1..teamN. Writes use a
temp file + rename so the file is never left half-written.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class TeamNameStore:
    """Reads and writes the ordered list of team names."""

    def __init__(self, filepath: Path):
        """
        Initialize team name store.

        Args:
            filepath: JSON file holding the names
        """
        self.filepath = Path(filepath)

    def load(self, num_teams: int) -> Optional[List[str]]:
        """
        Read stored names.

        Args:
            num_teams: Configured team count

        Returns:
            Stored names, or None if the file is missing, unreadable, not a
            list of strings, or holds a different number of teams
        """
        if not self.filepath.exists():
            logger.debug(f"No stored team names at {self.filepath}")
            return None

        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                names = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to read team names from {self.filepath}: {e}")
            return None

        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            logger.warning(f"Ignoring team names in {self.filepath}: not a list of names")
            return None

        if len(names) != num_teams:
            logger.warning(
                f"Ignoring {len(names)} stored team names "
                f"(league has {num_teams} teams)"
            )
            return None

        logger.info(f"Loaded {len(names)} team names ← {self.filepath}")
        return names

    def save(self, names: List[str]) -> None:
        """
        Write names to disk.

        Args:
            names: Team names in team order
        """
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.filepath.with_suffix('.tmp')
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(list(names), f, indent=2)

        temp_path.replace(self.filepath)

        logger.debug(f"Saved {len(names)} team names → {self.filepath}")
