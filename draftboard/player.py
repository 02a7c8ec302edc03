"""
Normalized player record shared by every ADP feed.
"""

from dataclasses import dataclass, asdict
import re
import unicodedata

# Generational suffixes dropped when matching names across feeds
NAME_SUFFIXES = {'jr', 'sr', 'ii', 'iii', 'iv', 'v'}


def canonical_player_name(name: str) -> str:
    """
    Reduce a display name to the key used for draft ownership.

    Feeds disagree on punctuation, accents and suffixes, so all of these map
    to "kenneth walker":

        "Kenneth Walker III", "Kenneth Walker", "kenneth walker iii"

    "D.J. Moore" / "DJ Moore" both map to "dj moore", and "José" matches
    "Jose". Names with no Latin letters or digits keep their lower-cased
    text as the key.
    """
    raw = (name or '').strip()
    decomposed = unicodedata.normalize('NFKD', raw)
    normalized = ''.join(c for c in decomposed if not unicodedata.combining(c)).lower()
    normalized = normalized.replace('.', '').replace("'", '')
    normalized = re.sub(r"[^a-z0-9\s-]", '', normalized)

    parts = normalized.split()
    while len(parts) > 1 and parts[-1] in NAME_SUFFIXES:
        parts = parts[:-1]

    if not parts:
        return ' '.join(raw.lower().split())

    return ' '.join(parts)


@dataclass(frozen=True)
class Player:
    """A single ranked player from one ADP source."""

    id: str            # "<source>-<row index>"
    name: str          # Display name; ownership keys off canonical_player_name(name)
    team: str          # NFL team abbreviation, may be empty
    bye: str           # Bye week as text, may be empty
    position: str      # QB / RB / WR / TE
    adp: float         # Average draft position, lower is better
    tier: int          # 1-based, one tier per 15 picks
    source: str = ''   # Feed label the record came from

    @property
    def identity(self) -> str:
        """Cross-source identity used for ownership."""
        return canonical_player_name(self.name)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
