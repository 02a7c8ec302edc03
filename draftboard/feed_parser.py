"""
Parse delimited ADP feeds into normalized Player records.

Every supported source shares one parser; the sources differ only in
column offsets, minimum row width and where the tier comes from, which
is captured by a FeedFormat record per source.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from . import config
from .player import Player

logger = logging.getLogger(__name__)

# Tier sources
TIER_FROM_INDEX = 'index'    # derived from row position
TIER_FROM_RANK = 'rank'      # derived from an explicit overall rank column
TIER_FROM_COLUMN = 'column'  # explicit tier column, index fallback


@dataclass(frozen=True)
class FeedFormat:
    """Column layout of one ADP source."""

    source: str
    min_fields: int
    name_col: int
    team_col: int
    position_col: int
    adp_col: int
    bye_col: Optional[int] = None
    rank_col: Optional[int] = None
    tier_col: Optional[int] = None
    tier_source: str = TIER_FROM_INDEX
    delimiter: str = ','


FEED_FORMATS: Dict[str, FeedFormat] = {
    # Rank, Player, Team, Bye, POS, <6 site columns>, AVG
    'FantasyPros': FeedFormat(
        source='FantasyPros', min_fields=12,
        name_col=1, team_col=2, bye_col=3, position_col=4, adp_col=11,
        rank_col=0, tier_source=TIER_FROM_RANK,
    ),
    # Player, Team, Bye, POS, <rank>, ADP
    'Sleeper': FeedFormat(
        source='Sleeper', min_fields=6,
        name_col=0, team_col=1, bye_col=2, position_col=3, adp_col=5,
    ),
    'ESPN': FeedFormat(
        source='ESPN', min_fields=6,
        name_col=0, team_col=1, bye_col=2, position_col=3, adp_col=5,
    ),
    'ESPNTop300': FeedFormat(
        source='ESPNTop300', min_fields=6,
        name_col=0, team_col=1, bye_col=2, position_col=3, adp_col=5,
    ),
    # <id>, Rank, Player, Pos, Team, <pos rank>, AvgRank, AvgTier (no bye week)
    'RotoViz': FeedFormat(
        source='RotoViz', min_fields=8,
        name_col=2, position_col=3, team_col=4, adp_col=6,
        rank_col=1, tier_col=7, tier_source=TIER_FROM_COLUMN,
    ),
}


def normalize_position(pos: str) -> str:
    """Strip slot digits from a position label ("RB2" -> "RB")."""
    return re.sub(r"\d+$", '', (pos or '').strip()).upper()


def tier_for_rank(rank: int) -> int:
    """Tier for a 1-based overall rank: 1-15 -> 1, 16-30 -> 2, ..."""
    return math.ceil(rank / config.TIER_SIZE)


def tier_for_index(row_index: int) -> int:
    """Tier for a 0-based row index: 0-14 -> 1, 15-29 -> 2, ..."""
    return tier_for_rank(row_index + 1)


def _to_float_or_none(value: str) -> Optional[float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def _to_int_or_none(value: str) -> Optional[int]:
    parsed = _to_float_or_none(value)
    if parsed is None:
        return None
    return int(parsed)


def _split_fields(line: str, delimiter: str) -> List[str]:
    return [part.replace('"', '').strip() for part in line.split(delimiter)]


def _field(fields: List[str], col: Optional[int]) -> str:
    if col is None or col >= len(fields):
        return ''
    return fields[col]


def _resolve_tier(fields: List[str], row_index: int, feed_format: FeedFormat) -> int:
    if feed_format.tier_source == TIER_FROM_RANK:
        rank = _to_int_or_none(_field(fields, feed_format.rank_col))
        if rank is None or rank < 1:
            rank = row_index + 1
        return tier_for_rank(rank)

    if feed_format.tier_source == TIER_FROM_COLUMN:
        tier = _to_int_or_none(_field(fields, feed_format.tier_col))
        if tier is not None and tier >= 1:
            return tier

    return tier_for_index(row_index)


def parse_row(line: str, row_index: int, feed_format: FeedFormat) -> Optional[Player]:
    """
    Parse one data line into a Player.

    Args:
        line: Raw delimited line (header already removed)
        row_index: 0-based index of the line after the header
        feed_format: Column layout for the source

    Returns:
        Player, or None if the row is short, incomplete, or a K/DST
    """
    fields = _split_fields(line, feed_format.delimiter)
    if len(fields) < feed_format.min_fields:
        return None

    name = _field(fields, feed_format.name_col)
    position = normalize_position(_field(fields, feed_format.position_col))
    adp = _to_float_or_none(_field(fields, feed_format.adp_col))

    if not name or not position or adp is None:
        return None
    if position in config.EXCLUDED_POSITIONS:
        return None

    return Player(
        id=f"{feed_format.source}-{row_index}",
        name=name,
        team=_field(fields, feed_format.team_col),
        bye=_field(fields, feed_format.bye_col),
        position=position,
        adp=adp,
        tier=_resolve_tier(fields, row_index, feed_format),
        source=feed_format.source,
    )


def parse_feed(text: str, feed_format: FeedFormat) -> List[Player]:
    """
    Parse a whole feed, skipping the header line.

    Malformed rows are dropped without aborting the batch.

    Args:
        text: Raw feed contents
        feed_format: Column layout for the source

    Returns:
        Players in feed order
    """
    lines = text.split('\n')[1:]

    players = []
    for row_index, line in enumerate(lines):
        player = parse_row(line, row_index, feed_format)
        if player is not None:
            players.append(player)

    dropped = len(lines) - len(players)
    logger.debug(
        f"Parsed {feed_format.source}: {len(players)} players "
        f"({dropped} rows dropped)"
    )

    return players
