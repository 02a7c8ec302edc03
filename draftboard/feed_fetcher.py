"""
Fetch ADP feeds from local files or URLs and parse them into players.
"""

import concurrent.futures
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import requests
from tqdm import tqdm

from . import config
from .feed_parser import FEED_FORMATS, parse_feed
from .player import Player

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Loads every configured ADP feed; a failed feed degrades to no players."""

    def __init__(
        self,
        data_dir: Optional[str] = None,
        feed_locations: Optional[Dict[str, str]] = None,
        timeout: int = config.FEED_TIMEOUT,
        show_progress: bool = True
    ):
        """
        Initialize the feed fetcher.

        Args:
            data_dir: Directory holding feed files (default from config)
            feed_locations: Source label -> file name or http(s) URL
                            (default: config.FEED_FILES)
            timeout: Seconds before a URL feed is abandoned
            show_progress: Show a tqdm progress bar in fetch_all()
        """
        self.data_dir = Path(data_dir or config.DATA_DIR)
        self.feed_locations = dict(feed_locations or config.FEED_FILES)
        self.timeout = timeout
        self.show_progress = show_progress

        # Connection pooling for URL feeds
        self.session = requests.Session()

    @staticmethod
    def _is_url(location: str) -> bool:
        return location.startswith('http://') or location.startswith('https://')

    def _read_text(self, location: str) -> str:
        """Read raw feed text from a URL or a path relative to data_dir."""
        if self._is_url(location):
            response = self.session.get(location, timeout=self.timeout)
            response.raise_for_status()
            return response.text

        path = Path(location)
        if not path.is_absolute():
            path = self.data_dir / path
        if not path.exists():
            raise FileNotFoundError(f"Feed file not found: {path}")

        return path.read_text(encoding='utf-8-sig')

    def fetch_source(self, source: str) -> List[Player]:
        """
        Fetch and parse a single source.

        Args:
            source: Feed label (e.g. 'Sleeper')

        Returns:
            Parsed players, or an empty list if the feed could not be read

        Raises:
            KeyError: If the source label is not configured
        """
        if source not in FEED_FORMATS:
            raise KeyError(f"Unknown feed source: {source}")
        if source not in self.feed_locations:
            raise KeyError(f"No feed location configured for {source}")

        location = self.feed_locations[source]

        try:
            text = self._read_text(location)
        except (OSError, UnicodeDecodeError, requests.exceptions.RequestException) as e:
            logger.error(f"{source} load error: {e}")
            return []

        players = parse_feed(text, FEED_FORMATS[source])

        logger.info(f"{source} loaded: {len(players)} players from {location}")
        logger.debug(f"{source} first players: {[p.name for p in players[:5]]}")

        return players

    def fetch_all(self, sources: Optional[Iterable[str]] = None) -> Dict[str, List[Player]]:
        """
        Fetch all sources concurrently and wait for every one of them.

        Args:
            sources: Feed labels to load (default: every configured location)

        Returns:
            Dictionary mapping source label to its players
        """
        labels = list(sources) if sources is not None else list(self.feed_locations)
        results: Dict[str, List[Player]] = {}

        workers = max(1, min(config.MAX_FEED_WORKERS, len(labels)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.fetch_source, label): label for label in labels}
            completed = concurrent.futures.as_completed(futures)
            if self.show_progress:
                completed = tqdm(completed, total=len(futures), desc="Fetching ADP feeds")

            for future in completed:
                label = futures[future]
                try:
                    results[label] = future.result()
                except Exception as e:
                    logger.error(f"{label} failed while parsing: {e}", exc_info=True)
                    results[label] = []

        # Keep the caller's source order
        return {label: results[label] for label in labels}
