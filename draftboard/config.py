"""
Configuration constants for the fantasy football ADP draft board.
"""

# League Settings
NUM_TEAMS = 12
TEAM_ID_PREFIX = 'team'  # team ids are team1..teamN

# Roster Construction
# Dedicated buckets per position; anything else falls back to FLEX
ROSTER_SLOTS = ['QB', 'RB', 'WR', 'TE', 'FLEX']
FLEX_SLOT = 'FLEX'

# Positions dropped from every feed (kickers and team defenses)
EXCLUDED_POSITIONS = ['K', 'DST', 'DEF', 'D/ST']

# Tiers: one tier per round of 15 picks
TIER_SIZE = 15

# Board layout (snake order)
BOARD_ROWS = 15
BOARD_COLS = NUM_TEAMS

# ===== FEED CONFIGURATION =====

DATA_DIR = 'data/feeds'

# Feed label -> default file name inside DATA_DIR (or an http(s) URL)
FEED_FILES = {
    'FantasyPros': 'FantasyPros_2025_Overall_ADP_Rankings.csv',
    'Sleeper': 'Sleeper_2025_Overall_ADP_Rankings.csv',
    'ESPN': 'ESPN_2025_Overall_ADP_Rankings.csv',
    'ESPNTop300': 'NFL25_Cleaned.csv',
    'RotoViz': 'RVRedraftRankings.csv',
}

DEFAULT_SOURCE = 'ESPN'

# Seconds before a URL feed is abandoned
FEED_TIMEOUT = 30
MAX_FEED_WORKERS = 5

# Mock data for sources without a live feed
MOCK_PLAYER_COUNT = 180
MOCK_POSITIONS = ['QB', 'RB', 'WR', 'TE']
MOCK_TIER_CYCLE = 60  # tiers restart every 60 mock players
MOCK_SEED = 2025

# ===== PERSISTENCE =====

TEAM_NAMES_FILE = 'data/team_names.json'
OUTPUT_DIR = 'data/output'

# Logging
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# ===== API SERVER CONFIGURATION =====

API_HOST = '127.0.0.1'
API_PORT = 8000
API_TITLE = 'Fantasy Football Draft Board API'
API_VERSION = '1.0.0'
