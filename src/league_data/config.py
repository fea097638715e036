from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
REPORTS_DIR = DATA_DIR / "reports"

# League export file names, one CSV per table
FILE_NAMES = {
    "games": "games.csv",
    "rosters": "rosters.csv",
    "teams": "teams.csv",
    "venues": "venues.csv",
    "machines": "machines.csv",
    "venue_machines": "venue_machines.csv",
}

# Columns every export must carry (extra columns are ignored)
REQUIRED_COLUMNS = {
    "games": ["season", "week", "venue", "machine", "player", "team", "score"],
    "rosters": ["season", "team", "player"],
    "teams": ["season", "team", "name", "home_venue"],
    "venues": ["venue", "name"],
    "machines": ["machine", "name"],
    "venue_machines": ["venue", "machine"],
}

# Columns parsed as integers
INTEGER_COLUMNS = {"season", "week"}

# Log output
LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE_NAME = "league_scout.log"
