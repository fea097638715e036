"""CSV ingestion for league exports.

Each table of the league export (games, rosters, teams, venues, machines,
venue_machines) is one CSV. Handles the usual spreadsheet quirks:
- Stray whitespace and quotes around values
- Comma-formatted scores (e.g., "12,345,670")
- Blank rows and games with no recorded score
"""

import logging
from pathlib import Path
from typing import Dict

import pandas as pd

from src.league_data.config import FILE_NAMES, INTEGER_COLUMNS, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a league export cannot be read."""


def _parse_score(value):
    """Parse a score that may contain commas (e.g., '12,345,670' -> 12345670.0)."""
    if pd.isna(value):
        return float("nan")
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"')
    if s == "":
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class LeagueDataIngester:
    """Reads the league export CSVs from a single directory.

    Each read method returns a DataFrame with:
    - Exactly the required columns, in a fixed order
    - String columns stripped of whitespace and quotes
    - ``season``/``week`` as integers and ``score`` as float
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, table: str) -> Path:
        """Build the full file path for a table, raising if missing."""
        filepath = self.data_dir / FILE_NAMES[table]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    def read_table(self, table: str) -> pd.DataFrame:
        """Read and clean one export table.

        Raises:
            FileNotFoundError: if the CSV is missing.
            ValueError: if required columns are missing.
        """
        filepath = self._resolve_path(table)
        logger.info("Reading %s: %s", table, filepath.name)

        df = pd.read_csv(filepath, quotechar='"', dtype=str, skipinitialspace=True)
        df.columns = [str(c).strip().lower() for c in df.columns]

        required = REQUIRED_COLUMNS[table]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"{filepath.name} is missing columns: {missing}")

        df = df[required].copy()
        for col in required:
            df[col] = df[col].str.strip('"').str.strip()

        # Drop fully blank rows
        df = df.dropna(how="all")

        for col in INTEGER_COLUMNS & set(required):
            df[col] = pd.to_numeric(df[col], errors="coerce")
            df = df.dropna(subset=[col])
            df[col] = df[col].astype(int)

        if "score" in df.columns:
            df["score"] = df["score"].apply(_parse_score)
            unscored = df["score"].isna()
            if unscored.any():
                logger.warning("Dropping %d %s rows with no score", unscored.sum(), table)
                df = df[~unscored]

        df = df.reset_index(drop=True)
        logger.info("Loaded %d %s rows", len(df), table)
        return df

    def read_all(self) -> Dict[str, pd.DataFrame]:
        """Read every export table.

        Returns:
            dict keyed by table name (see ``FILE_NAMES``).

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {table: self.read_table(table) for table in FILE_NAMES}
        except Exception as e:
            raise IngestionError(f"Failed to read league export: {e}") from e
