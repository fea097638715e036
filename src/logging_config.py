import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from src.league_data.config import LOG_DIR, LOG_FILE_NAME

_FILE_HANDLER = "league_scout.file"
_CONSOLE_HANDLER = "league_scout.console"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> Path:
    """Configure root logging for the league scout tools.

    Adds a rotating file handler (always at DEBUG) and a console handler at
    *log_level*. Calling it again adds whichever of the two is missing and
    updates the console level.

    Returns:
        Path of the log file.

    Raises:
        ValueError: if *log_level* is not a logging level name.
    """
    level = _resolve_level(log_level)
    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_file = log_dir / LOG_FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, logging.DEBUG))

    existing = {h.get_name(): h for h in root_logger.handlers}
    file_handler = existing.get(_FILE_HANDLER)
    console_handler = existing.get(_CONSOLE_HANDLER)
    if file_handler is not None and console_handler is not None:
        console_handler.setLevel(level)
        return log_file

    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if file_handler is None:
        log_dir.mkdir(parents=True, exist_ok=True)
        # 5MB per file, keep 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    console_handler.setLevel(level)

    logging.getLogger(__name__).info("Logging initialized (level=%s, file=%s)", log_level, log_file)
    return log_file
