"""Fact-store access for the strategy views.

Views read everything they need up front through :func:`fetch`, then call
:func:`check_cancelled` before aggregating, so a cancelled or failed query
never produces a partial result.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Protocol, Set, TypeVar

import pandas as pd

from src.strategy.models import TeamRef

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FactStore(Protocol):
    """The league queries the strategy views read through.

    Fact frames carry a numeric ``score`` column plus ``player`` and/or
    ``machine``. List and search queries are not needed by the views.
    """

    def roster_scoped_facts(self, team: str, venue: Optional[str] = None) -> pd.DataFrame:
        """``player, machine, score`` for the team's current roster."""

    def player_machine_facts(
        self, team: str, machine: str, venue: Optional[str] = None
    ) -> pd.DataFrame:
        """``player, machine, score`` for the team's current roster on one machine."""

    def single_player_facts(self, name: str, venue: Optional[str] = None) -> pd.DataFrame:
        """``machine, score`` for one player across every team."""

    def league_baseline(self, percentile: float = 50) -> Mapping[str, float]:
        """Per-machine percentile over every current roster."""

    def venue_machines(self, venue: str) -> Set[str]:
        """Machine keys at the venue."""

    def machine_names(self) -> Mapping[str, str]:
        """Machine key to display name."""

    def current_team_of(self, name: str) -> Optional[TeamRef]:
        """The player's current team, ``None`` when unknown."""


class StrategyQueryError(Exception):
    """Raised when a fact-store query needed by a view fails."""


class QueryCancelled(Exception):
    """Raised when a view is cancelled before aggregation begins."""


def fetch(description: str, query: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a fact-store *query*, adding *description* to any failure.

    Raises:
        StrategyQueryError: wrapping whatever the store raised.
        QueryCancelled: passed through untouched if the store raises it.
    """
    try:
        return query(*args, **kwargs)
    except QueryCancelled:
        raise
    except Exception as e:
        logger.warning("Query failed (%s): %s", description, e)
        raise StrategyQueryError(f"{description}: {e}") from e


def check_cancelled(cancel: Optional[Any], view: str) -> None:
    """Raise :class:`QueryCancelled` if the *cancel* token has been set.

    *cancel* is anything with an ``is_set()`` method, typically a
    :class:`threading.Event`. ``None`` means the query cannot be cancelled.
    """
    if cancel is not None and cancel.is_set():
        logger.warning("%s cancelled before aggregation", view)
        raise QueryCancelled(f"{view} cancelled")


def machine_name(names: Mapping[str, str], key: str) -> str:
    """Display name for a machine, falling back to its key."""
    return names.get(key, key)
