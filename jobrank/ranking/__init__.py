"""Adaptive pairwise-comparison engine."""

from .ratings import RatingState, RatingStore, elo_update
from .preferences import GroupPreferenceTracker
from .history import ComparisonHistory, pair_key
from .context import EngineContext, SessionState
from .sampler import PairSelector, PairProposal
from .report import ranking_rows
from .session import ComparisonSession, ComparisonOutcome, View

__all__ = [
    "RatingState",
    "RatingStore",
    "elo_update",
    "GroupPreferenceTracker",
    "ComparisonHistory",
    "pair_key",
    "EngineContext",
    "SessionState",
    "PairSelector",
    "PairProposal",
    "ranking_rows",
    "ComparisonSession",
    "ComparisonOutcome",
    "View",
]
