"""Comparison session: one round at a time, from proposal to saved outcome."""

import logging
import random
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from ..core.catalog import Catalog
from ..core.config import Config
from ..core.errors import InvalidTransitionError, NoActiveComparisonError
from .context import EngineContext, SessionState
from .report import ranking_rows
from .sampler import PairProposal, PairSelector

logger = logging.getLogger(__name__)


class View(str, Enum):
    LOADING = "loading"
    COMPARISON = "comparison"
    RESULTS = "results"


_TRANSITIONS = {
    View.LOADING: {View.COMPARISON},
    View.COMPARISON: {View.COMPARISON, View.RESULTS},
    View.RESULTS: {View.COMPARISON},
}


class SnapshotSink(Protocol):
    def save(self, snapshot: Dict[str, Any]) -> None: ...


@dataclass(frozen=True)
class ComparisonOutcome:
    winner_id: str
    loser_id: str
    winner_score: float
    loser_score: float
    pair_key: str


class ComparisonSession:
    """
    Orchestrate comparison rounds over a catalog.

    The session moves ``loading -> comparison <-> results``. Each decided
    comparison updates ratings, history and sector preferences together,
    asks the store to save a full snapshot, then proposes the next pair.
    Skipping proposes a new pair without touching any state.
    """

    def __init__(
        self,
        catalog: Catalog,
        context: Optional[EngineContext] = None,
        config: Optional[Config] = None,
        store: Optional[SnapshotSink] = None,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ):
        self.catalog = catalog
        self.config = config or Config()
        self.context = context or EngineContext.fresh(catalog, self.config)
        self.store = store
        self.selector = PairSelector(
            catalog,
            self.config.selection,
            rng=rng,
            seed=self.config.session.seed,
        )
        self._today = today
        self.view = View.LOADING
        self.current: Optional[PairProposal] = None

    @classmethod
    def resume(
        cls,
        catalog: Catalog,
        snapshot: Optional[Dict[str, Any]],
        config: Optional[Config] = None,
        store: Optional[SnapshotSink] = None,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ) -> "ComparisonSession":
        """Rebuild a session from a snapshot (or defaults when it is None)."""
        context = EngineContext.from_snapshot(catalog, snapshot, today(), config)
        return cls(catalog, context, config=config, store=store, rng=rng, today=today)

    @property
    def state(self) -> SessionState:
        return self.context.state

    # ------------------------------------------------------------------
    # View transitions
    # ------------------------------------------------------------------

    def _move_to(self, view: View) -> None:
        if view not in _TRANSITIONS[self.view]:
            raise InvalidTransitionError(f"Cannot go from {self.view.value} to {view.value}")
        self.view = view

    def start(self) -> PairProposal:
        """Leave the loading view and present the first pair."""
        return self.next_comparison()

    def next_comparison(self) -> PairProposal:
        """Propose and present a new pair."""
        proposal = self.selector.select(self.context)
        self._move_to(View.COMPARISON)
        self.current = proposal
        self.state.current_group_id = proposal.anchor_sector
        return proposal

    def show_results(self) -> List[Dict[str, Any]]:
        self._move_to(View.RESULTS)
        return self.ranking()

    def back_to_comparison(self) -> PairProposal:
        if self.view is not View.RESULTS:
            raise InvalidTransitionError(f"Cannot return to comparison from {self.view.value}")
        if self.current is None:
            return self.next_comparison()
        self._move_to(View.COMPARISON)
        return self.current

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def _require_comparison(self) -> PairProposal:
        if self.view is not View.COMPARISON or self.current is None:
            raise NoActiveComparisonError("No comparison is being shown")
        return self.current

    def choose(self, choice: int) -> ComparisonOutcome:
        """
        Record that option *choice* (1 or 2) was preferred.

        Returns:
            The applied outcome. ``self.current`` holds the next pair.
        """
        if choice not in (1, 2):
            raise ValueError(f"choice must be 1 or 2, got {choice!r}")
        proposal = self._require_comparison()

        winner_idx = choice - 1
        loser_idx = 1 - winner_idx
        winner_id, loser_id = proposal.ids[winner_idx], proposal.ids[loser_idx]

        winner_score, loser_score = self.context.ratings.record_outcome(winner_id, loser_id)
        key = self.context.history.record(winner_id, loser_id)
        self.context.preferences.on_outcome(
            proposal.sectors[winner_idx], proposal.sectors[loser_idx]
        )

        self.state.roll_date(self._today())
        self.state.record_comparison()
        logger.info(
            "%s preferred over %s (comparison #%d)",
            winner_id, loser_id, self.state.total_comparisons,
        )

        self.save()
        self.next_comparison()
        return ComparisonOutcome(winner_id, loser_id, winner_score, loser_score, key)

    def skip(self) -> PairProposal:
        """Discard the current pair and show another one."""
        self._require_comparison()
        return self.next_comparison()

    # ------------------------------------------------------------------
    # Persistence and reporting
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        return self.context.to_snapshot()

    def save(self) -> None:
        if self.store is not None:
            self.store.save(self.snapshot())

    def ranking(self) -> List[Dict[str, Any]]:
        return ranking_rows(self.catalog, self.context.ratings)

    def stats(self) -> Dict[str, Any]:
        total_pairs = self.catalog.total_pairs()
        compared = self.context.history.compared_count(self.catalog.job_ids)
        target = self.config.session.daily_target
        return {
            "today_count": self.state.today_count,
            "daily_target": target,
            "daily_target_met": self.state.today_count >= target,
            "total_comparisons": self.state.total_comparisons,
            "pairs_compared": compared,
            "pairs_remaining": max(0, total_pairs - compared),
            "history_exhausted": compared >= total_pairs,
            "current_sector": self.state.current_group_id,
        }
