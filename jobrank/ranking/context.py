"""Mutable engine state, bundled so independent sessions never share it."""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from ..core.catalog import Catalog
from ..core.config import Config
from .history import ComparisonHistory
from .preferences import GroupPreferenceTracker
from .ratings import RatingStore

logger = logging.getLogger(__name__)


def date_string(day: date) -> str:
    """Render a date like ``Mon Jan 01 2024`` (the snapshot's ``lastDate``)."""
    return day.strftime("%a %b %d %Y")


@dataclass
class SessionState:
    today_count: int = 0
    total_comparisons: int = 0
    last_active_date: Optional[str] = None
    current_group_id: Optional[str] = None

    def roll_date(self, today: date) -> None:
        """Reset the daily counter when *today* differs from the last active day."""
        stamp = date_string(today)
        if self.last_active_date != stamp:
            if self.today_count:
                logger.info("New day: resetting daily count (was %d)", self.today_count)
            self.today_count = 0
            self.last_active_date = stamp

    def record_comparison(self) -> None:
        self.today_count += 1
        self.total_comparisons += 1


@dataclass
class EngineContext:
    """Everything a comparison session reads and writes."""
    ratings: RatingStore
    preferences: GroupPreferenceTracker
    history: ComparisonHistory
    state: SessionState = field(default_factory=SessionState)

    @classmethod
    def fresh(cls, catalog: Catalog, config: Optional[Config] = None) -> "EngineContext":
        """Default state for every job and sector in *catalog*."""
        config = config or Config()
        return cls(
            ratings=RatingStore(
                catalog.job_ids, k=config.rating.elo_k, default_score=config.rating.default_score
            ),
            preferences=GroupPreferenceTracker(
                catalog.sectors, win_increment=config.preferences.win_increment
            ),
            history=ComparisonHistory(),
        )

    @classmethod
    def from_snapshot(
        cls,
        catalog: Catalog,
        snapshot: Optional[Dict[str, Any]],
        today: date,
        config: Optional[Config] = None,
    ) -> "EngineContext":
        """
        Rebuild engine state from a saved snapshot.

        Saved ratings are merged into the catalog by id; ids the catalog no
        longer has are ignored and new catalog ids keep defaults. The daily
        counter resets when the snapshot is from another day.
        """
        context = cls.fresh(catalog, config)
        if snapshot:
            state = context.state
            state.today_count = int(snapshot.get("todayCount") or 0)
            state.total_comparisons = int(snapshot.get("totalComparisons") or 0)
            state.last_active_date = snapshot.get("lastDate")
            state.current_group_id = snapshot.get("currentSectorId")

            context.history = ComparisonHistory(snapshot.get("comparedJobPairs") or [])
            context.preferences.update(snapshot.get("sectorPreferences") or {})

            skipped = 0
            for job_id, saved in (snapshot.get("jobs") or {}).items():
                if job_id not in catalog:
                    skipped += 1
                    continue
                context.ratings.set(job_id, saved["score"], saved["wins"], saved["losses"])
            if skipped:
                logger.info("Ignored saved ratings for %d job(s) not in the catalog", skipped)

        context.state.roll_date(today)
        return context

    def to_snapshot(self) -> Dict[str, Any]:
        """Full JSON-serialisable snapshot of the engine state."""
        return {
            "todayCount": self.state.today_count,
            "totalComparisons": self.state.total_comparisons,
            "lastDate": self.state.last_active_date,
            "comparedJobPairs": self.history.to_list(),
            "sectorPreferences": self.preferences.to_dict(),
            "currentSectorId": self.state.current_group_id,
            "jobs": self.ratings.to_dict(),
        }
