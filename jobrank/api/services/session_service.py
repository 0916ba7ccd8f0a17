"""Service layer wrapping a single comparison session for the API.

Loads the catalog and saved progress once, then exposes the session
through plain dictionaries so routers never touch engine objects.
"""
import logging
from typing import Any, Dict, Optional

from ...core.catalog import Catalog
from ...core.config import Config
from ...core.errors import CatalogError
from ...core.storage import SnapshotStore
from ...ranking.report import to_csv_text
from ...ranking.session import ComparisonSession, View
from ... import dirs

logger = logging.getLogger(__name__)


class SessionService:
    """Owns the one active session behind the HTTP API."""

    def __init__(self, config: Config, catalog: Optional[Catalog] = None):
        """
        Initialize SessionService.

        Args:
            config: Loaded configuration (catalog and state paths).
            catalog: Preloaded catalog; read from ``config.paths.catalog``
                when omitted.

        Raises:
            CatalogError: If no catalog can be loaded.
        """
        self.config = config
        self.catalog = catalog or self._load_catalog(config)
        self.store = SnapshotStore(config.paths.state_file)
        self.session = self._new_session(self.store.load())

    @staticmethod
    def _load_catalog(config: Config) -> Catalog:
        path = config.paths.catalog or dirs.find_catalog()
        if path is None:
            raise CatalogError("No catalog configured and no catalog.json found")
        return Catalog.load(path)

    def _new_session(self, snapshot: Optional[Dict[str, Any]]) -> ComparisonSession:
        session = ComparisonSession.resume(
            self.catalog, snapshot, config=self.config, store=self.store
        )
        session.start()
        return session

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def _job(self, job_id: str) -> dict:
        data = self.catalog.job(job_id).to_dict()
        data["sector"] = self.catalog.sector_label(job_id)
        return data

    def current(self) -> dict:
        """Current view with the pair on screen, if any."""
        view: Dict[str, Any] = {"view": self.session.view.value, "stats": self.session.stats()}
        proposal = self.session.current
        if self.session.view is View.COMPARISON and proposal is not None:
            view["option1"] = self._job(proposal.job_a)
            view["option2"] = self._job(proposal.job_b)
        return view

    def choose(self, choice: int) -> dict:
        outcome = self.session.choose(choice)
        return {
            "winner_id": outcome.winner_id,
            "loser_id": outcome.loser_id,
            "winner_score": outcome.winner_score,
            "loser_score": outcome.loser_score,
            "next": self.current(),
        }

    def skip(self) -> dict:
        self.session.skip()
        return self.current()

    def show_results(self) -> dict:
        results = self.session.show_results()
        return {"view": self.session.view.value, "results": results}

    def back_to_comparison(self) -> dict:
        self.session.back_to_comparison()
        return self.current()

    def results(self) -> list:
        return self.session.ranking()

    def export_csv(self) -> str:
        return to_csv_text(self.session.ranking())

    def reset(self) -> dict:
        """Forget all progress and start a fresh session."""
        self.store.clear()
        self.session = self._new_session(None)
        logger.info("Progress reset")
        return self.current()
