"""Smart pair selection for job preference comparisons."""

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.catalog import Catalog
from ..core.config import SelectionConfig
from ..core.errors import NoEligibleGroupsError
from .context import EngineContext
from .similarity import discriminative_score, job_similarity, score_proximity

logger = logging.getLogger(__name__)

Pair = Tuple[str, str]


@dataclass(frozen=True)
class PairProposal:
    """The next comparison to present, in presentation order."""
    job_a: str
    job_b: str
    sector_a: Optional[str]
    sector_b: Optional[str]
    anchor_sector: Optional[str]
    fallback: bool = False

    @property
    def ids(self) -> Pair:
        return (self.job_a, self.job_b)

    @property
    def sectors(self) -> Tuple[Optional[str], Optional[str]]:
        return (self.sector_a, self.sector_b)


class PairSelector:
    """
    Choose the next job pair using an anchor-sector + discriminative strategy.

    Selection steps:
    - Pick an anchor sector, favouring the top 30% by preference 60% of
      the time
    - Enumerate every pair not yet compared (random pair if none remain)
    - Keep pairs touching the anchor sector, when there are any
    - After 20 comparisons, shortlist the 10 most discriminative pairs
      (close scores, similar jobs) and draw one at random

    Selection never mutates the engine context.
    """

    def __init__(
        self,
        catalog: Catalog,
        config: Optional[SelectionConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.catalog = catalog
        self.config = config or SelectionConfig()
        self.rng = rng if rng is not None else random.Random(seed)

    def select(self, context: EngineContext) -> PairProposal:
        """
        Propose the next pair to compare.

        Raises:
            NoEligibleGroupsError: If no sector has two or more jobs.
        """
        anchor = self.choose_anchor_sector(context)

        available = self.available_pairs(context)
        if not available:
            job_a, job_b = self.rng.sample(self.catalog.job_ids, 2)
            logger.debug("All pairs compared; falling back to random pair %s / %s", job_a, job_b)
            return self._proposal(job_a, job_b, anchor, fallback=True)

        anchored = [
            (a, b) for a, b in available
            if self.catalog.sector_of(a) == anchor or self.catalog.sector_of(b) == anchor
        ]
        pool = self.discriminative_pairs(anchored or available, context)
        job_a, job_b = self.rng.choice(pool)
        logger.debug(
            "Anchor %s: %d available, %d anchored, chose %s / %s",
            anchor, len(available), len(anchored), job_a, job_b,
        )
        return self._proposal(job_a, job_b, anchor)

    def choose_anchor_sector(self, context: EngineContext) -> str:
        """Pick the sector this round leans toward."""
        eligible = self.catalog.eligible_sectors()
        if not eligible:
            raise NoEligibleGroupsError()

        ranked = context.preferences.ranked(eligible)
        top_count = max(1, math.floor(len(ranked) * self.config.top_group_fraction))
        show_top = self.rng.random() < self.config.top_group_probability

        if show_top and len(ranked) > top_count:
            candidates = ranked[:top_count]
        else:
            candidates = ranked
        return self.rng.choice(candidates)

    def available_pairs(self, context: EngineContext) -> List[Pair]:
        """Every unordered pair of distinct jobs not yet in the history."""
        ids = self.catalog.job_ids
        history = context.history
        return [
            (ids[i], ids[j])
            for i in range(len(ids))
            for j in range(i + 1, len(ids))
            if not history.has(ids[i], ids[j])
        ]

    def discriminative_pairs(self, pairs: List[Pair], context: EngineContext) -> List[Pair]:
        """
        Shortlist the pairs most likely to sharpen the ranking.

        Early on (fewer than ``early_exploration_threshold`` comparisons)
        every pair is returned unchanged to favour exploration.
        """
        if context.state.total_comparisons < self.config.early_exploration_threshold:
            return pairs

        scored = sorted(
            pairs,
            key=lambda pair: self.pair_score(pair, context),
            reverse=True,
        )
        return scored[: min(self.config.discriminative_shortlist, len(scored))]

    def pair_score(self, pair: Pair, context: EngineContext) -> float:
        id_a, id_b = pair
        proximity = score_proximity(context.ratings.score(id_a), context.ratings.score(id_b))
        similarity = job_similarity(
            self.catalog.job(id_a),
            self.catalog.job(id_b),
            self.catalog.sector_of(id_a),
            self.catalog.sector_of(id_b),
        )
        return discriminative_score(proximity, similarity)

    def _proposal(self, job_a: str, job_b: str, anchor: str, fallback: bool = False) -> PairProposal:
        return PairProposal(
            job_a=job_a,
            job_b=job_b,
            sector_a=self.catalog.sector_of(job_a),
            sector_b=self.catalog.sector_of(job_b),
            anchor_sector=anchor,
            fallback=fallback,
        )
