"""Per-job Elo rating state."""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from ..core.errors import UnknownItemError

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 1000.0
DEFAULT_K = 32.0


def elo_update(winner_score: float, loser_score: float, k: float = DEFAULT_K) -> Tuple[float, float]:
    """
    Apply one logistic rating update.

    An upset against a much stronger opponent earns close to ``k``; beating
    a much weaker one earns almost nothing. Scores are unbounded.

    Returns:
        ``(new_winner_score, new_loser_score)``
    """
    expected_winner = 1 / (1 + 10 ** ((loser_score - winner_score) / 400))
    expected_loser = 1 - expected_winner
    return (
        winner_score + k * (1 - expected_winner),
        loser_score + k * (0 - expected_loser),
    )


@dataclass
class RatingState:
    score: float = DEFAULT_SCORE
    wins: int = 0
    losses: int = 0

    @property
    def comparisons(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> dict:
        return {"score": self.score, "wins": self.wins, "losses": self.losses}


class RatingStore:
    """
    Rating state for every job in a catalog.

    State is created lazily with the default score the first time a job is
    looked up. Ids outside the known set raise ``UnknownItemError``.
    """

    def __init__(self, job_ids: Iterable[str], k: float = DEFAULT_K, default_score: float = DEFAULT_SCORE):
        self._known = list(dict.fromkeys(job_ids))
        self._known_set = set(self._known)
        self.k = k
        self.default_score = default_score
        self._states: Dict[str, RatingState] = {}

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._known_set

    def __iter__(self) -> Iterator[str]:
        return iter(self._known)

    def get(self, job_id: str) -> RatingState:
        if job_id not in self._known_set:
            raise UnknownItemError(job_id)
        state = self._states.get(job_id)
        if state is None:
            state = RatingState(score=self.default_score)
            self._states[job_id] = state
        return state

    def score(self, job_id: str) -> float:
        return self.get(job_id).score

    def set(self, job_id: str, score: float, wins: int, losses: int) -> None:
        """Restore saved state for a job."""
        if wins < 0 or losses < 0:
            raise ValueError(f"Negative win/loss count for {job_id}")
        state = self.get(job_id)
        state.score = float(score)
        state.wins = int(wins)
        state.losses = int(losses)

    def record_outcome(self, winner_id: str, loser_id: str) -> Tuple[float, float]:
        """Update both jobs after *winner_id* was preferred over *loser_id*."""
        if winner_id == loser_id:
            raise ValueError("A job cannot be compared with itself")
        winner = self.get(winner_id)
        loser = self.get(loser_id)

        winner.score, loser.score = elo_update(winner.score, loser.score, self.k)
        winner.wins += 1
        loser.losses += 1

        logger.debug(
            "Rating update: %s -> %.1f, %s -> %.1f",
            winner_id, winner.score, loser_id, loser.score,
        )
        return winner.score, loser.score

    def to_dict(self) -> Dict[str, dict]:
        return {job_id: self.get(job_id).to_dict() for job_id in self._known}
