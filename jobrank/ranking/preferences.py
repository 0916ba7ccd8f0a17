"""Sector interest scores learned from comparison outcomes."""
from typing import Dict, Iterable, Mapping, Optional


class GroupPreferenceTracker:
    """
    Track how much the user leans toward each sector.

    A win raises the winner's sector by ``win_increment``. A loss to a job
    from a *different* sector lowers the loser's sector by half that,
    never below zero. Same-sector comparisons only apply the increment.
    """

    def __init__(self, group_ids: Iterable[str] = (), win_increment: float = 1.0):
        self.win_increment = win_increment
        self._scores: Dict[str, float] = {gid: 0.0 for gid in group_ids}

    @property
    def loss_decrement(self) -> float:
        return self.win_increment / 2

    def preference(self, group_id: Optional[str]) -> float:
        if group_id is None:
            return 0.0
        return self._scores.get(group_id, 0.0)

    def on_outcome(self, winning_group: Optional[str], losing_group: Optional[str]) -> None:
        if winning_group:
            self._scores[winning_group] = self.preference(winning_group) + self.win_increment
        if losing_group and losing_group != winning_group:
            self._scores[losing_group] = max(0.0, self.preference(losing_group) - self.loss_decrement)

    def update(self, saved: Mapping[str, float]) -> None:
        """Overlay saved scores (negative values are clamped to zero)."""
        for gid, value in saved.items():
            self._scores[gid] = max(0.0, float(value))

    def ranked(self, group_ids: Iterable[str]) -> list[str]:
        """Order *group_ids* by descending preference; ties keep their order."""
        return sorted(group_ids, key=self.preference, reverse=True)

    def to_dict(self) -> Dict[str, float]:
        return dict(self._scores)
