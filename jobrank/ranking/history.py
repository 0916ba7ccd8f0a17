"""Record of job pairs that have already been compared."""
from itertools import combinations
from typing import Iterable, Iterator, Sequence, Set

from ..core.catalog import pair_key

__all__ = ["ComparisonHistory", "pair_key"]


class ComparisonHistory:
    """Append-only set of compared pairs, keyed by ``pair_key``.

    Keys for jobs that have since left the catalog are kept, so they survive
    a save, but they never count towards progress on the current catalog.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: Set[str] = set(keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def has(self, id_a: str, id_b: str) -> bool:
        return pair_key(id_a, id_b) in self._keys

    def record(self, id_a: str, id_b: str) -> str:
        key = pair_key(id_a, id_b)
        self._keys.add(key)
        return key

    def compared_count(self, job_ids: Sequence[str]) -> int:
        """Number of pairs drawn from *job_ids* already compared."""
        return sum(1 for a, b in combinations(job_ids, 2) if self.has(a, b))

    def is_exhausted(self, job_ids: Sequence[str]) -> bool:
        n = len(job_ids)
        return self.compared_count(job_ids) >= n * (n - 1) // 2

    def clear(self) -> None:
        self._keys.clear()

    def to_list(self) -> list[str]:
        return sorted(self._keys)
