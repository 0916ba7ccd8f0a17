"""How alike two jobs are, and how informative comparing them would be."""
from typing import Optional

from ..core.catalog import EducationLevel, Job

PAY_WEIGHT = 0.4
SECTOR_WEIGHT = 0.3
EDUCATION_WEIGHT = 0.3

PROXIMITY_WEIGHT = 0.6
SIMILARITY_WEIGHT = 0.4

# Score gap at which proximity halves.
PROXIMITY_SCALE = 100.0


def pay_similarity(pay_a: int, pay_b: int) -> float:
    """1 for equal pay, falling to 0 once the gap reaches the average pay."""
    if pay_a <= 0 or pay_b <= 0:
        return 0.0
    avg = (pay_a + pay_b) / 2
    return 1 - min(abs(pay_a - pay_b) / avg, 1)


def education_similarity(level_a: Optional[EducationLevel], level_b: Optional[EducationLevel]) -> float:
    if level_a is None or level_b is None:
        return 0.0
    return 1 - abs(level_a - level_b) / len(EducationLevel)


def job_similarity(job_a: Job, job_b: Job, sector_a: Optional[str], sector_b: Optional[str]) -> float:
    """
    Weighted attribute overlap in [0, 1].

    Pay counts 40%, sharing a sector 30% and education level 30%. Missing
    pay or an unrecognised education label contributes nothing.
    """
    similarity = PAY_WEIGHT * pay_similarity(job_a.median_pay_annual, job_b.median_pay_annual)
    if sector_a is not None and sector_a == sector_b:
        similarity += SECTOR_WEIGHT
    similarity += EDUCATION_WEIGHT * education_similarity(job_a.education_level, job_b.education_level)
    return similarity


def score_proximity(score_a: float, score_b: float) -> float:
    return 1 / (1 + abs(score_a - score_b) / PROXIMITY_SCALE)


def discriminative_score(proximity: float, similarity: float) -> float:
    return PROXIMITY_WEIGHT * proximity + SIMILARITY_WEIGHT * similarity
