"""Request and response models for the jobrank API."""
from typing import List, Literal, Optional

from pydantic import BaseModel


class JobView(BaseModel):
    id: str
    title: str
    description: str = ""
    sector: str = ""
    median_pay_annual: int = 0
    entry_level_education: str = ""
    employment_outlook_percent: float = 0.0


class SessionStats(BaseModel):
    today_count: int
    daily_target: int
    daily_target_met: bool
    total_comparisons: int
    pairs_compared: int
    pairs_remaining: int
    history_exhausted: bool
    current_sector: Optional[str] = None


class ComparisonView(BaseModel):
    view: str
    option1: Optional[JobView] = None
    option2: Optional[JobView] = None
    stats: SessionStats


class ChoiceRequest(BaseModel):
    choice: Literal[1, 2]


class ChoiceResponse(BaseModel):
    winner_id: str
    loser_id: str
    winner_score: float
    loser_score: float
    next: ComparisonView


class RankedJob(BaseModel):
    rank: int
    id: str
    title: str
    sector: str
    score: int
    wins: int
    losses: int
    median_pay_annual: int
    entry_level_education: str
    employment_outlook_percent: float


class ResultsView(BaseModel):
    view: str
    results: List[RankedJob]
