"""Ranked listing of jobs and its CSV export."""
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from ..core.catalog import Catalog
from .ratings import RatingStore

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Rank", "Job Title", "Sector", "Score", "Median Salary", "Education", "Growth"]


def ranking_rows(catalog: Catalog, ratings: RatingStore) -> List[Dict[str, Any]]:
    """
    Jobs sorted by descending score; ties keep catalog order.

    Each row carries rank, id, title, sector, rounded score, win/loss
    counts, pay, education and growth.
    """
    ordered = sorted(catalog.job_ids, key=ratings.score, reverse=True)
    rows = []
    for rank, job_id in enumerate(ordered, 1):
        job = catalog.job(job_id)
        state = ratings.get(job_id)
        rows.append({
            "rank": rank,
            "id": job_id,
            "title": job.title,
            "sector": catalog.sector_label(job_id),
            "score": round(state.score),
            "wins": state.wins,
            "losses": state.losses,
            "median_pay_annual": job.median_pay_annual,
            "entry_level_education": job.entry_level_education,
            "employment_outlook_percent": job.employment_outlook_percent,
        })
    return rows


def to_dataframe(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Shape ranking rows into the export table."""
    df = pd.DataFrame(
        [
            {
                "Rank": r["rank"],
                "Job Title": r["title"],
                "Sector": r["sector"],
                "Score": r["score"],
                "Median Salary": f"${r['median_pay_annual']}",
                "Education": r["entry_level_education"],
                "Growth": f"{r['employment_outlook_percent']:g}%",
            }
            for r in rows
        ],
        columns=EXPORT_COLUMNS,
    )
    return df


def export_csv(rows: List[Dict[str, Any]], path: Path) -> Path:
    """Write the ranking to *path* as CSV and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_dataframe(rows).to_csv(path, index=False)
    logger.info("Exported %d ranked jobs to %s", len(rows), path)
    return path


def to_csv_text(rows: List[Dict[str, Any]]) -> str:
    return to_dataframe(rows).to_csv(index=False)
