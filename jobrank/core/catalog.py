"""Occupation catalog: jobs, sectors and the education scale.

The catalog is read-only for the engine. It is loaded once from a JSON
bundle shaped like::

    {"jobs": {"<id>": {"title": ..., "sector": ..., ...}},
     "sectors": {"<id>": {"description": ..., "job_ids": [...]}}}
"""
import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import combinations
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import CatalogError, UnknownItemError

logger = logging.getLogger(__name__)

SECTOR_INFO: Dict[str, str] = {
    "Management": "Planning, directing, and coordinating organizational operations",
    "Business_Financial": "Business operations, finance, accounting, and analysis",
    "Computer_Mathematical": "Technology, software development, and data science",
    "Architecture_Engineering": "Design, development, and technical problem-solving",
    "Life_Physical_Social_Science": "Scientific research and analysis across various fields",
    "Community_Social_Service": "Supporting and helping individuals and communities",
    "Legal": "Law practice, compliance, and legal services",
    "Education_Training": "Teaching, training, and instructional design",
    "Arts_Design_Entertainment_Media": "Creative work, design, and media production",
    "Healthcare_Practitioners_Technical": "Medical professionals and healthcare providers",
    "Healthcare_Support": "Healthcare assistance and patient support",
    "Protective_Service": "Public safety, security, and emergency services",
    "Food_Preparation_Serving": "Food service, preparation, and hospitality",
    "Building_Grounds_Maintenance": "Facility maintenance, cleaning, and landscaping",
    "Personal_Care_Service": "Personal services, beauty, and wellness",
    "Sales": "Sales, retail, and customer-facing roles",
    "Office_Administrative_Support": "Administrative, clerical, and office work",
    "Farming_Fishing_Forestry": "Agriculture, forestry, and natural resources",
    "Construction_Extraction": "Building construction and resource extraction",
    "Installation_Maintenance_Repair": "Equipment installation, maintenance, and repair",
    "Production": "Manufacturing, production, and assembly work",
    "Transportation_Material_Moving": "Transportation, delivery, and logistics",
}


class EducationLevel(IntEnum):
    """Ordered entry-level education scale used for similarity."""
    HIGH_SCHOOL = 0
    ASSOCIATE = 1
    BACHELOR = 2
    MASTER = 3
    DOCTORAL = 4

    @classmethod
    def from_label(cls, label: str) -> Optional["EducationLevel"]:
        """Map a free-text education label to a level, or None if unknown."""
        if not label:
            return None
        return _EDUCATION_LABELS.get(" ".join(label.lower().replace("’", "'").split()))


# Known labels only. Anything else (e.g. "Postsecondary nondegree award")
# contributes nothing to similarity.
_EDUCATION_LABELS: Dict[str, EducationLevel] = {
    "high school": EducationLevel.HIGH_SCHOOL,
    "high school diploma": EducationLevel.HIGH_SCHOOL,
    "high school diploma or equivalent": EducationLevel.HIGH_SCHOOL,
    "associate": EducationLevel.ASSOCIATE,
    "associate's degree": EducationLevel.ASSOCIATE,
    "associate degree": EducationLevel.ASSOCIATE,
    "bachelor": EducationLevel.BACHELOR,
    "bachelor's degree": EducationLevel.BACHELOR,
    "bachelor degree": EducationLevel.BACHELOR,
    "master": EducationLevel.MASTER,
    "master's degree": EducationLevel.MASTER,
    "master degree": EducationLevel.MASTER,
    "doctoral": EducationLevel.DOCTORAL,
    "doctoral degree": EducationLevel.DOCTORAL,
    "doctoral or professional degree": EducationLevel.DOCTORAL,
}


def pair_key(id_a: str, id_b: str) -> str:
    """Order-independent key for a pair of job ids."""
    first, second = sorted((id_a, id_b))
    return f"{first}_{second}"


def _to_int(value: Any) -> int:
    """Leading-integer parse of a pay figure; 0 when absent or unparseable."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    digits = str(value).strip().lstrip("$").replace(",", "")
    number = ""
    for ch in digits:
        if ch.isdigit() or (ch == "-" and not number):
            number += ch
        else:
            break
    try:
        return int(number)
    except ValueError:
        return 0


def _to_float(value: Any) -> float:
    try:
        return float(str(value).strip().rstrip("%")) if value not in (None, "") else 0.0
    except ValueError:
        return 0.0


@dataclass(frozen=True)
class Job:
    """Immutable catalog attributes of a single occupation."""
    id: str
    title: str
    description: str = ""
    sector: str = ""
    median_pay_annual: int = 0
    entry_level_education: str = ""
    employment_outlook_percent: float = 0.0

    @property
    def education_level(self) -> Optional[EducationLevel]:
        return EducationLevel.from_label(self.entry_level_education)

    @classmethod
    def from_dict(cls, job_id: str, data: Dict[str, Any]) -> "Job":
        if not isinstance(data, dict):
            raise CatalogError(f"Job {job_id!r} must be an object")
        return cls(
            id=str(job_id),
            title=str(data.get("title") or job_id),
            description=str(data.get("description") or ""),
            sector=str(data.get("sector") or ""),
            median_pay_annual=_to_int(data.get("median_pay_annual")),
            entry_level_education=str(data.get("entry_level_education") or ""),
            employment_outlook_percent=_to_float(data.get("employment_outlook_percent")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "sector": self.sector,
            "median_pay_annual": self.median_pay_annual,
            "entry_level_education": self.entry_level_education,
            "employment_outlook_percent": self.employment_outlook_percent,
        }


@dataclass(frozen=True)
class Sector:
    """A named group of occupations."""
    id: str
    description: str = ""
    job_ids: Tuple[str, ...] = field(default_factory=tuple)


class Catalog:
    """
    Read-only lookup over jobs and sectors.

    Sector membership is taken from each sector's ``job_ids``; a job listed
    in several sectors belongs to the first one. Member ids that are not in
    the job mapping are dropped with a warning.
    """

    def __init__(self, jobs: Dict[str, Job], sectors: Dict[str, Sector]):
        if not jobs:
            raise CatalogError("No job data found")
        if not sectors:
            raise CatalogError("No sector data found")

        self.jobs = dict(jobs)
        self.sectors: Dict[str, Sector] = {}
        self._sector_of: Dict[str, str] = {}

        for sector_id, sector in sectors.items():
            members = tuple(jid for jid in sector.job_ids if jid in self.jobs)
            dropped = len(sector.job_ids) - len(members)
            if dropped:
                logger.warning(
                    "Sector %s lists %d job id(s) missing from the catalog", sector_id, dropped
                )
            self.sectors[sector_id] = Sector(sector_id, sector.description, members)
            for jid in members:
                self._sector_of.setdefault(jid, sector_id)

        for key, pairs in self.ambiguous_pair_keys().items():
            logger.warning(
                "Pairs %s share the history key %s; comparing one marks the others as compared",
                ", ".join(f"{a}/{b}" for a, b in pairs), key,
            )

    @classmethod
    def from_dict(cls, data: Any) -> "Catalog":
        """Build a catalog from the ``{"jobs": ..., "sectors": ...}`` layout."""
        if not isinstance(data, dict):
            raise CatalogError("Catalog data must be an object")
        raw_jobs = data.get("jobs")
        raw_sectors = data.get("sectors")
        if not isinstance(raw_jobs, dict) or not raw_jobs:
            raise CatalogError("No job data found")
        if not isinstance(raw_sectors, dict) or not raw_sectors:
            raise CatalogError("No sector data found")

        jobs = {str(jid): Job.from_dict(str(jid), attrs) for jid, attrs in raw_jobs.items()}
        sectors = {}
        for sid, attrs in raw_sectors.items():
            if not isinstance(attrs, dict):
                raise CatalogError(f"Sector {sid!r} must be an object")
            job_ids = attrs.get("job_ids") or []
            if not isinstance(job_ids, list):
                raise CatalogError(f"Sector {sid!r} job_ids must be a list")
            sectors[str(sid)] = Sector(
                id=str(sid),
                description=str(attrs.get("description") or SECTOR_INFO.get(str(sid), "")),
                job_ids=tuple(str(j) for j in job_ids),
            )
        return cls(jobs, sectors)

    @classmethod
    def load(cls, path: Path) -> "Catalog":
        """Load a catalog JSON file. Any read or parse failure is fatal."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CatalogError(f"Catalog file not found: {path}") from None
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise CatalogError(f"Could not read catalog {path}: {e}") from e

        catalog = cls.from_dict(data)
        logger.info(
            "Loaded catalog: %d jobs in %d sectors", len(catalog.jobs), len(catalog.sectors)
        )
        return catalog

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def job_ids(self) -> List[str]:
        return list(self.jobs)

    def __len__(self) -> int:
        return len(self.jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self.jobs

    def job(self, job_id: str) -> Job:
        try:
            return self.jobs[job_id]
        except KeyError:
            raise UnknownItemError(job_id) from None

    def sector_of(self, job_id: str) -> Optional[str]:
        """Return the sector containing *job_id*, or None if it has none."""
        if job_id not in self.jobs:
            raise UnknownItemError(job_id)
        return self._sector_of.get(job_id)

    def sector_label(self, job_id: str) -> str:
        """Human-facing sector name: the job's own field, else its sector id."""
        job = self.job(job_id)
        return job.sector or self._sector_of.get(job_id) or ""

    def eligible_sectors(self) -> List[str]:
        """Sectors with at least two member jobs, in catalog order."""
        return [sid for sid, s in self.sectors.items() if len(s.job_ids) >= 2]

    def total_pairs(self) -> int:
        n = len(self.jobs)
        return n * (n - 1) // 2

    def ambiguous_pair_keys(self) -> Dict[str, List[Tuple[str, str]]]:
        """Pair keys that more than one catalog pair maps to.

        Only ids containing "_" can collide, e.g. ("a", "b_c") and ("a_b", "c").
        """
        if not any("_" in jid for jid in self.jobs):
            return {}
        by_key: Dict[str, List[Tuple[str, str]]] = {}
        for a, b in combinations(sorted(self.jobs), 2):
            by_key.setdefault(pair_key(a, b), []).append((a, b))
        return {key: pairs for key, pairs in by_key.items() if len(pairs) > 1}
