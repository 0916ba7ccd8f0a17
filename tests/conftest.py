"""Shared fixtures: small catalogs and an isolated user environment."""

import json
import random

import pytest

from jobrank.core.catalog import Catalog
from jobrank.core.config import Config


def make_catalog(sectors, jobs=None) -> Catalog:
    """Build a catalog from ``{sector_id: [job_ids]}`` plus optional job attrs."""
    jobs = dict(jobs or {})
    for sector_id, job_ids in sectors.items():
        for job_id in job_ids:
            jobs.setdefault(job_id, {"title": job_id.title(), "sector": sector_id})
    return Catalog.from_dict({
        "jobs": jobs,
        "sectors": {sid: {"job_ids": list(ids)} for sid, ids in sectors.items()},
    })


CATALOG_DATA = {
    "jobs": {
        "software_dev": {
            "title": "Software Developer",
            "description": "Design and build applications",
            "sector": "Computer_Mathematical",
            "median_pay_annual": "132270",
            "entry_level_education": "Bachelor's degree",
            "employment_outlook_percent": 17,
        },
        "data_scientist": {
            "title": "Data Scientist",
            "description": "Analyse data for insight",
            "sector": "Computer_Mathematical",
            "median_pay_annual": "108020",
            "entry_level_education": "Bachelor's degree",
            "employment_outlook_percent": 35,
        },
        "nurse": {
            "title": "Registered Nurse",
            "description": "Provide and coordinate patient care",
            "sector": "Healthcare_Practitioners_Technical",
            "median_pay_annual": "86070",
            "entry_level_education": "Bachelor's degree",
            "employment_outlook_percent": 6,
        },
        "physician": {
            "title": "Physician",
            "description": "Diagnose and treat illness",
            "sector": "Healthcare_Practitioners_Technical",
            "median_pay_annual": "239200",
            "entry_level_education": "Doctoral or professional degree",
            "employment_outlook_percent": 3,
        },
        "electrician": {
            "title": "Electrician",
            "description": "Install and maintain electrical systems",
            "sector": "Construction_Extraction",
            "median_pay_annual": "61590",
            "entry_level_education": "High school diploma or equivalent",
            "employment_outlook_percent": 6,
        },
        "carpenter": {
            "title": "Carpenter",
            "description": "Build and repair structures",
            "sector": "Construction_Extraction",
            "median_pay_annual": "56350",
            "entry_level_education": "High school diploma or equivalent",
            "employment_outlook_percent": 2,
        },
    },
    "sectors": {
        "Computer_Mathematical": {"job_ids": ["software_dev", "data_scientist"]},
        "Healthcare_Practitioners_Technical": {"job_ids": ["nurse", "physician"]},
        "Construction_Extraction": {"job_ids": ["electrician", "carpenter"]},
    },
}


@pytest.fixture
def catalog_data():
    return json.loads(json.dumps(CATALOG_DATA))


@pytest.fixture
def catalog(catalog_data) -> Catalog:
    return Catalog.from_dict(catalog_data)


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def two_by_two() -> Catalog:
    """Two sectors with two jobs each."""
    return make_catalog({"A": ["a1", "a2"], "B": ["b1", "b2"]})


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config(tmp_path) -> Config:
    cfg = Config()
    cfg.paths.state_file = tmp_path / "state" / "progress.json"
    return cfg


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point config/data dirs at tmp and run from an empty working dir."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg_data"))
    for var in ("JOBRANK_CONFIG", "JOBRANK_CATALOG", "JOBRANK_STATE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("jobrank.dirs.platform.system", lambda: "Linux")
    return work


@pytest.fixture
def catalog_factory():
    return make_catalog
