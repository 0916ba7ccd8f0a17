"""Snapshot persistence for comparison progress.

The whole engine state is stored as one JSON document. Writes replace the
file atomically so a crash never leaves a half-written snapshot; a file
that cannot be read back is treated as absent so the session can start
over instead of failing on every launch.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import CorruptSnapshotError

logger = logging.getLogger(__name__)


class SavedRating(BaseModel):
    score: float
    wins: int = Field(ge=0)
    losses: int = Field(ge=0)


class Snapshot(BaseModel):
    """Schema of the persisted progress document."""
    todayCount: int = Field(default=0, ge=0)
    totalComparisons: int = Field(default=0, ge=0)
    lastDate: Optional[str] = None
    comparedJobPairs: List[str] = Field(default_factory=list)
    sectorPreferences: Dict[str, float] = Field(default_factory=dict)
    currentSectorId: Optional[str] = None
    jobs: Dict[str, SavedRating] = Field(default_factory=dict)


def parse_snapshot(data: Any) -> Dict[str, Any]:
    """
    Validate a decoded snapshot.

    Raises:
        CorruptSnapshotError: If *data* does not match the schema.
    """
    try:
        return Snapshot.model_validate(data).model_dump()
    except ValidationError as e:
        raise CorruptSnapshotError(f"Invalid snapshot: {e.error_count()} error(s)") from e


class SnapshotStore:
    """Read and write the progress snapshot at a fixed path."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[Dict[str, Any]]:
        """
        Load the snapshot, strictly.

        Returns:
            The validated snapshot, or None if no file exists.

        Raises:
            CorruptSnapshotError: If the file cannot be parsed or validated.
        """
        if not self.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise CorruptSnapshotError(f"Could not read {self.path}: {e}") from e
        return parse_snapshot(data)

    def load(self) -> Optional[Dict[str, Any]]:
        """Load the snapshot, treating a corrupt file as absent."""
        try:
            return self.read()
        except CorruptSnapshotError as e:
            logger.warning("Saved progress is unreadable, starting fresh: %s", e)
            return None

    def save(self, snapshot: Dict[str, Any]) -> None:
        """Persist the full snapshot atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved progress to %s", self.path)

    def clear(self) -> bool:
        """Delete saved progress. Returns True if a file was removed."""
        if self.exists():
            self.path.unlink()
            logger.info("Cleared saved progress at %s", self.path)
            return True
        return False
