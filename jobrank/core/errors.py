"""Exception hierarchy for jobrank."""


class JobRankError(Exception):
    """Base class for all jobrank errors."""


class CatalogError(JobRankError):
    """The occupation catalog is missing or malformed. Not recoverable."""


class NoEligibleGroupsError(JobRankError):
    """No group has enough members to build a comparison."""

    def __init__(self, message: str = "No sectors with enough jobs found"):
        super().__init__(message)


class CorruptSnapshotError(JobRankError):
    """Saved progress could not be parsed or validated."""


class UnknownItemError(JobRankError, KeyError):
    """An item id was referenced that the catalog does not contain."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Unknown job id: {item_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidTransitionError(JobRankError):
    """The session was asked to move between views in an unsupported way."""


class NoActiveComparisonError(JobRankError):
    """A choice was submitted while no comparison was on screen."""
