"""Optional dependency helpers.

The HTTP API lives behind the ``api`` extra. ``require()`` imports one of
its packages or raises an ``ImportError`` whose message carries the
matching ``pip install jobrank[extra]`` hint; ``missing()`` reports which
packages of an extra cannot be imported, for ``jobrank status``.
"""

import importlib
import importlib.util
from types import ModuleType

EXTRAS: dict[str, tuple[str, ...]] = {
    "api": ("fastapi", "uvicorn"),
}


def require(package: str, extra: str) -> ModuleType:
    """Import *package* or raise a clear install hint.

    >>> uvicorn = require("uvicorn", "api")
    """
    try:
        return importlib.import_module(package)
    except ImportError:
        raise ImportError(
            f"'{package}' is required for this feature. "
            f"Install it with:  pip install jobrank[{extra}]"
        ) from None


def missing(extra: str) -> list[str]:
    """Return the packages of *extra* that are not importable."""
    if extra not in EXTRAS:
        raise ValueError(f"Unknown extra: {extra}")
    return [pkg for pkg in EXTRAS[extra] if importlib.util.find_spec(pkg) is None]
