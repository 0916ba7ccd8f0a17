"""Shared FastAPI dependencies."""
from jobrank.api.services.session_service import SessionService
from jobrank.core.config import load_config

_service = None


def get_service() -> SessionService:
    global _service
    if _service is None:
        _service = SessionService(load_config())
    return _service


def set_service(service: SessionService | None) -> None:
    """Install (or drop, with None) the process-wide service."""
    global _service
    _service = service
