"""FastAPI application factory for the jobrank API."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobrank import __version__
from jobrank.core.errors import CatalogError, NoEligibleGroupsError, UnknownItemError


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="jobrank API",
        description="Rank occupations by answering one pairwise question at a time",
        version=__version__,
    )

    # CORS middleware for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CatalogError)
    async def catalog_error(request: Request, exc: CatalogError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(NoEligibleGroupsError)
    async def no_eligible_groups(request: Request, exc: NoEligibleGroupsError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(UnknownItemError)
    async def unknown_item(request: Request, exc: UnknownItemError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    from jobrank.api.routers.session import router as session_router
    from jobrank.api.routers.results import router as results_router

    app.include_router(session_router)
    app.include_router(results_router)

    @app.get("/")
    async def root():
        return {
            "name": "jobrank API",
            "version": __version__,
            "docs": "/docs",
        }

    return app
