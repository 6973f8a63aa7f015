"""
Internship Registry - Main Application

FastAPI backend with:
- MySQL or PostgreSQL (DB_TYPE) behind one connection adapter
- CRUD endpoints for the six registry tables
- Spreadsheet bulk import

Run: uvicorn internship_registry.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from internship_registry.api.routes import api_router
from internship_registry.core.config import get_settings
from internship_registry.core.logging import configure_logging, get_logger
from internship_registry.db.database import Database

logger = get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Pass a Database to use an existing pool (tests); otherwise one is built
    from settings at startup and disposed at shutdown.
    """
    settings = get_settings()

    app = FastAPI(
        title="Internship Registry",
        description="""
        Registry of university internships.

        ## Features
        - **CRUD**: contacts, companies, supervisors, students, programs, internships
        - **Import**: upload the internship spreadsheet; related rows are
          looked up or created and each internship is inserted or updated,
          all in one transaction

        ## Databases
        - MySQL or PostgreSQL, selected with DB_TYPE
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.database = database

    # CORS middleware (allow all origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Origin", "X-Requested-With", "Accept"],
    )

    # Include API routes
    app.include_router(api_router, prefix="/api")

    # Every error body is {"error": "..."}
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = []
        for error in exc.errors():
            # loc is ("body", "field", ...) or ("path", "key")
            name = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
            if name not in fields:
                fields.append(name)
        return JSONResponse(
            status_code=422,
            content={"error": f"Invalid request. Check the values for: {', '.join(fields)}"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Internal server error."})

    @app.on_event("startup")
    async def startup_event():
        """Configure logging and open the connection pool."""
        configure_logging(settings.log_level, settings.log_json)
        if app.state.database is None:
            app.state.database = Database.from_settings(settings)
            app.state.owns_database = True

    @app.on_event("shutdown")
    async def shutdown_event():
        if getattr(app.state, "owns_database", False):
            await app.state.database.dispose()

    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "healthy", "app": "Internship Registry", "docs": "/docs"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        reachable = await app.state.database.ping()
        return {
            "status": "healthy" if reachable else "degraded",
            "database": "connected" if reachable else "disconnected"
        }

    return app


app = create_app()
