"""
Main FastAPI application for the Pramuka dashboard backend
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
import logging
import logging.config

# Import database
from pramuka.database import Base, engine
from pramuka import models  # noqa: F401  registers the tables on Base.metadata
from pramuka.config import settings

# Import API routes
from pramuka.api import archive, leave, dashboard, agenda, members, materials

# Configure logging
logging.config.dictConfig(settings.get_logging_config())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application on startup"""
    logger.info("Starting Pramuka Dashboard backend")

    missing = settings.validate_required_settings()
    if missing:
        logger.warning(f"Missing settings: {', '.join(missing)}")

    # In production, use Alembic migrations instead
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Shutting down Pramuka Dashboard backend")


# Create FastAPI app
app = FastAPI(
    title="Pramuka Dashboard",
    description="Leave requests, weekly archive, agendas and member roster for a Pramuka unit",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "izin",
            "description": "Leave request operations",
        },
        {
            "name": "archive",
            "description": "Weekly Friday archive sweep, archive batches and export",
        },
        {
            "name": "dashboard",
            "description": "Dashboard summary",
        },
        {
            "name": "agenda",
            "description": "Event agendas",
        },
        {
            "name": "members",
            "description": "Member roster and profile",
        },
        {
            "name": "materi",
            "description": "Learning materials",
        },
    ]
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": message}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are 400s"""
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": "Data tidak valid.", "fields": fields}
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "database": "connected",
            "version": "1.0.0"
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unavailable")


# Include API routes
app.include_router(leave.router, prefix=settings.API_PREFIX)
app.include_router(archive.router, prefix=settings.API_PREFIX)
app.include_router(dashboard.router, prefix=settings.API_PREFIX)
app.include_router(agenda.router, prefix=settings.API_PREFIX)
app.include_router(members.router, prefix=settings.API_PREFIX)
app.include_router(materials.router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    # Development server
    uvicorn.run(
        "pramuka.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
