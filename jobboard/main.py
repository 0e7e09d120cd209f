"""
Job Board - Main Application

FastAPI backend with:
- MongoDB for accounts, jobs, applications and sessions
- Cookie-carried JWT naming a server-side session
- Role-based access for recruiters, jobseekers and admins

Run: uvicorn jobboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard import __version__
from jobboard.api.routes import api_router
from jobboard.core.config import get_settings
from jobboard.core.errors import setup_error_handlers
from jobboard.core.logging_config import setup_logging
from jobboard.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create MongoDB indexes on startup."""
    logger.info(f"Starting {settings.app_name}")
    try:
        init_mongo_indexes()
    except Exception:
        # The API can still serve reads; uniqueness falls back to the pre-checks
        logger.exception("MongoDB index initialization failed")
    yield
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="""
    Job board backend.

    ## Features
    - **Users**: registration, cookie sessions, roles (recruiter, jobseeker, admin)
    - **Jobs**: recruiters post and manage jobs; everyone browses active jobs
    - **Applications**: jobseekers apply and withdraw; recruiters accept or reject
    - **Admin**: moderate all jobs and applications
    """,
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

setup_error_handlers(app)

# CORS: the frontend sends the session cookie cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": settings.app_name}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
