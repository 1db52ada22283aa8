"""Show Compliance Checklist web application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from showcompliance.core.config import settings
from showcompliance.core.database import create_db_and_tables
from showcompliance.routes import checklist, shows, uploads

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Show Compliance application")
    create_db_and_tables()
    yield
    logger.info("Show Compliance application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Tracks the regulatory and operational tasks a dog show organiser must complete",
    version="0.1.0",
    lifespan=lifespan,
)

origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Serve stored evidence documents
app.mount(
    settings.upload_base_url,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)

# Include routers
app.include_router(shows.router)
app.include_router(checklist.router)
app.include_router(uploads.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
