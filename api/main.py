"""
Nursery Contact API - Main Application.

FastAPI application with CORS enabled for the nursery website frontend.
The anti-spam cleanup scheduler is started and stopped with the app.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.dependencies import get_container

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    container.cleanup_task.start()
    try:
        yield
    finally:
        container.cleanup_task.stop()


# Create FastAPI application
app = FastAPI(
    title="Nursery Contact API",
    description="Contact form intake with spam protection for the nursery website",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS - Allow all origins for development
# TODO: Restrict origins to the nursery website domains in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "nursery-contact-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Nursery Contact API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import contact

app.include_router(contact.router, prefix="/api/v1", tags=["Contact"])
