"""
FastAPI Application — Damage Aid Wizard API

Profile -> photo upload -> damage analysis -> results.

CORS: Configured via environment variables.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from damage_aid.catalog import CATALOG_VERSION
from damage_aid.config import settings
from .routes import router


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


WELCOME_FEATURES = [
    {
        "title": "Photo Documentation",
        "description": "Capture damage with your phone camera for accurate assessment",
    },
    {
        "title": "Cost Estimation",
        "description": "Get instant cost estimates for repairs and restoration",
    },
    {
        "title": "Health Risk Analysis",
        "description": "Identify potential health hazards and safety protocols",
    },
    {
        "title": "Safety Management",
        "description": "Access emergency contacts and professional recommendations",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
    logger.info(f"📍 Running in {settings.ENVIRONMENT} mode")
    logger.info(f"💾 Storage: {settings.STORAGE_BACKEND} | Catalog: {CATALOG_VERSION}")
    yield
    # Shutdown
    logger.info(f"👋 Shutting down {settings.PROJECT_NAME}")


# Application metadata
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Post-disaster damage assessment: cost estimates, health risks and contractors",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# CORS configuration from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


app.include_router(router, tags=["Wizard"])


@app.get("/", tags=["Welcome"])
async def root():
    """Welcome page — what the tool does and where to start."""
    return {
        "message": settings.PROJECT_NAME,
        "tagline": (
            "Your comprehensive post-disaster assessment tool for cost estimation, "
            "health risk identification, and safety management"
        ),
        "features": WELCOME_FEATURES,
        "start": "/profile",
        "docs": "/docs",
    }


@app.get("/ping", tags=["Health"])
async def ping():
    """Lightweight heartbeat."""
    return {"status": "ok"}
