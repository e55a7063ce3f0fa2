"""
API Module — FastAPI Wizard Endpoints

Public API:
- app: FastAPI application instance
- router: API routes
- get_session: Session dependency (override in tests)
"""

from .main import app
from .routes import get_session, router

__all__ = [
    "app",
    "router",
    "get_session",
]
