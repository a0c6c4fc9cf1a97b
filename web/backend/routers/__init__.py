"""API route handlers."""

from .matches import router as matches_router
from .admin import router as admin_router
