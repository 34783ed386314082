"""
API Routers.

Aggregates the JSON API under /api plus the top-level integration and
system endpoints.
"""

from fastapi import APIRouter

from notebook.api import add_note, notes, system

router = APIRouter()

# Notebook app endpoints
router.include_router(notes.router, prefix="/api", tags=["notes"])

# Integration endpoint (token protected)
router.include_router(add_note.router, tags=["integration"])

# Health and cron
router.include_router(system.router, tags=["system"])
