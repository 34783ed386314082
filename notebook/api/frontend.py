"""
Frontend Shell.

Serves files from the public directory and falls back to the single-page
app's index.html for every other GET, so client-side routes resolve.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse


def get_frontend_router(directory: Path, index_file: str) -> APIRouter:
    """
    Build the catch-all router for the static frontend.

    Must be included after every other router.
    """
    router = APIRouter()
    root = directory.resolve()
    index_path = root / index_file

    @router.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_path)

    return router
