"""
Serve the built single-page client for every non-API path.

Files that exist in the bundle are returned as-is; anything else gets
`index.html` so the client-side router can handle it.
"""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

_DEFAULT_DIST = Path(__file__).resolve().parents[2] / "frontend" / "dist"

router = APIRouter()

_FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def frontend_dist() -> Path:
    raw = os.environ.get("FRONTEND_DIST", "").strip()
    return Path(raw) if raw else _DEFAULT_DIST


def resolve_asset(dist: Path, requested: str) -> Path | None:
    """
    Map a request path onto a file inside `dist`, or None if it would escape it.
    """
    root = dist.resolve()
    candidate = (root / requested.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


@router.api_route("/{full_path:path}", methods=_FALLBACK_METHODS, include_in_schema=False)
async def serve_frontend(request: Request, full_path: str) -> FileResponse:
    # Every method lands here; only GET/HEAD outside /api are served.
    if request.method not in ("GET", "HEAD") or full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    dist = frontend_dist()
    asset = resolve_asset(dist, full_path) if full_path else None
    if asset is not None and asset.is_file():
        return FileResponse(asset)

    index = dist / "index.html"
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(index)
