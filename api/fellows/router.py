"""
Fellow API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import PlainTextResponse

from core.db import INT4_MAX, INT4_MIN

from . import schemas
from .dependencies import get_fellow_repository
from .repository import FellowRepository

router = APIRouter()


@router.get("/fellows")
async def serve_fellows(
    repository: FellowRepository = Depends(get_fellow_repository),
) -> list[dict]:
    return await repository.list()


@router.get("/fellows/{fellow_id}")
async def serve_fellow(
    fellow_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: FellowRepository = Depends(get_fellow_repository),
):
    fellow = await repository.find_by_id(fellow_id)
    if fellow is None:
        return PlainTextResponse(f"No fellow with the id {fellow_id}", status_code=status.HTTP_404_NOT_FOUND)
    return fellow


@router.post("/fellows")
async def create_fellow(
    request: schemas.FellowNameRequest,
    repository: FellowRepository = Depends(get_fellow_repository),
) -> dict:
    return await repository.create(request.fellow_name)


@router.patch("/fellows/{fellow_id}")
async def update_fellow(
    request: schemas.FellowNameRequest,
    fellow_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: FellowRepository = Depends(get_fellow_repository),
):
    fellow = await repository.edit_name(fellow_id, request.fellow_name)
    if fellow is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return fellow


@router.delete("/fellows/{fellow_id}")
async def delete_fellow(
    fellow_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: FellowRepository = Depends(get_fellow_repository),
) -> Response:
    deleted = await repository.delete(fellow_id)
    if not deleted:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
