"""
Post API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import PlainTextResponse

from core.db import INT4_MAX, INT4_MIN
from fellows.dependencies import get_fellow_repository
from fellows.repository import FellowRepository

from . import schemas
from .dependencies import get_post_repository
from .repository import PostRepository

router = APIRouter()


def _no_fellow(fellow_id: int) -> PlainTextResponse:
    return PlainTextResponse(f"No fellow with the id {fellow_id}", status_code=status.HTTP_404_NOT_FOUND)


@router.post("/posts")
async def create_post(
    request: schemas.CreatePostRequest,
    repository: PostRepository = Depends(get_post_repository),
):
    """
    Create a post. The owning fellow must exist; nothing is inserted otherwise.
    """
    post = await repository.create(request.post_content, request.fellow_id)
    if post is None:
        return _no_fellow(request.fellow_id)
    return post


@router.get("/posts")
async def serve_posts(
    repository: PostRepository = Depends(get_post_repository),
) -> list[dict]:
    return await repository.list()


@router.get("/posts/{post_id}")
async def serve_post(
    post_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: PostRepository = Depends(get_post_repository),
):
    post = await repository.find_by_id(post_id)
    if post is None:
        return PlainTextResponse(f"No post with the id {post_id}", status_code=status.HTTP_404_NOT_FOUND)
    return post


@router.get("/fellows/{fellow_id}/posts")
async def serve_posts_by_fellow(
    fellow_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: PostRepository = Depends(get_post_repository),
    fellows: FellowRepository = Depends(get_fellow_repository),
):
    """
    A fellow without posts gets an empty list; an unknown fellow gets a 404.
    """
    if await fellows.find_by_id(fellow_id) is None:
        return _no_fellow(fellow_id)
    return await repository.find_posts_by_fellow_id(fellow_id)


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: int = Path(..., ge=INT4_MIN, le=INT4_MAX),
    repository: PostRepository = Depends(get_post_repository),
):
    post = await repository.delete(post_id)
    if post is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return post
