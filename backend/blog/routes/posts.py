"""
Blog API — Post Route Handlers
================================

What:  The five CRUD endpoints under /api/posts.
How:   Each handler resolves the repository via Depends, delegates to
       PostService, and returns the response model. Errors raised by the
       service are rendered by the global exception handlers in main.py.

Route Table:
    GET    /api/posts        → list_posts
    POST   /api/posts        → create_post   (201)
    GET    /api/posts/{id}   → get_post
    PUT    /api/posts/{id}   → update_post
    DELETE /api/posts/{id}   → delete_post

The collection routes also answer with a trailing slash, without a redirect.

The id path parameter is a plain string so a malformed id reaches the
service and is classified there.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from blog.schemas.post import MessageResponse, PostCreate, PostResponse, PostUpdate
from blog.services.post_repository import PostRepository, get_post_repository
from blog.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_errors = {
    400: {"description": "Invalid payload or failed write", "model": MessageResponse},
    404: {"description": "Post not found", "model": MessageResponse},
    500: {"description": "Store error", "model": MessageResponse},
}


@router.get("/", response_model=List[PostResponse], include_in_schema=False)
@router.get(
    "",
    response_model=List[PostResponse],
    responses={404: _errors[404], 500: _errors[500]},
    summary="List all posts, newest first",
)
async def list_posts(
    repository: PostRepository = Depends(get_post_repository),
) -> List[PostResponse]:
    """Returns every post sorted by createdAt descending. An empty store is a 404."""
    return await post_service.list_posts(repository)


@router.post("/", status_code=201, response_model=PostResponse, include_in_schema=False)
@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={400: _errors[400]},
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    repository: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    result = await post_service.create_post(repository, payload)
    logger.info("Created post %s", result.id)
    return result


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={404: _errors[404], 500: _errors[500]},
    summary="Get a post by id",
)
async def get_post(
    post_id: str,
    repository: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    return await post_service.get_post(repository, post_id)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    responses={400: _errors[400], 404: _errors[404]},
    summary="Update fields of a post",
)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    repository: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    """Writes only the fields present in the body; returns the post after the write."""
    return await post_service.update_post(repository, post_id, payload)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={404: _errors[404], 500: _errors[500]},
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    repository: PostRepository = Depends(get_post_repository),
) -> MessageResponse:
    return await post_service.delete_post(repository, post_id)
