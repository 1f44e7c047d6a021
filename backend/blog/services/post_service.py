"""
Blog API — Post Service (Controller Logic)
============================================

What:  Turns repository outcomes into the API's success and error outcomes.
How:   Each method calls one repository operation, raises NotFoundError for
       absent posts, and wraps any other failure in the exception whose
       status code the endpoint uses.
Who:   Called by the route handlers in routes/posts.py.

Error Mapping:
    Operation      Absent              Any other failure
    ─────────────  ──────────────────  ──────────────────────
    list_posts     404 No posts found  DatabaseError   (500)
    create_post    400 (no result)     ValidationError (400)
    get_post       404 Post not found  DatabaseError   (500)
    update_post    404 Post not found  ValidationError (400)
    delete_post    404 Post not found  DatabaseError   (500)

    A malformed id follows the "any other failure" column.

Design Decision:
    PostService is stateless; the repository is passed in on every call so
    tests can hand it a fake or a mocked collection.
"""

import logging
from typing import List

from blog.exceptions import DatabaseError, NotFoundError, ValidationError
from blog.schemas.post import MessageResponse, PostCreate, PostResponse, PostUpdate
from blog.services.post_repository import PostRepository

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
NO_POSTS_FOUND = "No posts found"
POST_DELETED = "Post deleted"


class PostService:
    """Business logic layer for post operations."""

    async def list_posts(self, repository: PostRepository) -> List[PostResponse]:
        """
        All posts, newest first.

        Raises:
            NotFoundError: the collection is empty (→ 404)
            DatabaseError: the query failed (→ 500)
        """
        try:
            posts = await repository.list_all()
        except Exception as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(message=str(e), context={"error_type": type(e).__name__})

        if not posts:
            raise NotFoundError(message=NO_POSTS_FOUND)
        return [PostResponse.from_post(post) for post in posts]

    async def create_post(self, repository: PostRepository, payload: PostCreate) -> PostResponse:
        """
        Creates a post from the request body.

        Raises:
            ValidationError: the insert failed or produced nothing (→ 400)
        """
        try:
            post = await repository.create(payload.to_fields())
        except Exception as e:
            logger.error("Error creating post: %s", str(e))
            raise ValidationError(message=str(e), context={"error_type": type(e).__name__})

        if post is None:
            raise ValidationError(message="Error creating post")
        return PostResponse.from_post(post)

    async def get_post(self, repository: PostRepository, post_id: str) -> PostResponse:
        """
        Raises:
            NotFoundError: no post has this id (→ 404)
            DatabaseError: malformed id or failed query (→ 500)
        """
        try:
            post = await repository.get_by_id(post_id)
        except Exception as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND, resource_id=post_id)
        return PostResponse.from_post(post)

    async def update_post(
        self,
        repository: PostRepository,
        post_id: str,
        payload: PostUpdate,
    ) -> PostResponse:
        """
        Applies the fields present in the body and returns the updated post.

        Raises:
            NotFoundError: no post has this id (→ 404)
            ValidationError: malformed id or failed write (→ 400)
        """
        try:
            post = await repository.update_by_id(post_id, payload.to_fields())
        except Exception as e:
            logger.error("Error updating post %s: %s", post_id, str(e))
            raise ValidationError(
                message=str(e),
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND, resource_id=post_id)
        return PostResponse.from_post(post)

    async def delete_post(self, repository: PostRepository, post_id: str) -> MessageResponse:
        """
        Raises:
            NotFoundError: no post has this id (→ 404)
            DatabaseError: malformed id or failed delete (→ 500)
        """
        try:
            post = await repository.delete_by_id(post_id)
        except Exception as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND, resource_id=post_id)
        return MessageResponse(message=POST_DELETED)


post_service = PostService()
