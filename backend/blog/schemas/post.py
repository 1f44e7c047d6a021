"""
Blog API — Pydantic Request/Response Schemas
==============================================

What:  The API contract for the posts endpoints.
How:   FastAPI validates request bodies against PostCreate / PostUpdate and
       serializes PostResponse by alias (`createdAt`) on the way out.
Who:   Used by route handlers and the post service.

Design Decision:
    Request records are separate from the stored Post model so that id and
    createdAt can never be supplied by a client. views starts at 0 and can
    only be changed by an update. Unknown body fields are ignored; wrongly
    typed ones fail with 400.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from blog.models.post import Post


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /api/posts. Every field is optional."""

    title: Optional[str] = Field(default=None, description="Post title")
    content: Optional[str] = Field(default=None, description="Post body text")
    author: Optional[str] = Field(default=None, description="Author name")
    tags: Optional[List[str]] = Field(default=None, description="Ordered list of tags")

    def to_fields(self) -> Dict[str, Any]:
        """Fields for a new post. A missing tag list becomes []."""
        fields = self.model_dump()
        if fields["tags"] is None:
            fields["tags"] = []
        return fields


class PostUpdate(BaseModel):
    """
    Body of PUT /api/posts/{id}.

    Partial: only the keys present in the body are written.
    An explicit null is written as null, except for views, which stays a number.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    tags: Optional[List[str]] = None
    views: Optional[int] = None

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        if fields.get("views", 0) is None:
            del fields["views"]
        return fields


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """Full representation of a stored post."""

    id: str = Field(description="Store-assigned identifier (24-hex ObjectId)")
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")
    views: int = Field(default=0, description="View counter")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=post.author,
            tags=post.tags,
            createdAt=post.created_at,
            views=post.views,
        )


class MessageResponse(BaseModel):
    """
    Body of every error response and of a successful delete.

    Example:
        {"message": "Post not found"}
    """

    message: str


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
