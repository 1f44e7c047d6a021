"""
Blog API — Post Document Model
================================

What:  The shape of a stored post and the defaults applied on creation.
How:   A Pydantic model that converts to and from MongoDB documents in the
       `posts` collection. Document keys use the wire names (`createdAt`).
Who:   Built by PostRepository; turned into PostResponse by the service layer.

Document layout:
    {
        "_id":       ObjectId    store-assigned, immutable
        "title":     str | null
        "content":   str | null
        "author":    str | null
        "tags":      [str]       defaults to []
        "createdAt": datetime    defaults to creation time (UTC), immutable
        "views":     int         defaults to 0, never incremented
    }
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

COLLECTION_NAME = "posts"

# Fields a client may set on create
WRITABLE_FIELDS = ("title", "content", "author", "tags")

# Fields a client may set on update; id and createdAt stay fixed
UPDATABLE_FIELDS = WRITABLE_FIELDS + ("views",)


def utcnow() -> datetime:
    """Current UTC time at millisecond precision, the resolution BSON dates keep."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class Post(BaseModel):
    """
    A single blog post.

    `id` is None until the store has inserted the document.
    No field is required; a post with every field empty is valid.
    """

    id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    views: int = 0

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Post":
        """Builds a Post from a raw MongoDB document."""
        data: Dict[str, Any] = {
            "id": str(document["_id"]),
            "title": document.get("title"),
            "content": document.get("content"),
            "author": document.get("author"),
            "tags": list(document.get("tags") or []),
            "views": document.get("views", 0),
        }
        if document.get("createdAt") is not None:
            data["created_at"] = document["createdAt"]
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Document to insert. `_id` is left for the store to assign."""
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "views": self.views,
        }

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
