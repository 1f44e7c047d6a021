"""
Blog API — Post Repository
============================

What:  Thin wrappers over MongoDB primitives for the `posts` collection.
How:   Each method issues one driver call and converts documents to Post.
Who:   Constructed per request by `get_post_repository`; called by PostService.

Outcomes:
    - Absent documents come back as None (or [] for the listing).
    - A malformed id raises bson.errors.InvalidId; it is an error, not "not found".
    - Driver errors propagate unchanged; the service decides the status code.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import Depends
from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from blog.database import DocumentStore, get_store
from blog.models.post import COLLECTION_NAME, UPDATABLE_FIELDS, WRITABLE_FIELDS, Post

logger = logging.getLogger(__name__)


class PostRepository:
    """Post operations bound to one collection handle."""

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def list_all(self) -> List[Post]:
        """All posts, newest first. No limit."""
        cursor = self._collection.find().sort("createdAt", DESCENDING)
        documents = await cursor.to_list(length=None)
        return [Post.from_document(doc) for doc in documents]

    async def get_by_id(self, post_id: str) -> Optional[Post]:
        document = await self._collection.find_one({"_id": ObjectId(post_id)})
        if document is None:
            return None
        return Post.from_document(document)

    async def create(self, fields: Dict[str, Any]) -> Post:
        """
        Inserts a new post built from the writable fields.

        `createdAt`, `views` and `tags` fall back to the model defaults;
        the store assigns `_id`.
        """
        post = Post(**{k: v for k, v in fields.items() if k in WRITABLE_FIELDS and v is not None})
        document = post.to_document()
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Post inserted: %s", result.inserted_id)
        return Post.from_document(document)

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> Optional[Post]:
        """
        Applies `fields` over the stored post and returns it after the write.

        An empty field set writes nothing and returns the current document.
        """
        object_id = ObjectId(post_id)
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not changes:
            document = await self._collection.find_one({"_id": object_id})
        else:
            document = await self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            return None
        return Post.from_document(document)

    async def delete_by_id(self, post_id: str) -> Optional[Post]:
        """Removes the post and returns what was deleted, or None."""
        document = await self._collection.find_one_and_delete({"_id": ObjectId(post_id)})
        if document is None:
            return None
        logger.info("Post deleted: %s", post_id)
        return Post.from_document(document)


# ── Repository Dependency ─────────────────────────────────────────────────
def get_post_repository(store: DocumentStore = Depends(get_store)) -> PostRepository:
    """FastAPI dependency binding a repository to the app's store."""
    return PostRepository(store.collection(COLLECTION_NAME))
