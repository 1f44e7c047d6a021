"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_collection: MagicMock/AsyncMock stand-in for a pymongo collection
    ├── sample_document: Raw MongoDB document for one post
    ├── fake_repository: In-memory PostRepository double
    ├── bson_collection: Collection double that round-trips documents through BSON
    └── test_client: HTTPX AsyncClient with the repository dependency overridden
"""

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Set before any blog import so the settings singleton never sees a real store
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/blog_test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import CodecOptions, ObjectId, decode, encode
from httpx import ASGITransport, AsyncClient

from blog.models.post import UPDATABLE_FIELDS, WRITABLE_FIELDS, Post


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store Doubles
# ══════════════════════════════════════════════════════════════════════════

# Decoding options matching DocumentStore's tz_aware client
BSON_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


class InMemoryPostRepository:
    """
    Dict-backed double with the same contract as PostRepository.

    Posts are kept as encoded BSON, so a read returns what MongoDB would
    return (dates at millisecond precision), while create and update hand
    back the values as written. Ids are real ObjectIds, so malformed ids
    raise bson.errors.InvalidId exactly as they do against MongoDB.
    """

    def __init__(self):
        self.posts: Dict[ObjectId, bytes] = {}

    def _write(self, object_id: ObjectId, post: Post) -> Post:
        document = post.to_document()
        document["_id"] = object_id
        self.posts[object_id] = encode(document)
        return Post.from_document(document)

    def _read(self, object_id: ObjectId) -> Optional[Post]:
        data = self.posts.get(object_id)
        if data is None:
            return None
        return Post.from_document(decode(data, codec_options=BSON_OPTIONS))

    def seed(self, **fields: Any) -> Post:
        return self._write(ObjectId(), Post(**fields))

    async def list_all(self) -> List[Post]:
        posts = [self._read(object_id) for object_id in self.posts]
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    async def get_by_id(self, post_id: str) -> Optional[Post]:
        return self._read(ObjectId(post_id))

    async def create(self, fields: Dict[str, Any]) -> Post:
        values = {k: v for k, v in fields.items() if k in WRITABLE_FIELDS and v is not None}
        return self.seed(**values)

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> Optional[Post]:
        object_id = ObjectId(post_id)
        post = self._read(object_id)
        if post is None:
            return None
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        return self._write(object_id, post.model_copy(update=changes))

    async def delete_by_id(self, post_id: str) -> Optional[Post]:
        object_id = ObjectId(post_id)
        post = self._read(object_id)
        self.posts.pop(object_id, None)
        return post


class BsonCollection:
    """
    Minimal async collection that stores documents as encoded BSON.

    Only the calls PostRepository.create and get_by_id make are supported.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, bytes] = {}

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        document.setdefault("_id", ObjectId())
        self.documents[document["_id"]] = encode(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        data = self.documents.get(query["_id"])
        if data is None:
            return None
        return decode(data, codec_options=BSON_OPTIONS)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_collection():
    """
    Provides a mock pymongo AsyncCollection.

    Usage:
        mock_collection.find_one.return_value = sample_document
        post = await PostRepository(mock_collection).get_by_id(post_id)
    """
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.find.return_value.sort.return_value.to_list = AsyncMock(return_value=[])
    return collection


@pytest.fixture
def sample_document():
    """A stored post as MongoDB returns it."""
    return {
        "_id": ObjectId(),
        "title": "Hello",
        "content": "World",
        "author": "A",
        "tags": ["x"],
        "createdAt": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        "views": 0,
    }


@pytest.fixture
def older_document(sample_document):
    return {
        **sample_document,
        "_id": ObjectId(),
        "title": "Earlier",
        "createdAt": sample_document["createdAt"] - timedelta(days=1),
    }


@pytest.fixture
def fake_repository():
    return InMemoryPostRepository()


@pytest.fixture
def bson_collection():
    return BsonCollection()


@pytest_asyncio.fixture
async def test_client(fake_repository):
    """
    Provides an async HTTP test client for endpoint testing.

    The lifespan does not run under ASGITransport, so no store is connected;
    the repository dependency is overridden with the in-memory double.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/posts")
    """
    from blog.main import create_app
    from blog.services.post_repository import get_post_repository

    app = create_app()
    app.dependency_overrides[get_post_repository] = lambda: fake_repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
