"""
Blog API — Post Repository Unit Tests
=======================================

What:  Tests for PostRepository against a mocked pymongo collection.
How:   The collection's async methods are AsyncMocks (see conftest.py);
       no MongoDB server is needed.

What we test:
    ✅ Listing sorts by createdAt descending and maps documents to Post
    ✅ Lookups by id build ObjectId filters; absent documents give None
    ✅ Malformed ids raise InvalidId before the store is touched
    ✅ Inserts apply createdAt / views / tags defaults
    ✅ A created post reads back unchanged after a BSON round trip
    ✅ Updates $set only client-settable fields (views included, never id or createdAt)
       and return the document after the write
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument

from blog.services.post_repository import PostRepository


class TestListAll:

    @pytest.mark.asyncio
    async def test_sorts_newest_first(self, mock_collection, sample_document, older_document):
        to_list = mock_collection.find.return_value.sort.return_value.to_list
        to_list.return_value = [sample_document, older_document]

        posts = await PostRepository(mock_collection).list_all()

        mock_collection.find.return_value.sort.assert_called_once_with("createdAt", DESCENDING)
        assert [p.title for p in posts] == ["Hello", "Earlier"]
        assert posts[0].id == str(sample_document["_id"])

    @pytest.mark.asyncio
    async def test_empty_collection_returns_empty_list(self, mock_collection):
        posts = await PostRepository(mock_collection).list_all()
        assert posts == []


class TestGetById:

    @pytest.mark.asyncio
    async def test_found(self, mock_collection, sample_document):
        mock_collection.find_one.return_value = sample_document
        post_id = str(sample_document["_id"])

        post = await PostRepository(mock_collection).get_by_id(post_id)

        mock_collection.find_one.assert_awaited_once_with({"_id": ObjectId(post_id)})
        assert post.id == post_id
        assert post.tags == ["x"]
        assert post.created_at == sample_document["createdAt"]

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, mock_collection):
        post = await PostRepository(mock_collection).get_by_id(str(ObjectId()))
        assert post is None

    @pytest.mark.asyncio
    async def test_malformed_id_raises(self, mock_collection):
        with pytest.raises(InvalidId):
            await PostRepository(mock_collection).get_by_id("not-an-id")
        mock_collection.find_one.assert_not_awaited()


class TestCreate:

    @pytest.mark.asyncio
    async def test_assigns_id_and_defaults(self, mock_collection):
        new_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=new_id)

        post = await PostRepository(mock_collection).create(
            {"title": "Hello", "content": "World", "author": "A", "tags": ["x"]}
        )

        assert post.id == str(new_id)
        assert post.title == "Hello"
        assert post.views == 0
        assert isinstance(post.created_at, datetime)
        assert post.created_at.tzinfo is not None

        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["title"] == "Hello"
        assert inserted["views"] == 0
        assert "createdAt" in inserted

    @pytest.mark.asyncio
    async def test_missing_fields_are_null_and_tags_empty(self, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        post = await PostRepository(mock_collection).create({"tags": None})

        assert post.title is None
        assert post.content is None
        assert post.author is None
        assert post.tags == []

    @pytest.mark.asyncio
    async def test_ignores_store_assigned_fields(self, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        post = await PostRepository(mock_collection).create({"title": "t", "views": 99})

        assert post.views == 0


class TestCreateThenRead:
    """Create and a later read agree once documents pass through BSON."""

    @pytest.mark.asyncio
    async def test_get_returns_the_created_post(self, bson_collection):
        repository = PostRepository(bson_collection)

        created = await repository.create({"title": "Hello", "tags": ["x"]})
        fetched = await repository.get_by_id(created.id)

        assert fetched == created
        assert fetched.created_at.microsecond % 1000 == 0


class TestUpdateById:

    @pytest.mark.asyncio
    async def test_sets_fields_and_returns_after(self, mock_collection, sample_document):
        updated = {**sample_document, "title": "X"}
        mock_collection.find_one_and_update.return_value = updated
        post_id = str(sample_document["_id"])

        post = await PostRepository(mock_collection).update_by_id(post_id, {"title": "X"})

        mock_collection.find_one_and_update.assert_awaited_once_with(
            {"_id": ObjectId(post_id)},
            {"$set": {"title": "X"}},
            return_document=ReturnDocument.AFTER,
        )
        assert post.title == "X"
        assert post.content == "World"

    @pytest.mark.asyncio
    async def test_id_and_created_at_are_dropped(self, mock_collection, sample_document):
        mock_collection.find_one_and_update.return_value = sample_document

        await PostRepository(mock_collection).update_by_id(
            str(sample_document["_id"]),
            {"title": "X", "views": 10, "createdAt": None, "_id": "abc"},
        )

        update = mock_collection.find_one_and_update.await_args.args[1]
        assert update == {"$set": {"title": "X", "views": 10}}

    @pytest.mark.asyncio
    async def test_empty_update_reads_current_document(self, mock_collection, sample_document):
        mock_collection.find_one.return_value = sample_document

        post = await PostRepository(mock_collection).update_by_id(str(sample_document["_id"]), {})

        mock_collection.find_one_and_update.assert_not_awaited()
        assert post.title == "Hello"

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, mock_collection):
        post = await PostRepository(mock_collection).update_by_id(str(ObjectId()), {"title": "X"})
        assert post is None


class TestDeleteById:

    @pytest.mark.asyncio
    async def test_returns_deleted_post(self, mock_collection, sample_document):
        mock_collection.find_one_and_delete.return_value = sample_document

        post = await PostRepository(mock_collection).delete_by_id(str(sample_document["_id"]))

        assert post.id == str(sample_document["_id"])

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, mock_collection):
        post = await PostRepository(mock_collection).delete_by_id(str(ObjectId()))
        assert post is None
