"""Tests for Store record operations over a mocked Parse backend."""

import json
from datetime import UTC, datetime

import pytest

from parse_adapter.domain.record.model import ParseModel, RecordState, attr, belongs_to, has_many
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.shared.error import (
    InvalidValueError,
    RecordStateError,
    TransportError,
    UnknownModelError,
)

BASE = "https://api.parse.com/1"


class Post(ParseModel):
    title = attr("string")
    views = attr("number")
    owner = belongs_to("user")
    comments = has_many()


class Comment(ParseModel):
    text = attr("string")


class Event(ParseModel):
    starts_at = attr("date", key="startsAt")


class Bookcase(ParseModel):
    categories = has_many()


class Category(ParseModel):
    name = attr("string")


class Drawer(ParseModel):
    socks = has_many()


class TestFind:
    @pytest.mark.asyncio
    async def test_find_loads_record(self, store: Store, transport) -> None:
        transport.reply(
            200,
            {
                "objectId": "p1",
                "title": "Hello",
                "views": 3,
                "owner": {"__type": "Pointer", "className": "_User", "objectId": "u1"},
                "createdAt": "2011-11-07T20:58:34.448Z",
            },
        )

        post = await store.find(Post, "p1")

        assert str(transport.last.url) == f"{BASE}/classes/Post/p1"
        assert post.id == "p1"
        assert post.title == "Hello"
        assert post.owner == "u1"
        assert post.created_at == datetime(2011, 11, 7, 20, 58, 34, 448000, tzinfo=UTC)
        assert post.state is RecordState.LOADED

    @pytest.mark.asyncio
    async def test_find_by_type_key(self, store: Store, transport) -> None:
        transport.reply(200, {"objectId": "p1"})
        post = await store.find("post", "p1")
        assert isinstance(post, Post)

    @pytest.mark.asyncio
    async def test_find_query_returns_records(self, store: Store, transport) -> None:
        transport.reply(200, {"results": [{"objectId": "p1"}, {"objectId": "p2"}]})

        posts = await store.find_query(Post, {"where": {"views": {"$gt": 1}}})

        assert [p.id for p in posts] == ["p1", "p2"]
        assert json.loads(transport.last.url.params["where"]) == {"views": {"$gt": 1}}

    @pytest.mark.asyncio
    async def test_has_many_loads_lazily(self, store: Store, transport) -> None:
        transport.reply(200, {"objectId": "p1", "title": "Hello"})
        post = await store.find(Post, "p1")
        assert len(transport.requests) == 1

        transport.reply(200, {"results": [{"objectId": "c1", "text": "First"}]})
        comments = await post.comments

        assert len(transport.requests) == 2
        assert str(transport.last.url).startswith(f"{BASE}/classes/Comment")
        assert json.loads(transport.last.url.params["where"]) == {
            "$relatedTo": {
                "object": {"__type": "Pointer", "className": "Post", "objectId": "p1"},
                "key": "comments",
            }
        }
        assert [c.text for c in comments] == ["First"]

    @pytest.mark.asyncio
    async def test_irregular_plural_relation_loads(self, store: Store, transport) -> None:
        transport.reply(200, {"objectId": "b1"})
        bookcase = await store.find(Bookcase, "b1")

        transport.reply(200, {"results": [{"objectId": "k1", "name": "Poetry"}]})
        categories = await bookcase.categories

        assert str(transport.last.url).startswith(f"{BASE}/classes/Category")
        assert [c.name for c in categories] == ["Poetry"]
        assert isinstance(categories[0], Category)

    @pytest.mark.asyncio
    async def test_unregistered_relation_target_fails_only_on_await(
        self, store: Store, transport
    ) -> None:
        transport.reply(200, {"objectId": "d1"})
        drawer = await store.find(Drawer, "d1")
        assert drawer.id == "d1"

        with pytest.raises(UnknownModelError):
            await drawer.socks
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_rfc_2822_dates_are_accepted(self, store: Store, transport) -> None:
        transport.reply(200, {"objectId": "e1", "startsAt": "Mon, 07 Nov 2011 20:58:34 GMT"})

        event = await store.find(Event, "e1")

        assert event.starts_at == datetime(2011, 11, 7, 20, 58, 34, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_unparseable_date_raises_domain_error(self, store: Store, transport) -> None:
        transport.reply(200, {"objectId": "e1", "startsAt": "sometime soon"})

        with pytest.raises(InvalidValueError):
            await store.find(Event, "e1")

    def test_store_binds_relation_queries(self, store: Store, serializer) -> None:
        related = serializer.normalize(Post, {"objectId": "p1"})["comments"]
        assert related.executor == store.find_query

    def test_load_materializes_without_request(self, store: Store, transport) -> None:
        post = store.load(Post, {"objectId": "p1", "title": "Hello"})
        assert post.id == "p1"
        assert post.state is RecordState.LOADED
        assert transport.requests == []


class TestSave:
    @pytest.mark.asyncio
    async def test_new_record_is_created(self, store: Store, transport) -> None:
        transport.reply(201, {"objectId": "p1", "createdAt": "2011-11-07T20:58:34.448Z"})
        post = store.create_record(Post, title="Hello", views=1)

        await store.save(post)

        assert transport.last.method == "POST"
        assert transport.last_json() == {"title": "Hello", "views": 1}
        assert post.id == "p1"
        assert post.title == "Hello"
        assert post.state is RecordState.LOADED
        assert not post.is_dirty

    @pytest.mark.asyncio
    async def test_loaded_record_is_updated(self, store: Store, transport) -> None:
        post = store.load(Post, {"objectId": "p1", "title": "Hello", "views": 1})
        post.views = 2
        transport.reply(200, {"updatedAt": "2011-11-08T10:00:00.000Z"})

        await store.save(post)

        assert transport.last.method == "PUT"
        assert str(transport.last.url) == f"{BASE}/classes/Post/p1"
        assert post.id == "p1"
        assert post.title == "Hello"
        assert post.views == 2
        assert post.updated_at == datetime(2011, 11, 8, 10, 0, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_failed_save_restores_state(self, store: Store, transport) -> None:
        transport.reply(400, {"code": 111, "error": "invalid type"})
        post = store.create_record(Post, title="Hello")

        with pytest.raises(TransportError) as exc_info:
            await store.save(post)

        assert exc_info.value.payload == {"code": 111, "error": "invalid type"}
        assert post.state is RecordState.NEW
        assert post.id is None

    @pytest.mark.asyncio
    async def test_deleted_record_cannot_be_saved(self, store: Store, transport) -> None:
        post = store.load(Post, {"objectId": "p1"})
        await store.delete_record(post)

        with pytest.raises(RecordStateError):
            await store.save(post)


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_sends_request(self, store: Store, transport) -> None:
        post = store.load(Post, {"objectId": "p1"})

        await store.delete_record(post)

        assert transport.last.method == "DELETE"
        assert str(transport.last.url) == f"{BASE}/classes/Post/p1"
        assert post.is_deleted

    @pytest.mark.asyncio
    async def test_unsaved_record_cannot_be_deleted(self, store: Store, transport) -> None:
        with pytest.raises(RecordStateError):
            await store.delete_record(Post(title="Hello"))
        assert transport.requests == []
