"""Tests for Service: dispatch table, generic invoke, and hand-written methods."""

from __future__ import annotations

import asyncio
import inspect

import pytest

from gapispec.exceptions import DuplicateMethodError, InvalidUsageError, NotFoundError, SpecError
from gapispec.service import Service, join_path

SPEC = {
    "blogs": ["get", {
        "posts": ["list", "get", "insert", "delete", {
            "comments": ["list"],
        }],
    }],
}


@pytest.fixture
def service(client) -> Service:
    return Service("blogger", "v3", SPEC, client)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_url(self, service: Service) -> None:
        assert service.url == "https://www.googleapis.com/blogger/v3/"
        assert service.api == "blogger"
        assert service.version == "v3"

    def test_server_override(self, client) -> None:
        service = Service("drive", "v2", {}, client, server="http://localhost:9000/")
        assert service.url == "http://localhost:9000/drive/v2/"

    def test_methods_in_spec_order(self, service: Service) -> None:
        assert service.methods() == [
            "getBlogs",
            "listPosts",
            "getPosts",
            "insertPosts",
            "deletePosts",
            "listComments",
        ]

    def test_duplicate_generated_name(self, client) -> None:
        spec = {
            "a": ["get", {"items": ["list"]}],
            "b": ["get", {"items": ["list"]}],
        }
        with pytest.raises(SpecError, match="'listItems' twice"):
            Service("x", "v1", spec, client)

    def test_malformed_spec(self, client) -> None:
        with pytest.raises(SpecError):
            Service("x", "v1", {"a": ["explode"]}, client)

    def test_empty_spec(self, client) -> None:
        assert Service("x", "v1", {}, client).methods() == []


# ---------------------------------------------------------------------------
# Method surface
# ---------------------------------------------------------------------------


class TestMethodSurface:
    def test_generated_method_is_coroutine_function(self, service: Service) -> None:
        call = service.listPosts("b1")
        assert inspect.iscoroutine(call)
        call.close()

    def test_unknown_attribute(self, service: Service) -> None:
        with pytest.raises(AttributeError, match="no method 'listBlogs'"):
            service.listBlogs  # noqa: B018

    def test_dir_lists_methods(self, service: Service) -> None:
        assert "listComments" in dir(service)

    def test_describe(self, service: Service) -> None:
        descriptor = service.describe("listComments")
        assert descriptor.ancestors == ("blogs", "posts")
        assert descriptor.path_template == "blogs/{blogsId}/posts/{postsId}/comments"

    def test_describe_unknown(self, service: Service) -> None:
        with pytest.raises(InvalidUsageError, match="no method 'nope'"):
            service.describe("nope")


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestInvoke:
    @pytest.mark.asyncio
    async def test_resolves_with_decoded_payload(self, service: Service, recorder) -> None:
        recorder.reply(200, {"kind": "blogger#postList", "items": []})
        result = await service.listPosts("b1", {"maxResults": 5})
        assert result == {"kind": "blogger#postList", "items": []}
        assert recorder.last.method == "GET"
        assert str(recorder.last.url) == (
            "https://www.googleapis.com/blogger/v3/blogs/b1/posts?maxResults=5"
        )

    @pytest.mark.asyncio
    async def test_nested_get(self, service: Service, recorder) -> None:
        await service.getPosts("b1", "p1")
        assert recorder.last.url.path == "/blogger/v3/blogs/b1/posts/p1"

    @pytest.mark.asyncio
    async def test_insert_sends_json_body(self, service: Service, recorder) -> None:
        await service.insertPosts("b1", {"title": "Hello"}, {"isDraft": "true"})
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/blogger/v3/blogs/b1/posts"
        assert recorder.last.url.params["isDraft"] == "true"
        assert recorder.last_json() == {"title": "Hello"}

    @pytest.mark.asyncio
    async def test_explicit_form(self, service: Service, recorder) -> None:
        await service.invoke("insertPosts", "b1", body={"title": "x"})
        assert recorder.last.url.path == "/blogger/v3/blogs/b1/posts"
        assert recorder.last_json() == {"title": "x"}

    @pytest.mark.asyncio
    async def test_bearer_header(self, service: Service, recorder) -> None:
        await service.getBlogs("1")
        assert recorder.last.headers["Authorization"] == "Bearer ya29.test"

    @pytest.mark.asyncio
    async def test_error_rejects_with_payload(self, service: Service, recorder) -> None:
        payload = {"error": {"code": 404, "message": "Blog not found"}}
        recorder.reply(404, payload)
        with pytest.raises(NotFoundError) as exc_info:
            await service.getBlogs("missing")
        assert exc_info.value.payload == payload
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_misuse_raises_before_any_request(self, service: Service, recorder) -> None:
        with pytest.raises(InvalidUsageError):
            await service.listComments("b1")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_invoke_unknown(self, service: Service) -> None:
        with pytest.raises(InvalidUsageError, match="Available methods"):
            await service.invoke("frobnicate")

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, service: Service, recorder) -> None:
        recorder.reply(500, {"error": {"message": "boom"}})
        results = await asyncio.gather(
            service.getBlogs("1"),
            service.getBlogs("2"),
            return_exceptions=True,
        )
        assert sum(isinstance(r, Exception) for r in results) == 1
        assert len(recorder.requests) == 2


# ---------------------------------------------------------------------------
# Hand-written methods
# ---------------------------------------------------------------------------


async def _get_by_path(service: Service, blog_id: str, params=None):
    return await service.request("GET", join_path("blogs", blog_id, "posts", "bypath"), params=params)


class TestRegister:
    @pytest.mark.asyncio
    async def test_registered_method_is_callable(self, service: Service, recorder) -> None:
        service.register("getPostByPath", _get_by_path)
        await service.getPostByPath("b1", {"path": "/2024/01/x.html"})
        assert recorder.last.url.path == "/blogger/v3/blogs/b1/posts/bypath"
        assert recorder.last.url.params["path"] == "/2024/01/x.html"

    def test_listed_after_generated(self, service: Service) -> None:
        service.register("getPostByPath", _get_by_path)
        assert service.methods()[-1] == "getPostByPath"
        assert service.describe("getPostByPath") is None
        assert service.handwritten("getPostByPath") is _get_by_path

    def test_duplicate_without_override(self, service: Service) -> None:
        with pytest.raises(DuplicateMethodError, match="override=True"):
            service.register("listPosts", _get_by_path)

    def test_duplicate_hand_written(self, service: Service) -> None:
        service.register("getPostByPath", _get_by_path)
        with pytest.raises(DuplicateMethodError):
            service.register("getPostByPath", _get_by_path)

    @pytest.mark.asyncio
    async def test_override_exposes_latest(self, service: Service) -> None:
        async def first(svc):
            return "first"

        async def second(svc):
            return "second"

        service.register("ping", first)
        service.register("ping", second, override=True)
        assert await service.ping() == "second"
        assert service.methods().count("ping") == 1

    @pytest.mark.asyncio
    async def test_override_generated(self, service: Service, recorder) -> None:
        async def list_posts(svc, *args):
            return "custom"

        service.register("listPosts", list_posts, override=True)
        assert await service.listPosts("b1") == "custom"
        assert service.describe("listPosts") is None
        assert recorder.requests == []

    def test_cannot_shadow_service_attribute(self, service: Service) -> None:
        with pytest.raises(DuplicateMethodError, match="shadow"):
            service.register("request", _get_by_path, override=True)

    @pytest.mark.asyncio
    async def test_invoke_forwards_keywords(self, service: Service, recorder) -> None:
        service.register("getPostByPath", _get_by_path)
        await service.invoke("getPostByPath", "b1", params={"path": "/p"})
        assert recorder.last.url.params["path"] == "/p"

    @pytest.mark.asyncio
    async def test_invoke_rejects_bad_arguments(self, service: Service, recorder) -> None:
        service.register("getPostByPath", _get_by_path)
        with pytest.raises(InvalidUsageError, match="getPostByPath"):
            await service.invoke("getPostByPath")
        assert recorder.requests == []


class TestJoinPath:
    def test_encodes_each_segment(self) -> None:
        assert join_path("calendars", "me@example.com", "clear") == (
            "calendars/me%40example.com/clear"
        )

    def test_numbers(self) -> None:
        assert join_path("moments", 12) == "moments/12"
