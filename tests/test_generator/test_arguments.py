"""Tests for splitting call arguments into path, body, and query parameters."""

from __future__ import annotations

import pytest

from gapispec.exceptions import InvalidUsageError
from gapispec.generator.arguments import (
    build_url,
    is_primitive,
    is_structured,
    quote_segment,
    resolve_call,
)
from gapispec.generator.walker import describe
from gapispec.models import HTTPMethod

BASE = "https://www.googleapis.com/blogger/v3/"


# ---------------------------------------------------------------------------
# Type predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    @pytest.mark.parametrize("value", ["abc", 42, 3.5, ""])
    def test_primitive(self, value) -> None:
        assert is_primitive(value)

    @pytest.mark.parametrize("value", [True, False, None, {}, [], object()])
    def test_not_primitive(self, value) -> None:
        assert not is_primitive(value)

    def test_structured(self) -> None:
        assert is_structured({"a": 1})
        assert is_structured([1, 2])
        assert not is_structured("abc")
        assert not is_structured(None)

    def test_quote_segment(self) -> None:
        assert quote_segment("a b/c@d") == "a%20b%2Fc%40d"
        assert quote_segment(7) == "7"


# ---------------------------------------------------------------------------
# URL construction
# ---------------------------------------------------------------------------


class TestBuildUrl:
    def test_collection(self) -> None:
        url, consumed = build_url(describe("list", "blogs"), BASE, ())
        assert url == BASE + "blogs"
        assert consumed == 0

    def test_instance(self) -> None:
        url, consumed = build_url(describe("get", "blogs"), BASE, ("123",))
        assert url == BASE + "blogs/123"
        assert consumed == 1

    def test_numeric_instance_id(self) -> None:
        url, _ = build_url(describe("get", "blogs"), BASE, (123,))
        assert url == BASE + "blogs/123"

    def test_nested(self) -> None:
        descriptor = describe("get", "comments", ("blogs", "posts"))
        url, consumed = build_url(descriptor, BASE, ("b1", "p2", "c3"))
        assert url == BASE + "blogs/b1/posts/p2/comments/c3"
        assert consumed == 3

    def test_nested_collection(self) -> None:
        descriptor = describe("list", "comments", ("blogs", "posts"))
        url, consumed = build_url(descriptor, BASE, ("b1", "p2", {"maxResults": 5}))
        assert url == BASE + "blogs/b1/posts/p2/comments"
        assert consumed == 2

    def test_structured_value_is_not_an_id(self) -> None:
        url, consumed = build_url(describe("list", "blogs"), BASE, ({"q": "x"},))
        assert url == BASE + "blogs"
        assert consumed == 0

    def test_ids_are_percent_encoded(self) -> None:
        url, _ = build_url(describe("get", "blogs"), BASE, ("a/b c",))
        assert url == BASE + "blogs/a%2Fb%20c"

    def test_suffix_follows_instance_id(self) -> None:
        url, _ = build_url(describe("set", "thumbnails"), BASE, ("vid",))
        assert url == BASE + "thumbnails/vid/set"

    def test_suffix_without_instance_id(self) -> None:
        url, _ = build_url(describe("unset", "watermarks"), BASE, ({"channelId": "c"},))
        assert url == BASE + "watermarks/unset"

    def test_missing_ancestor_id(self) -> None:
        descriptor = describe("list", "comments", ("blogs", "posts"))
        with pytest.raises(InvalidUsageError, match="identifier for 'posts'"):
            build_url(descriptor, BASE, ("b1",))

    def test_structured_ancestor_id(self) -> None:
        descriptor = describe("list", "posts", ("blogs",))
        with pytest.raises(InvalidUsageError, match="identifier for 'blogs'"):
            build_url(descriptor, BASE, ({"maxResults": 1},))

    def test_bool_is_not_an_ancestor_id(self) -> None:
        descriptor = describe("list", "posts", ("blogs",))
        with pytest.raises(InvalidUsageError):
            build_url(descriptor, BASE, (True,))


# ---------------------------------------------------------------------------
# Positional form
# ---------------------------------------------------------------------------


class TestPositionalReads:
    def test_params_only(self) -> None:
        env = resolve_call(describe("list", "blogs"), BASE, ({"maxResults": 10},))
        assert env.method == HTTPMethod.GET
        assert env.url == BASE + "blogs"
        assert env.params == {"maxResults": 10}
        assert env.body is None

    def test_id_and_params(self) -> None:
        env = resolve_call(describe("get", "blogs"), BASE, ("42", {"view": "READER"}))
        assert env.url == BASE + "blogs/42"
        assert env.params == {"view": "READER"}

    def test_no_arguments(self) -> None:
        env = resolve_call(describe("list", "blogs"), BASE, ())
        assert env.params is None
        assert env.body is None

    def test_delete_never_sends_body(self) -> None:
        env = resolve_call(describe("delete", "posts", ("blogs",)), BASE, ("b", "p"))
        assert env.method == HTTPMethod.DELETE
        assert env.url == BASE + "blogs/b/posts/p"
        assert env.body is None

    def test_set_posts_without_body(self) -> None:
        env = resolve_call(describe("set", "thumbnails"), BASE, ({"videoId": "v"},))
        assert env.method == HTTPMethod.POST
        assert env.params == {"videoId": "v"}
        assert env.body is None

    def test_two_mappings_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="at most one"):
            resolve_call(describe("list", "blogs"), BASE, ({"a": 1}, {"b": 2}))

    def test_list_as_params_rejected(self) -> None:
        with pytest.raises(InvalidUsageError):
            resolve_call(describe("list", "blogs"), BASE, ([1, 2],))

    def test_stray_primitive_rejected(self) -> None:
        with pytest.raises(InvalidUsageError):
            resolve_call(describe("get", "blogs"), BASE, ("1", "2"))

    def test_trailing_none_means_no_params(self) -> None:
        env = resolve_call(describe("list", "videos"), BASE, (None,))
        assert env.url == BASE + "videos"
        assert env.params is None

    def test_id_then_none(self) -> None:
        env = resolve_call(describe("get", "blogs"), BASE, ("42", None))
        assert env.url == BASE + "blogs/42"
        assert env.params is None

    def test_only_one_trailing_none_dropped(self) -> None:
        with pytest.raises(InvalidUsageError, match="at most one"):
            resolve_call(describe("list", "blogs"), BASE, (None, None))


class TestPositionalWrites:
    def test_body_only(self) -> None:
        env = resolve_call(describe("insert", "blogs"), BASE, ({"name": "x"},))
        assert env.method == HTTPMethod.POST
        assert env.body == {"name": "x"}
        assert env.params is None

    def test_body_and_params(self) -> None:
        env = resolve_call(
            describe("insert", "posts", ("blogs",)),
            BASE,
            ("b1", {"title": "t"}, {"isDraft": True}),
        )
        assert env.url == BASE + "blogs/b1/posts"
        assert env.body == {"title": "t"}
        assert env.params == {"isDraft": True}

    def test_id_body_and_params(self) -> None:
        env = resolve_call(
            describe("update", "posts", ("blogs",)),
            BASE,
            ("b1", "p1", {"title": "t"}, {"publish": True}),
        )
        assert env.method == HTTPMethod.PUT
        assert env.url == BASE + "blogs/b1/posts/p1"
        assert env.body == {"title": "t"}
        assert env.params == {"publish": True}

    def test_list_body(self) -> None:
        env = resolve_call(describe("patch", "blogs"), BASE, ("1", [{"op": "x"}]))
        assert env.method == HTTPMethod.PATCH
        assert env.body == [{"op": "x"}]

    def test_missing_body(self) -> None:
        with pytest.raises(InvalidUsageError, match="requires a request body"):
            resolve_call(describe("insert", "blogs"), BASE, ())

    def test_id_without_body(self) -> None:
        with pytest.raises(InvalidUsageError, match="requires a request body"):
            resolve_call(describe("update", "blogs"), BASE, ("1",))

    def test_three_structured_values_rejected(self) -> None:
        with pytest.raises(InvalidUsageError):
            resolve_call(describe("insert", "blogs"), BASE, ({}, {}, {}))

    def test_params_must_be_a_mapping(self) -> None:
        with pytest.raises(InvalidUsageError):
            resolve_call(describe("insert", "blogs"), BASE, ({"a": 1}, [1]))

    def test_body_then_none(self) -> None:
        env = resolve_call(describe("insert", "videos"), BASE, ({"snippet": {}}, None))
        assert env.url == BASE + "videos"
        assert env.body == {"snippet": {}}
        assert env.params is None

    def test_none_is_not_a_body(self) -> None:
        with pytest.raises(InvalidUsageError, match="requires a request body"):
            resolve_call(describe("insert", "blogs"), BASE, (None,))


# ---------------------------------------------------------------------------
# Explicit form
# ---------------------------------------------------------------------------


class TestExplicitForm:
    def test_body_and_params_keywords(self) -> None:
        env = resolve_call(
            describe("insert", "posts", ("blogs",)),
            BASE,
            ("b1",),
            body={"title": "t"},
            params={"isDraft": True},
        )
        assert env.url == BASE + "blogs/b1/posts"
        assert env.body == {"title": "t"}
        assert env.params == {"isDraft": True}

    def test_params_keyword_on_read(self) -> None:
        env = resolve_call(describe("get", "blogs"), BASE, ("1",), params={"view": "ADMIN"})
        assert env.url == BASE + "blogs/1"
        assert env.params == {"view": "ADMIN"}

    def test_mapping_body_is_not_sniffed_as_params(self) -> None:
        env = resolve_call(describe("patch", "blogs"), BASE, ("1",), body={"name": "n"})
        assert env.body == {"name": "n"}
        assert env.params is None

    def test_positional_structured_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="path identifiers only"):
            resolve_call(describe("insert", "blogs"), BASE, ({"a": 1},), params={"b": 2})

    def test_body_on_read_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="does not accept a request body"):
            resolve_call(describe("get", "blogs"), BASE, ("1",), body={"a": 1})

    def test_write_without_body_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="requires a request body"):
            resolve_call(describe("insert", "blogs"), BASE, (), params={"a": 1})

    def test_non_mapping_params_rejected(self) -> None:
        with pytest.raises(InvalidUsageError, match="params must be a mapping"):
            resolve_call(describe("list", "blogs"), BASE, (), params=["a"])  # type: ignore[arg-type]
