"""Tests for wordpress_graph.content_store.ContentStore."""

import pytest

from wordpress_graph.content_store import ContentStore, pascal_case
from wordpress_graph.graph_builder import GraphNode


def test_pascal_case():
    assert pascal_case("post") == "Post"
    assert pascal_case("post_tag") == "PostTag"
    assert pascal_case("my-custom_type") == "MyCustomType"


def test_collection_name_uses_type_name_prefix():
    store = ContentStore(type_name="Blog")
    registration = store.add_type("post_tag", {"name": "Tags", "route": "/tag/:slug"})

    assert registration["collection"] == "BlogPostTag"
    assert registration["name"] == "Tags"
    assert registration["route"] == "/tag/:slug"


def test_make_uid_is_deterministic():
    assert ContentStore().make_uid("post-1") == ContentStore().make_uid("post-1")


def test_make_uid_distinguishes_namespaces():
    store = ContentStore()
    assert store.make_uid("post-1") != store.make_uid("term-1")


def test_make_uid_scoped_by_type_name():
    assert ContentStore("A").make_uid("post-1") != ContentStore("B").make_uid("post-1")


def test_add_node_requires_registered_type():
    with pytest.raises(KeyError):
        ContentStore().add_node("post", GraphNode(id="x", title="", slug=""))


def test_add_node_overwrites_by_id():
    store = ContentStore()
    store.add_type("post", {"name": "Posts"})
    store.add_node("post", GraphNode(id="x", title="old", slug="a"))
    store.add_node("post", GraphNode(id="x", title="new", slug="a"))

    assert len(store.nodes("post")) == 1
    assert store.get_node("post", "x").title == "new"


def test_counts_and_payload():
    store = ContentStore()
    store.add_type("post", {"name": "Posts", "route": None})
    store.add_type("category", {"name": "Categories", "route": "/category/:slug"})
    store.add_node("post", GraphNode(id="p1", title="Hello", slug="hello"))

    assert store.counts() == {"post": 1, "category": 0}

    payload = store.get_payload()
    assert payload["type_name"] == "WordPress"
    assert [t["type_key"] for t in payload["types"]] == ["post", "category"]
    assert payload["types"][0]["nodes"] == [{
        "id": "p1", "title": "Hello", "date": None, "slug": "hello", "fields": {}, "refs": {},
    }]
