"""Shared fakes: a scripted WordPress site answering with real requests.Response objects."""

import json
import threading
import time

import pytest
import requests

from wordpress_graph.paged_fetcher import page_url

BASE_URL = "https://blog.example.com"
REST_URL = f"{BASE_URL}/wp-json/wp/v2"


def make_response(url, body, headers=None, status=200):
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode("utf-8")
    response.headers.update(headers or {})
    return response


class FakeWordPress:
    """Stands in for WordPressClient. Unknown URLs answer 404."""

    def __init__(self, base_url=BASE_URL, delay=0.0):
        self.base_url = base_url
        self.rest_url = f"{base_url}/wp-json/wp/v2"
        self.delay = delay
        self.routes = {}
        self.requests = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def endpoint(self, rest_base):
        return f"{self.rest_url}/{rest_base}"

    def add(self, url, body, headers=None):
        self.routes[url] = make_response(url, body, headers)

    def fail(self, url, error=None):
        self.routes[url] = error or requests.ConnectionError(f"Connection refused: {url}")

    def add_collection(self, rest_base, records, per_page=100):
        """Serve records as WordPress would, split into pages of per_page."""
        url = self.endpoint(rest_base)
        pages = [records[i:i + per_page] for i in range(0, len(records), per_page)] or [[]]
        headers = {"X-WP-Total": str(len(records)), "X-WP-TotalPages": str(len(pages))}
        self.add(page_url(url, per_page), pages[0], headers)
        for number, page in enumerate(pages[1:], start=2):
            self.add(page_url(url, per_page, number), page, headers)

    def add_schema(self, types, taxonomies):
        self.add(self.rest_url, {"namespace": "wp/v2", "routes": {}})
        self.add(f"{self.rest_url}/types", types)
        self.add(f"{self.rest_url}/taxonomies", taxonomies)

    def get(self, url, params=None):
        with self._lock:
            self.requests.append(url)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            answer = self.routes.get(url)
            if answer is None:
                raise requests.HTTPError(f"404 Client Error: Not Found for url: {url}")
            if isinstance(answer, Exception):
                raise answer
            return answer
        finally:
            with self._lock:
                self.in_flight -= 1


SITE_TYPES = {
    "post": {"name": "Posts", "slug": "post", "rest_base": "posts"},
    "page": {"name": "Pages", "slug": "page", "rest_base": "pages"},
    "attachment": {"name": "Media", "slug": "attachment", "rest_base": "media"},
}

SITE_TAXONOMIES = {
    "category": {"name": "Categories", "slug": "category", "rest_base": "categories"},
    "post_tag": {"name": "Tags", "slug": "post_tag", "rest_base": "tags"},
}


def post_record(post_id, **extra):
    record = {
        "id": post_id,
        "type": "post",
        "date": "2019-04-01T10:00:00",
        "slug": f"post-{post_id}",
        "title": {"rendered": f"Post {post_id}"},
        "content": {"rendered": f"<p>Body {post_id}</p>"},
        "excerpt": {"rendered": f"<p>Excerpt {post_id}</p>"},
        "categories": [1],
        "tags": [],
    }
    record.update(extra)
    return record


def term_record(term_id, taxonomy, **extra):
    record = {
        "id": term_id,
        "name": f"Term {term_id}",
        "slug": f"term-{term_id}",
        "count": 2,
        "taxonomy": taxonomy,
    }
    record.update(extra)
    return record


@pytest.fixture
def fake_wp():
    return FakeWordPress()


@pytest.fixture
def site():
    """A small site: 3 posts, 1 page, 2 categories, 1 tag."""
    wp = FakeWordPress()
    wp.add_schema(SITE_TYPES, SITE_TAXONOMIES)
    wp.add_collection("posts", [
        post_record(1, categories=[1, 2], tags=[5]),
        post_record(2, categories=[2]),
        post_record(3),
    ], per_page=2)
    wp.add_collection("pages", [
        {"id": 10, "type": "page", "date": None, "slug": "about",
         "title": {"rendered": "About"}, "content": {"rendered": "<p>Us</p>"},
         "excerpt": {"rendered": ""}},
    ], per_page=2)
    wp.add_collection("categories", [term_record(1, "category"), term_record(2, "category")], per_page=2)
    wp.add_collection("tags", [term_record(5, "post_tag")], per_page=2)
    return wp
