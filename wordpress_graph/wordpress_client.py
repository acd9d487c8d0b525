"""
WordPress API Client - HTTP transport for the WordPress REST API.

This module is responsible for all HTTP communication with the WordPress site.
Every call is a plain GET against the wp/v2 REST namespace:

    GET {site}/wp-json/wp/v2                         (reachability check)
    GET {site}/wp-json/wp/v2/types                   (content type listing)
    GET {site}/wp-json/wp/v2/taxonomies              (taxonomy listing)
    GET {site}/wp-json/wp/v2/{rest_base}?per_page=N&page=P

Collection responses carry their pagination totals in headers:

    X-WP-Total:      total number of records in the collection
    X-WP-TotalPages: number of pages at the requested per_page

No authentication is sent; only publicly readable content is ingested.

Pipeline context:
    Used by SchemaDiscovery (reachability + listings) and PagedFetcher
    (collection pages). The client is shared by the worker threads of a
    fetch; requests.Session is safe for concurrent GETs without mutation.
"""

from typing import Dict, Any, Optional

import requests


class WordPressClient:
    """Client for the WordPress REST API.

    Attributes:
        base_url: Site URL with trailing slashes stripped.
        rest_url: Root of the REST namespace (e.g., ".../wp-json/wp/v2").
        timeout: Per-request timeout in seconds, or None to wait forever.
        debug: If True, print every request URL.
    """

    def __init__(
        self,
        base_url: str,
        rest_path: str = "wp-json/wp/v2",
        timeout: Optional[float] = None,
        debug: bool = False,
    ):
        self.base_url = base_url.rstrip("/")
        self.rest_url = f"{self.base_url}/{rest_path.strip('/')}"
        self.timeout = timeout
        self.debug = debug
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Issue a GET request and return the raw response.

        Args:
            url: Fully-qualified URL (query string may already be included).
            params: Optional extra query parameters.

        Returns:
            The requests.Response for a 2xx answer.

        Raises:
            requests.RequestException: On connection errors, timeouts, or
                non-2xx status (via raise_for_status).
        """
        if self.debug:
            print(f"  GET {url}")

        response = self._session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response

    def endpoint(self, rest_base: str) -> str:
        """Collection URL for a type's REST path segment (e.g., "posts")."""
        return f"{self.rest_url}/{rest_base.strip('/')}"

    def close(self):
        self._session.close()
