"""
Paged Fetcher - Retrieves a complete WordPress REST collection.

A collection endpoint (e.g., /wp-json/wp/v2/posts) is read in two phases:

  1. Page 1 is requested synchronously with ?per_page=N. Its X-WP-Total and
     X-WP-TotalPages headers tell us how much is left.

  2. If there is more than one page, pages 2..TotalPages are pushed into a
     BoundedWorkQueue as fully-qualified URLs and fetched in parallel, at most
     `concurrency` at a time. Each page's records are appended as the page
     completes, so records keep their order within a page but pages may land
     in any order.

The first failed page (transport error or unreadable body) tears the queue
down and fails the whole fetch. Nothing is returned for a failed collection.

Pipeline context:
    Called by the orchestrator once per content type and once per taxonomy.
    The returned records are raw dicts; GraphBuilder projects them into nodes.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from .errors import FetchError, WordPressSourceError
from .response_normalizer import normalize, response_body
from .wordpress_client import WordPressClient
from .work_queue import BoundedWorkQueue

TOTAL_ITEMS_HEADER = "X-WP-Total"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"


def page_url(url: str, per_page: int, page: Optional[int] = None) -> str:
    """Build a collection URL with per_page (and page, when given) in the query."""
    query = {"per_page": per_page}
    if page is not None:
        query["page"] = page
    return f"{url}?{urlencode(query)}"


def _header_int(response: requests.Response, name: str) -> int:
    try:
        return int(response.headers.get(name, 0))
    except (TypeError, ValueError):
        return 0


class PagedFetcher:
    """Fetches every record of a paginated collection.

    Attributes:
        client: Transport used for every request (must expose get(url)).
        debug: If True, prints page counts and per-page progress.
    """

    def __init__(self, client: WordPressClient, debug: bool = False):
        self.client = client
        self.debug = debug

    def fetch_all(self, url: str, per_page: int = 100, concurrency: int = 10) -> List[Dict[str, Any]]:
        """Fetch all records of the collection at url.

        Args:
            url: Collection endpoint without a query string.
            per_page: Records requested per page.
            concurrency: Maximum page requests in flight.

        Returns:
            All records of the collection; page 1 first, later pages in
            completion order.

        Raises:
            FetchError: If page 1 or any later page request fails.
            MalformedResponseError: If any page body is not a record list.
        """
        first_url = page_url(url, per_page)
        try:
            response = self.client.get(first_url)
        except requests.RequestException as e:
            raise FetchError(first_url, e) from e

        total_items = _header_int(response, TOTAL_ITEMS_HEADER)
        total_pages = _header_int(response, TOTAL_PAGES_HEADER)
        records = list(normalize(url, response_body(response)))

        if self.debug:
            print(f"  {url}: {total_items} item(s) in {total_pages} page(s)")

        if not total_items or total_pages <= 1:
            return records

        queue = BoundedWorkQueue(self.client.get, concurrency=concurrency, debug=self.debug)
        for page in range(2, total_pages + 1):
            queue.push(page_url(url, per_page, page))

        errors: List[WordPressSourceError] = []

        def on_success(task_url: str, page_response: requests.Response):
            try:
                page_records = normalize(task_url, response_body(page_response))
            except WordPressSourceError as e:
                errors.append(e)
                queue.destroy()
                return
            records.extend(page_records)
            if self.debug:
                print(f"  {task_url}: {len(page_records)} record(s)")

        def on_failure(task_url: str, error: Exception):
            failure = FetchError(task_url, error)
            failure.__cause__ = error
            errors.append(failure)
            queue.destroy()

        queue.process(on_success, on_failure)

        if errors:
            raise errors[0]

        return records
