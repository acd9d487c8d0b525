"""
Schema Discovery - Finds the site's content types and taxonomies.

WordPress describes its own schema through two REST listings:

    GET /wp-json/wp/v2/types
    {
      "post": {"name": "Posts", "slug": "post", "rest_base": "posts", ...},
      "page": {"name": "Pages", "slug": "page", "rest_base": "pages", ...},
      "attachment": {...}
    }

    GET /wp-json/wp/v2/taxonomies
    {
      "category": {"name": "Categories", "rest_base": "categories", ...},
      "post_tag": {"name": "Tags", "rest_base": "tags", ...}
    }

Each discovered type becomes a collection in the content store. Its
rest_base is the path segment of its collection endpoint. For taxonomies the
rest_base is also the property name under which posts list their term ids
(a post carries "categories": [3, 7] and "tags": [12]).

Before anything else the REST root itself is requested; if it does not
answer, discovery stops with UnreachableAPIError.

Pipeline context:
    Runs once at the start of every ingestion. Its DiscoveredSchema drives
    which endpoints the orchestrator fetches and which reference properties
    GraphBuilder looks for.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import requests

from config import DEFAULT_ROUTES, EXCLUDED_CONTENT_TYPES

from .errors import FetchError, MalformedResponseError, UnreachableAPIError
from .response_normalizer import response_body
from .wordpress_client import WordPressClient


@dataclass
class TypeRegistration:
    type_key: str
    name: str
    route: Optional[str]
    rest_base: str

    @property
    def ref_property(self) -> str:
        """Property name on post records holding ids of this taxonomy's terms."""
        return self.rest_base


@dataclass
class DiscoveredSchema:
    content_types: List[TypeRegistration] = field(default_factory=list)
    taxonomies: List[TypeRegistration] = field(default_factory=list)


class SchemaDiscovery:
    """Discovers and registers WordPress content types and taxonomies.

    Attributes:
        client: Transport bound to the site's REST root.
        routes: Route template per type key (defaults merged with overrides).
        excluded_types: Content type keys that are never registered.
        debug: If True, prints each skipped type.
    """

    def __init__(
        self,
        client: WordPressClient,
        route_overrides: Optional[Dict[str, str]] = None,
        excluded_types: Iterable[str] = EXCLUDED_CONTENT_TYPES,
        debug: bool = False,
    ):
        self.client = client
        self.routes = dict(DEFAULT_ROUTES)
        self.routes.update(route_overrides or {})
        self.excluded_types = set(excluded_types)
        self.debug = debug

    def check_reachable(self):
        """Request the REST root.

        Raises:
            UnreachableAPIError: If the request fails for any reason.
        """
        try:
            self.client.get(self.client.rest_url)
        except requests.RequestException:
            raise UnreachableAPIError(self.client.base_url)

    def discover(self, store) -> DiscoveredSchema:
        """Check reachability, read both listings, and register every type on store.

        Args:
            store: Graph store exposing add_type(type_key, type_meta).

        Returns:
            The content types and taxonomies that were registered.

        Raises:
            UnreachableAPIError: If the REST root does not answer.
            FetchError: If a listing request fails.
        """
        self.check_reachable()

        types = self._get_listing("types")
        taxonomies = self._get_listing("taxonomies")

        schema = DiscoveredSchema()

        for type_key, options in types.items():
            if type_key in self.excluded_types:
                continue
            registration = self._register(store, type_key, options)
            if registration:
                schema.content_types.append(registration)

        for type_key, options in taxonomies.items():
            registration = self._register(store, type_key, options)
            if registration:
                schema.taxonomies.append(registration)

        return schema

    def _get_listing(self, name: str) -> Dict[str, Dict]:
        url = f"{self.client.rest_url}/{name}"
        try:
            response = self.client.get(url)
        except requests.RequestException as e:
            raise FetchError(url, e) from e

        body = response_body(response)
        if not isinstance(body, dict):
            raise MalformedResponseError(url, body)
        return body

    def _register(self, store, type_key: str, options: Dict) -> Optional[TypeRegistration]:
        rest_base = options.get("rest_base")
        if not rest_base:
            if self.debug:
                print(f"  Skipping {type_key}: not exposed over REST")
            return None

        registration = TypeRegistration(
            type_key=type_key,
            name=options.get("name", type_key),
            route=self.routes.get(type_key),
            rest_base=rest_base,
        )
        store.add_type(type_key, {"name": registration.name, "route": registration.route})
        return registration
