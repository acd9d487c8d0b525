"""
Content Store - In-memory graph store for WordPress nodes.

The store holds one collection per registered type (content types and
taxonomies side by side) and exposes the three calls the pipeline needs:

  add_type(type_key, type_meta)   Register a collection ({name, route}).
  add_node(type_key, node)        Insert a node; a node with the same id
                                  replaces the previous one.
  make_uid(raw_id)                Turn a namespaced raw id ("post-12") into
                                  a stable opaque id.

Collection names are the TYPE_NAME prefix plus the PascalCase type key, e.g.
"WordPress" + "post_tag" -> "WordPressPostTag".

Because nodes are keyed by id and ids are a pure function of the raw id,
ingesting the same remote data twice leaves the store in the same state.

Pipeline context:
    Types are registered by SchemaDiscovery, nodes are added by GraphBuilder,
    and the orchestrator serializes get_payload() to content_graph.json.
"""

import hashlib
import re
from collections import OrderedDict
from typing import Any, Dict, List


def pascal_case(value: str) -> str:
    """Convert a type key such as "post_tag" to "PostTag"."""
    return "".join(part[:1].upper() + part[1:] for part in re.split(r"[^0-9a-zA-Z]+", value) if part)


class ContentStore:
    """Graph store holding typed collections of nodes keyed by stable id.

    Attributes:
        type_name: Prefix for collection names and the uid namespace.
        debug: If True, prints each registered type.
    """

    def __init__(self, type_name: str = "WordPress", debug: bool = False):
        self.type_name = type_name
        self.debug = debug
        self._types: Dict[str, Dict[str, Any]] = OrderedDict()
        self._nodes: Dict[str, Dict[str, Any]] = OrderedDict()

    def make_uid(self, raw_id: str) -> str:
        """Deterministic id for a namespaced raw id, scoped to type_name."""
        return hashlib.md5(f"{self.type_name}:{raw_id}".encode("utf-8")).hexdigest()

    def add_type(self, type_key: str, type_meta: Dict[str, Any]) -> Dict[str, Any]:
        """Register a collection for type_key.

        Args:
            type_key: WordPress type or taxonomy key (e.g., "post", "category").
            type_meta: {"name": display name, "route": route template or None}.

        Returns:
            The stored type registration.
        """
        registration = {
            "type_key": type_key,
            "collection": f"{self.type_name}{pascal_case(type_key)}",
            "name": type_meta.get("name", type_key),
            "route": type_meta.get("route"),
        }
        self._types[type_key] = registration
        self._nodes.setdefault(type_key, OrderedDict())

        if self.debug:
            print(f"  Registered type {type_key} -> {registration['collection']} "
                  f"(route: {registration['route']})")

        return registration

    def add_node(self, type_key: str, node):
        """Insert node into the collection for type_key, replacing any node with the same id.

        Raises:
            KeyError: If type_key was never registered.
        """
        if type_key not in self._types:
            raise KeyError(f"Unknown type: {type_key}")
        self._nodes[type_key][node.id] = node

    def has_type(self, type_key: str) -> bool:
        return type_key in self._types

    def get_type(self, type_key: str) -> Dict[str, Any]:
        return self._types[type_key]

    def get_node(self, type_key: str, node_id: str):
        return self._nodes[type_key].get(node_id)

    def nodes(self, type_key: str) -> List:
        return list(self._nodes.get(type_key, {}).values())

    @property
    def type_keys(self) -> List[str]:
        return list(self._types)

    def counts(self) -> Dict[str, int]:
        """Number of nodes per type key."""
        return {type_key: len(nodes) for type_key, nodes in self._nodes.items()}

    def get_payload(self) -> Dict[str, Any]:
        """Serializable snapshot of every type and node."""
        return {
            "type_name": self.type_name,
            "types": [
                dict(registration, nodes=[node.to_dict() for node in self._nodes[type_key].values()])
                for type_key, registration in self._types.items()
            ],
        }
