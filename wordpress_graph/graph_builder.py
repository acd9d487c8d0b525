"""
Graph Builder - Turns raw WordPress records into content graph nodes.

Posts (of any content type) and taxonomy terms live in the same store, and
WordPress numbers them independently: post 7 and category 7 are unrelated.
Every id is therefore namespaced before it is handed to the store's
make_uid():

    post record {"id": 7, ...}   -> make_uid("post-7")
    term record {"id": 7, ...}   -> make_uid("term-7")

A post record looks like:

    {
      "id": 7,
      "type": "post",
      "date": "2019-04-01T10:00:00",
      "slug": "hello-world",
      "title":   {"rendered": "Hello world"},
      "content": {"rendered": "<p>...</p>"},
      "excerpt": {"rendered": "<p>...</p>"},
      "categories": [3, 7],
      "tags": [12]
    }

and becomes a node with refs {"category": [uid(term-3), uid(term-7)],
"post_tag": [uid(term-12)]}. A taxonomy only gets a refs key when its
reference property is present on the record. The referenced term nodes do
not have to exist yet; references are ids, not lookups.

A term record ({"id", "slug", "name", "count", "taxonomy"}) becomes a node
with title=name and fields={"count": count}.

Pipeline context:
    Called by the orchestrator after each endpoint has been fetched in full.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .schema_discovery import TypeRegistration

POST_PREFIX = "post-"
TERM_PREFIX = "term-"


@dataclass
class GraphNode:
    id: str
    title: str
    slug: str
    date: Optional[datetime] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    refs: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "slug": self.slug,
            "fields": self.fields,
            "refs": self.refs,
        }


def rendered(record: Dict[str, Any], key: str) -> str:
    """The "rendered" form of a WordPress text field, or "" when missing."""
    value = record.get(key)
    if not value:
        return ""
    if isinstance(value, dict):
        return value.get("rendered", "")
    return str(value)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a WordPress ISO 8601 date ("2019-04-01T10:00:00"), None when missing or invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None


class GraphBuilder:
    """Builds and emits post and term nodes.

    Attributes:
        store: Graph store exposing add_node() and make_uid().
        taxonomies: Discovered taxonomies, used to resolve post references.
        debug: If True, prints the number of nodes emitted per type.
    """

    def __init__(self, store, taxonomies: List[TypeRegistration], debug: bool = False):
        self.store = store
        self.taxonomies = taxonomies
        self.debug = debug

    def make_post_id(self, remote_id) -> str:
        return self.store.make_uid(f"{POST_PREFIX}{remote_id}")

    def make_term_id(self, remote_id) -> str:
        return self.store.make_uid(f"{TERM_PREFIX}{remote_id}")

    def build_post_node(self, record: Dict[str, Any]) -> GraphNode:
        """Project a raw post record into a node with resolved taxonomy refs."""
        refs = {}
        for taxonomy in self.taxonomies:
            if taxonomy.ref_property in record:
                term_ids = record[taxonomy.ref_property] or []
                refs[taxonomy.type_key] = [self.make_term_id(term_id) for term_id in term_ids]

        return GraphNode(
            id=self.make_post_id(record["id"]),
            title=rendered(record, "title"),
            date=parse_date(record.get("date")),
            slug=record.get("slug", ""),
            fields={
                "content": rendered(record, "content"),
                "excerpt": rendered(record, "excerpt"),
            },
            refs=refs,
        )

    def build_term_node(self, record: Dict[str, Any]) -> GraphNode:
        """Project a raw taxonomy term record into a node."""
        return GraphNode(
            id=self.make_term_id(record["id"]),
            title=record.get("name", ""),
            slug=record.get("slug", ""),
            fields={"count": record.get("count", 0)},
        )

    def add_posts(self, type_key: str, records: List[Dict[str, Any]]) -> int:
        """Emit one node per post record under type_key. Returns the node count."""
        for record in records:
            self.store.add_node(type_key, self.build_post_node(record))

        if self.debug:
            print(f"  Added {len(records)} {type_key} node(s)")

        return len(records)

    def add_terms(self, type_key: str, records: List[Dict[str, Any]]) -> int:
        """Emit one node per term record under type_key. Returns the node count."""
        for record in records:
            self.store.add_node(type_key, self.build_term_node(record))

        if self.debug:
            print(f"  Added {len(records)} {type_key} term node(s)")

        return len(records)
