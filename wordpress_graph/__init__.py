"""
wordpress_graph - Ingests a WordPress REST API into a local content graph.

  orchestrator.py         Pipeline coordination (Steps 1-4)
  wordpress_client.py     HTTP communication with the WordPress REST API
  schema_discovery.py     Content type and taxonomy discovery (Step 1)
  paged_fetcher.py        Full-collection fetch with parallel pages (Steps 2-3)
  work_queue.py           Concurrency-capped task runner used by the fetcher
  response_normalizer.py  Page body -> list of records
  graph_builder.py        Records -> namespaced, cross-referenced nodes
  content_store.py        In-memory graph store
  output_manager.py       Timestamped output folders (Step 4)
  errors.py               Exception types
"""

from .errors import WordPressSourceError, UnreachableAPIError, FetchError, MalformedResponseError
from .wordpress_client import WordPressClient
from .response_normalizer import normalize
from .work_queue import BoundedWorkQueue
from .paged_fetcher import PagedFetcher
from .schema_discovery import SchemaDiscovery, DiscoveredSchema, TypeRegistration
from .graph_builder import GraphBuilder, GraphNode
from .content_store import ContentStore
from .output_manager import OutputManager
from .orchestrator import WordPressOrchestrator
