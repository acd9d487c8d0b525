"""
WordPress Orchestrator - Pipeline coordination for WordPress content ingestion.

This module ties together all other modules (WordPressClient, SchemaDiscovery,
PagedFetcher, GraphBuilder, ContentStore) into a sequential 4-step workflow:

  Step 1: SCHEMA DISCOVERY
      Checks that {site}/wp-json/wp/v2 answers (UnreachableAPIError if not),
      then reads /types and /taxonomies and registers every type (except
      attachments) as a collection in the ContentStore.

  Step 2: CONTENT NODES
      For each content type, PagedFetcher reads the whole collection
      (page 1, then the remaining pages in parallel) and GraphBuilder emits
      one node per post with its taxonomy references resolved to term ids.

  Step 3: TAXONOMY TERM NODES
      Same as Step 2 for each taxonomy, emitting term nodes.

  Step 4: SAVE OUTPUT
      Serializes the ContentStore to content_graph.json in a timestamped
      output directory.

Endpoints are processed one after the other; only the pages of a single
endpoint are fetched concurrently. The first error aborts the run. Nodes
from endpoints finished before the error stay in the store, the failing
endpoint adds none, and content_graph.json is only written on success.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    Required: WORDPRESS_BASE_URL. See config/settings.py for defaults.

Typical usage:
    orchestrator = WordPressOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import os
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from config import DEFAULT_SETTINGS

from .content_store import ContentStore
from .graph_builder import GraphBuilder
from .output_manager import OutputManager
from .paged_fetcher import PagedFetcher
from .schema_discovery import SchemaDiscovery
from .wordpress_client import WordPressClient


def parse_routes(value: str) -> Dict[str, str]:
    """Parse "post=/blog/:slug, page=/:slug" into {"post": "/blog/:slug", "page": "/:slug"}.

    Raises:
        ValueError: If an entry has no "=" or an empty type key.
    """
    routes = {}
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        type_key, sep, template = entry.partition("=")
        if not sep or not type_key.strip():
            raise ValueError(f"Invalid route override: {entry!r} (expected type=/template)")
        routes[type_key.strip()] = template.strip()
    return routes


def _env_bool(name: str) -> bool:
    return os.getenv(name, str(DEFAULT_SETTINGS[name])).lower() == "true"


def _env_int(name: str) -> int:
    return int(os.getenv(name, str(DEFAULT_SETTINGS[name])))


class WordPressOrchestrator:
    """Orchestrates the WordPress content ingestion pipeline.

    Attributes:
        base_url: Site URL (e.g., "https://blog.example.com").
        per_page: Records requested per page.
        concurrency: Maximum page requests in flight per endpoint.
        route_overrides: Route template per type key, merged over the defaults.
        type_name: Collection name prefix in the ContentStore.
        rest_path: REST namespace path below the site URL.
        request_timeout: Transport timeout in seconds (None = no timeout).
        source_name: Label used in output folder naming.
        save_json: Whether to write the content graph to disk.
        debug: Whether to enable verbose output.
        output_manager: Handles timestamped output directories and retention cleanup.
    """

    def __init__(self, env_file: str = "./.env"):
        """Initialize the orchestrator by loading configuration from environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        self.base_url = os.getenv("WORDPRESS_BASE_URL", "").rstrip("/")
        self.per_page = _env_int("WORDPRESS_PER_PAGE")
        self.concurrency = _env_int("WORDPRESS_CONCURRENCY")
        self.route_overrides = parse_routes(
            os.getenv("WORDPRESS_ROUTES", DEFAULT_SETTINGS["WORDPRESS_ROUTES"])
        )
        self.type_name = os.getenv("TYPE_NAME", DEFAULT_SETTINGS["TYPE_NAME"])
        self.rest_path = os.getenv("REST_PATH", DEFAULT_SETTINGS["REST_PATH"])

        timeout = float(os.getenv("REQUEST_TIMEOUT", str(DEFAULT_SETTINGS["REQUEST_TIMEOUT"])))
        self.request_timeout = timeout if timeout > 0 else None

        self.source_name = os.getenv("SOURCE_NAME", DEFAULT_SETTINGS["SOURCE_NAME"])
        self.save_json = _env_bool("SAVE_JSON")
        self.debug = _env_bool("DEBUG")

        output_dir = os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"])
        retention_days = _env_int("OUTPUT_RETENTION_DAYS")
        self.output_manager = OutputManager(output_dir, self.source_name, retention_days)

    def validate_config(self) -> bool:
        """Validate that all required configuration values are present and sane.

        Returns:
            True if the configuration is usable, False otherwise.
            Prints specific error messages for each problem.
        """
        errors = []
        if not self.base_url:
            errors.append("WORDPRESS_BASE_URL is required")
        if self.per_page < 1:
            errors.append("WORDPRESS_PER_PAGE must be at least 1")
        if self.concurrency < 1:
            errors.append("WORDPRESS_CONCURRENCY must be at least 1")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def make_client(self) -> WordPressClient:
        return WordPressClient(
            self.base_url,
            rest_path=self.rest_path,
            timeout=self.request_timeout,
            debug=self.debug,
        )

    def ingest(self, client: WordPressClient, store: ContentStore) -> Dict[str, int]:
        """Run Steps 1-3 against client, filling store.

        Returns:
            Node count per type key.

        Raises:
            UnreachableAPIError, FetchError, MalformedResponseError: On the
                first failure; nothing is retried.
        """
        print(f"\n{'='*60}")
        print("STEP 1: SCHEMA DISCOVERY")
        print("="*60)
        discovery = SchemaDiscovery(client, self.route_overrides, debug=self.debug)
        schema = discovery.discover(store)
        print(f"  Content types: {', '.join(t.type_key for t in schema.content_types) or 'none'}")
        print(f"  Taxonomies: {', '.join(t.type_key for t in schema.taxonomies) or 'none'}")

        fetcher = PagedFetcher(client, self.debug)
        builder = GraphBuilder(store, schema.taxonomies, self.debug)

        print(f"\n{'='*60}")
        print("STEP 2: CONTENT NODES")
        print("="*60)
        for content_type in schema.content_types:
            records = fetcher.fetch_all(
                client.endpoint(content_type.rest_base), self.per_page, self.concurrency
            )
            count = builder.add_posts(content_type.type_key, records)
            print(f"  {content_type.type_key}: {count} node(s)")

        print(f"\n{'='*60}")
        print("STEP 3: TAXONOMY TERM NODES")
        print("="*60)
        for taxonomy in schema.taxonomies:
            records = fetcher.fetch_all(
                client.endpoint(taxonomy.rest_base), self.per_page, self.concurrency
            )
            count = builder.add_terms(taxonomy.type_key, records)
            print(f"  {taxonomy.type_key}: {count} node(s)")

        return store.counts()

    def run(self, client: Optional[WordPressClient] = None) -> Dict[str, Any]:
        """Execute the full 4-step ingestion pipeline.

        Args:
            client: Transport to use; a WordPressClient for base_url by default.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - source: "wordpress-rest"
                - config: Base URL, per_page and concurrency
                - success: True if all steps completed without error
                - summary: Node count per type key
                - json_path: Path to saved content graph (if save_json=True)
                - error: Error message (if success=False)
        """
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "source": "wordpress-rest",
            "config": {
                "base_url": self.base_url,
                "per_page": self.per_page,
                "concurrency": self.concurrency,
            },
            "success": False,
        }

        store = ContentStore(self.type_name, self.debug)
        client = client or self.make_client()

        try:
            results["summary"] = self.ingest(client, store)

            print(f"\n{'='*60}")
            print("STEP 4: SAVE OUTPUT")
            print("="*60)
            self.output_manager.create_run_dir()

            if self.save_json:
                json_path = self.output_manager.write_json("content_graph.json", store.get_payload())
                results["json_path"] = json_path
                print(f"  Saved content graph: {json_path}")

            results["success"] = True

        except Exception as e:
            results["error"] = str(e)
            results.setdefault("summary", store.counts())
            print(f"\n  ERROR: {e}")
            if self.debug:
                traceback.print_exc()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()

        if self.output_manager.current_dir:
            results_path = self.output_manager.write_json("extraction_results.json", results)
            print(f"\n  Results saved to: {results_path}")

        return results

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        print(f"\n{'='*60}")
        print("INGESTION COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        summary = results.get("summary", {})
        for type_key, count in summary.items():
            print(f"{type_key}: {count}")

        if results.get("error"):
            print(f"Error: {results['error']}")
