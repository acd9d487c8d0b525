#!/usr/bin/env python3
"""
WordPress Content Graph Source - Entry Point.

This is the main script that users run to pull posts and taxonomy terms from
a WordPress site into a local content graph. It reads configuration from a
.env file, runs the ingestion pipeline, and saves structured JSON output.

The pipeline (managed by WordPressOrchestrator) performs 4 steps:
  1. Check the REST API is reachable and discover content types and taxonomies
  2. Fetch every content type collection and build post nodes
  3. Fetch every taxonomy collection and build term nodes
  4. Save the content graph as timestamped JSON

Usage:
    python run.py                   # Ingest and save JSON
    python run.py --debug           # Verbose output
    python run.py --concurrency 4   # At most 4 page requests in flight
    python run.py --per-page 50     # Smaller pages
    python run.py --version         # Show version
    python run.py --env /path       # Use alternate .env file
"""

import sys
import argparse
from pathlib import Path

from wordpress_graph import WordPressOrchestrator

VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def main():
    """Parse CLI arguments and run the ingestion pipeline."""
    parser = argparse.ArgumentParser(
        description="WordPress Content Graph Source - Ingest posts and terms from the WordPress REST API"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--per-page", type=int, help="Records per page (overrides WORDPRESS_PER_PAGE)")
    parser.add_argument("--concurrency", type=int, help="Parallel page requests (overrides WORDPRESS_CONCURRENCY)")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args()

    if args.version:
        print(f"wordpress-graph-source {VERSION}")
        sys.exit(0)

    orchestrator = WordPressOrchestrator(env_file=args.env)

    # CLI flags win over .env values
    if args.debug:
        orchestrator.debug = True
    if args.per_page is not None:
        orchestrator.per_page = args.per_page
    if args.concurrency is not None:
        orchestrator.concurrency = args.concurrency

    print(f"\n{'='*60}")
    print(f"WORDPRESS CONTENT GRAPH SOURCE v{VERSION}")
    print("="*60)
    print(f"Site: {orchestrator.base_url}")
    print(f"Per page: {orchestrator.per_page}, concurrency: {orchestrator.concurrency}")

    if not orchestrator.validate_config():
        sys.exit(1)

    if orchestrator.output_manager.retention_days > 0:
        deleted = orchestrator.output_manager.cleanup_old_folders(orchestrator.debug)
        if deleted > 0:
            print(f"Cleaned up {deleted} old output folder(s)")

    results = orchestrator.run()
    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
