"""
Settings - Default configuration values for the WordPress content graph source.

This module provides the DEFAULT_SETTINGS dict that the orchestrator uses as
fallback values when environment variables are not set. The actual configuration
is loaded from .env at runtime; these defaults let the source run against a
standard WordPress install without further tuning.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --per-page, --concurrency)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SOURCE_NAME             Label used in output folder naming (e.g., "WordPress_REST")
  TYPE_NAME               Prefix for collection names in the content store
  WORDPRESS_PER_PAGE      Records requested per page (the REST API caps this at 100)
  WORDPRESS_CONCURRENCY   Maximum page requests in flight per endpoint
  WORDPRESS_ROUTES        Route template overrides, "type=/template,type=/template"
  REST_PATH               Path of the REST namespace below the site URL
  REQUEST_TIMEOUT         Transport timeout in seconds (0 = wait forever)
  OUTPUT_DIR              Where to write extraction output (default: ./output)
  OUTPUT_RETENTION_DAYS   How many days to keep old output folders (0 = keep forever)
  SAVE_JSON               Whether to write the content graph to disk (default: True)
  DEBUG                   Whether to print verbose output (default: False)
"""

SOURCE_NAME = "WordPress_REST"

DEFAULT_SETTINGS = {
    "SOURCE_NAME": SOURCE_NAME,
    "TYPE_NAME": "WordPress",
    "WORDPRESS_PER_PAGE": 100,
    "WORDPRESS_CONCURRENCY": 10,
    "WORDPRESS_ROUTES": "",
    "REST_PATH": "wp-json/wp/v2",
    "REQUEST_TIMEOUT": 0,
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "SAVE_JSON": True,
    "DEBUG": False,
}

# Routes WordPress itself uses for the built-in types. Overrides from
# WORDPRESS_ROUTES are merged on top of these per type key.
DEFAULT_ROUTES = {
    "post": "/:year/:month/:day/:slug",
    "post_tag": "/tag/:slug",
    "category": "/category/:slug",
}

# Binary uploads are not node content.
EXCLUDED_CONTENT_TYPES = ("attachment",)
