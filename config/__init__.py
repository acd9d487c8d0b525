"""
Config module - Default settings and route templates for the source.
"""

from .settings import SOURCE_NAME, DEFAULT_SETTINGS, DEFAULT_ROUTES, EXCLUDED_CONTENT_TYPES

__all__ = [
    'SOURCE_NAME',
    'DEFAULT_SETTINGS',
    'DEFAULT_ROUTES',
    'EXCLUDED_CONTENT_TYPES',
]
