"""
Service Libraries Package.

Shared infrastructure used by the essay scoring services: structured
logging, error handling, configuration helpers and Quart integration.
"""

from .quart_app import CorretorApp

__all__ = ["CorretorApp"]
