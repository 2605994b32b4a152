"""Cache target catalog.

This module provides the compiled-in table of known application cache
locations and the data types that describe catalog and discovered entries.
"""

from crunchycleaner.catalog.models import CatalogEntry, DiscoveredEntry
from crunchycleaner.catalog.targets import OSFamily, build_catalog, detect_os_family

__all__ = [
    "CatalogEntry",
    "DiscoveredEntry",
    "OSFamily",
    "build_catalog",
    "detect_os_family",
]
