# Path: core/library/__init__.py
# Purpose: Export the library manager that owns catalog snapshots.
# Layer: core/library.
# Details: Consumers (API, scripts) go through LibraryManager rather than holding catalogs globally.

from .manager import LibraryManager

__all__ = ["LibraryManager"]
