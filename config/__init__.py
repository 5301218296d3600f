# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .logger import configure_logging
from .settings import AppSettings, ExtraSourceSettings, PreviewSettings, SearchSettings

__all__ = ["AppSettings", "ExtraSourceSettings", "PreviewSettings", "SearchSettings", "configure_logging"]
