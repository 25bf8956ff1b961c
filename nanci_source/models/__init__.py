"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the plugin: configuration, manifest and resolution results.
"""

from .config import QUALITY_MAP, SourceConfig
from .manifest import SourceManifest
from .result import ResolveResult

__all__ = ["QUALITY_MAP", "ResolveResult", "SourceConfig", "SourceManifest"]
