"""
Upstream API Layer.

This package handles all communication with the remote stream URL service.
"""

from .client import StreamUrlClient

__all__ = ["StreamUrlClient"]
