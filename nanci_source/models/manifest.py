"""
Static metadata the host application reads to list and update this source.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field


class SourceManifest(BaseModel):
    """Describes a music source plugin to its host."""

    id: str
    author: str
    name: str
    version: str
    src_url: str = Field(default="", alias="srcUrl")

    class Config:
        """Pydantic model configuration."""

        frozen = True
        populate_by_name = True

    def as_export(self, resolver: Callable[..., Any]) -> dict[str, Any]:
        """
        Builds the export table handed to the host.

        Args:
            resolver: The coroutine function exposed as 'resolveStreamUrl'.
        """
        exports = self.model_dump(by_alias=True)
        exports["resolveStreamUrl"] = resolver
        return exports
