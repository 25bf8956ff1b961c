"""
nanci-source: a music source plugin that resolves playable stream URLs.
"""

__version__ = "1.0.0"

from nanci_source.core.resolver import StreamUrlResolver, resolve_stream_url  # noqa: E402
from nanci_source.models.config import SourceConfig  # noqa: E402
from nanci_source.plugin import EXPORTS, MANIFEST  # noqa: E402

__all__ = [
    "EXPORTS",
    "MANIFEST",
    "SourceConfig",
    "StreamUrlResolver",
    "__version__",
    "resolve_stream_url",
]
