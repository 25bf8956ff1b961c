"""
Module export surface consumed by the music-player host.
"""

from nanci_source.core.resolver import resolve_stream_url
from nanci_source.models.manifest import SourceManifest

MANIFEST = SourceManifest(
    id="nanci",
    author="南辞",
    name="南辞测试音源",
    version="v1",
    srcUrl="",
)

EXPORTS = MANIFEST.as_export(resolve_stream_url)
