"""
Resolves playable stream URLs for the host application.
"""

import logging

import aiohttp
from rich.markup import escape

from nanci_source.api.client import StreamUrlClient
from nanci_source.exceptions import ResolutionError, UnexpectedResolutionError
from nanci_source.models.config import SourceConfig
from nanci_source.models.result import ResolveResult

log = logging.getLogger(__name__)


class StreamUrlResolver:
    """
    Maps (song ID, quality) to a stream URL.

    The song name and artist are accepted because the host calls every source
    with the same four arguments; they never reach the request.
    """

    def __init__(
        self,
        config: SourceConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self._client = StreamUrlClient(config, session=session)

    async def resolve_or_raise(
        self, song_name: str, artist: str, song_id: str, quality: str
    ) -> str:
        """
        Resolves the stream URL, raising a typed ResolutionError on failure.
        """
        return await self._client.fetch_stream_url(song_id, quality)

    async def resolve(
        self, song_name: str, artist: str, song_id: str, quality: str
    ) -> ResolveResult:
        """
        Resolves the stream URL without raising for resolution failures.

        Errors outside the ResolutionError family are wrapped in
        UnexpectedResolutionError so callers only ever see one family.

        Returns:
            A ResolveResult holding either the URL or the classified error.
        """
        try:
            url = await self.resolve_or_raise(song_name, artist, song_id, quality)
        except ResolutionError as e:
            return ResolveResult(error=e)
        except Exception as e:
            error = UnexpectedResolutionError(
                f"{type(e).__name__}: {e}", song_id, quality
            )
            error.__cause__ = e
            return ResolveResult(error=error)
        return ResolveResult(url=url)

    async def get_music_url(
        self, song_name: str, artist: str, song_id: str, quality: str
    ) -> str | None:
        """
        Resolves the stream URL, collapsing every failure into None.

        The failure is logged once; the caller decides whether to try again.
        """
        result = await self.resolve(song_name, artist, song_id, quality)
        if not result.ok:
            log.error(
                f"Failed to resolve stream URL for '{escape(song_id)}' "
                f"({escape(quality)}) kind={result.error_kind.value}: "
                f"{escape(str(result.error))}"
            )
            return None
        return result.url


async def resolve_stream_url(
    song_name: str,
    artist: str,
    song_id: str,
    quality: str,
    config: SourceConfig | None = None,
) -> str | None:
    """
    Host-facing entry point: returns the stream URL or None on any failure.

    Args:
        song_name: Display name of the song (unused).
        artist: Display name of the artist (unused).
        song_id: QQ Music songmid of the track.
        quality: '128k', '320k' or 'flac'. Other values are forwarded as-is.
        config: Optional upstream settings; the built-in defaults otherwise.
    """
    resolver = StreamUrlResolver(config)
    return await resolver.get_music_url(song_name, artist, song_id, quality)
