"""
Async client for the upstream stream URL service.
"""

import asyncio
import json
import logging
from typing import Any

import aiohttp

from nanci_source.exceptions import (
    InvalidRequestError,
    MissingFieldError,
    NetworkError,
    ResponseParseError,
    UpstreamStatusError,
)
from nanci_source.models.config import SourceConfig

log = logging.getLogger(__name__)


class StreamUrlClient:
    """
    Issues the single GET request that maps a song ID and quality to a stream URL.

    Every call opens its own short-lived session unless one is injected, in
    which case the session is borrowed and left open for its owner.
    """

    URL_TEMPLATE = "{base}/url/tx/{song_id}/{quality}"

    def __init__(
        self,
        config: SourceConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initializes the client.

        Args:
            config: Upstream address and credentials. Defaults are used when omitted.
            session: An optional externally managed aiohttp session.
        """
        self.config = config or SourceConfig()
        self._session = session

    def build_url(self, song_id: str, quality: str) -> str:
        """Builds the request target. Both values are forwarded verbatim."""
        return self.URL_TEMPLATE.format(
            base=self.config.base_address, song_id=song_id, quality=quality
        )

    def build_headers(self) -> dict[str, str]:
        """Returns the fixed request headers, including the two auth headers."""
        return {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            "X-Request-User": self.config.account_name,
            "X-Request-Key": self.config.access_key,
        }

    def _build_timeout(self) -> aiohttp.ClientTimeout | None:
        if self.config.timeout is None:
            return None
        return aiohttp.ClientTimeout(total=self.config.timeout)

    async def fetch_stream_url(self, song_id: str, quality: str) -> str:
        """
        Fetches the stream URL for a song.

        Args:
            song_id: Platform song identifier (QQ Music songmid).
            quality: Quality tag such as '128k', '320k' or 'flac'.

        Returns:
            The value of the 'data' field of the JSON response.

        Raises:
            NetworkError: If the service cannot be reached or the request times out.
            InvalidRequestError: If the configured headers or address cannot be sent.
            UpstreamStatusError: If the service answers with a non-2xx status.
            ResponseParseError: If the body is not a JSON object.
            MissingFieldError: If the body carries no text 'data' field.
        """
        url = self.build_url(song_id, quality)
        log.debug(f"GET {url} (user: {self.config.account_name})")

        try:
            if self._session is not None:
                status, body = await self._get(self._session, url)
            else:
                async with aiohttp.ClientSession() as session:
                    status, body = await self._get(session, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"Request to {url} failed: {e!r}", song_id, quality
            ) from e
        except ValueError as e:
            raise InvalidRequestError(
                f"Request to {url} could not be sent: {e}", song_id, quality
            ) from e

        if not 200 <= status < 300:
            raise UpstreamStatusError(
                f"Upstream answered HTTP {status} for {url}",
                song_id,
                quality,
                status=status,
            )

        payload = self._parse_body(body, song_id, quality)
        return self._extract_data(payload, song_id, quality)

    async def _get(self, session: aiohttp.ClientSession, url: str) -> tuple[int, str]:
        kwargs: dict[str, Any] = {"headers": self.build_headers()}
        timeout = self._build_timeout()
        if timeout is not None:
            kwargs["timeout"] = timeout

        async with session.get(url, **kwargs) as r:
            return r.status, await r.text(errors="replace")

    @staticmethod
    def _parse_body(body: str, song_id: str, quality: str) -> dict[str, Any]:
        try:
            payload = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise ResponseParseError(
                f"Response body is not valid JSON: {e}", song_id, quality
            ) from e

        if not isinstance(payload, dict):
            raise ResponseParseError(
                f"Expected a JSON object, got {type(payload).__name__}",
                song_id,
                quality,
            )
        return payload

    @staticmethod
    def _extract_data(payload: dict[str, Any], song_id: str, quality: str) -> str:
        """
        Returns 'data' unchanged when it is text, empty strings included.

        Beyond that the value is not inspected (no URL or reachability check).
        Non-text values are rejected on purpose: the host contract promises a
        string, so a number or object counts as a missing stream URL.
        """
        data = payload.get("data")
        if data is None:
            raise MissingFieldError(
                "Response has no 'data' field or it is null", song_id, quality
            )
        if not isinstance(data, str):
            raise MissingFieldError(
                f"Expected 'data' to be text, got {type(data).__name__}",
                song_id,
                quality,
            )
        return data
