import logging

import pytest

from nanci_source import resolve_stream_url
from nanci_source.api.client import StreamUrlClient
from nanci_source.core.resolver import StreamUrlResolver
from nanci_source.exceptions import ErrorKind, MissingFieldError, UpstreamStatusError

from .conftest import CDN_URL


def _resolver_errors(caplog) -> list[logging.LogRecord]:
    return [
        r
        for r in caplog.records
        if r.name.startswith("nanci_source") and r.levelno >= logging.ERROR
    ]


async def test_returns_url_from_data_field(upstream) -> None:
    resolver = StreamUrlResolver(upstream.config())

    url = await resolver.get_music_url("Song A", "Artist B", "123456", "320k")

    assert url == CDN_URL
    assert upstream.requests[0]["path"] == "/url/tx/123456/320k"


async def test_name_and_artist_do_not_affect_request(upstream) -> None:
    resolver = StreamUrlResolver(upstream.config())

    first = await resolver.get_music_url("Song A", "Artist B", "123456", "flac")
    second = await resolver.get_music_url("别的歌", "", "123456", "flac")

    assert first == second == CDN_URL
    assert upstream.requests[0] == upstream.requests[1]


async def test_server_error_returns_none_and_logs_once(upstream, caplog) -> None:
    upstream.reply("", status=500)
    resolver = StreamUrlResolver(upstream.config())

    with caplog.at_level(logging.ERROR):
        url = await resolver.get_music_url("Song A", "Artist B", "123456", "320k")

    assert url is None
    errors = _resolver_errors(caplog)
    assert len(errors) == 1
    assert "123456" in errors[0].getMessage()
    assert "kind=http_status" in errors[0].getMessage()


async def test_missing_data_field_returns_none(upstream) -> None:
    upstream.reply('{"msg": "no such song"}')

    assert await StreamUrlResolver(upstream.config()).get_music_url("", "", "1", "128k") is None


async def test_non_json_body_returns_none(upstream) -> None:
    upstream.reply("Bad Gateway", content_type="text/plain")

    assert await StreamUrlResolver(upstream.config()).get_music_url("", "", "1", "128k") is None


async def test_connection_refused_returns_none(refused_config, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        url = await StreamUrlResolver(refused_config).get_music_url("", "", "1", "320k")

    assert url is None
    assert len(_resolver_errors(caplog)) == 1


async def test_timeout_returns_none(upstream) -> None:
    upstream.delay = 1.0
    resolver = StreamUrlResolver(upstream.config(timeout=0.1))

    assert await resolver.get_music_url("", "", "1", "320k") is None


async def test_resolve_reports_error_kind(upstream) -> None:
    upstream.reply("", status=503)

    result = await StreamUrlResolver(upstream.config()).resolve("", "", "1", "320k")

    assert not result.ok
    assert result.url is None
    assert result.error_kind is ErrorKind.HTTP_STATUS
    assert isinstance(result.error, UpstreamStatusError)
    assert result.error.status == 503


async def test_resolve_success_has_no_error(upstream) -> None:
    result = await StreamUrlResolver(upstream.config()).resolve("", "", "1", "320k")

    assert result.ok
    assert result.url == CDN_URL
    assert result.error_kind is None


async def test_resolve_does_not_log(upstream, caplog) -> None:
    upstream.reply("{}")

    with caplog.at_level(logging.ERROR):
        result = await StreamUrlResolver(upstream.config()).resolve("", "", "1", "320k")

    assert result.error_kind is ErrorKind.MISSING_FIELD
    assert _resolver_errors(caplog) == []


async def test_resolve_or_raise_propagates_typed_error(upstream) -> None:
    upstream.reply('{"data": null}')

    with pytest.raises(MissingFieldError):
        await StreamUrlResolver(upstream.config()).resolve_or_raise("", "", "1", "320k")


async def test_module_entry_point_uses_given_config(upstream) -> None:
    url = await resolve_stream_url("Song A", "Artist B", "123456", "320k", config=upstream.config())

    assert url == CDN_URL


async def test_deeply_nested_body_returns_none(upstream, caplog) -> None:
    upstream.reply("[" * 200000)

    with caplog.at_level(logging.ERROR):
        url = await StreamUrlResolver(upstream.config()).get_music_url("", "", "1", "320k")

    assert url is None
    errors = _resolver_errors(caplog)
    assert len(errors) == 1
    assert "kind=parse" in errors[0].getMessage()


async def test_control_character_in_key_returns_none(upstream, caplog) -> None:
    resolver = StreamUrlResolver(upstream.config(access_key="abc\ndef"))

    with caplog.at_level(logging.ERROR):
        url = await resolver.get_music_url("", "", "1", "320k")

    assert url is None
    errors = _resolver_errors(caplog)
    assert len(errors) == 1
    assert "kind=invalid_request" in errors[0].getMessage()


async def test_unforeseen_error_is_wrapped(monkeypatch, caplog) -> None:
    async def explode(self, song_id, quality):
        raise RuntimeError("boom")

    monkeypatch.setattr(StreamUrlClient, "fetch_stream_url", explode)
    resolver = StreamUrlResolver()

    result = await resolver.resolve("", "", "1", "320k")
    with caplog.at_level(logging.ERROR):
        url = await resolver.get_music_url("", "", "1", "320k")

    assert result.error_kind is ErrorKind.UNEXPECTED
    assert isinstance(result.error.__cause__, RuntimeError)
    assert "RuntimeError: boom" in str(result.error)
    assert url is None
    assert len(_resolver_errors(caplog)) == 1
