"""
Tests for the HTTP and Redis adapters. Network calls go through
httpx.MockTransport; Redis is a MagicMock client.
"""
import json
from unittest.mock import MagicMock, patch

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.shared.adapters.email_adapter import NOT_CONFIGURED, EmailAdapter
from src.shared.adapters.link_preview_adapter import (
    LinkPreviewAdapter,
    extract_metadata,
    normalize_url,
)
from src.shared.adapters.redis_adapter import RedisAdapter
from src.shared.core.exceptions import ExternalServiceError, ValidationError


RealAsyncClient = httpx.AsyncClient


def mock_http(handler):
    """Patch httpx.AsyncClient so every client created uses handler."""
    transport = httpx.MockTransport(handler)
    return patch(
        "httpx.AsyncClient",
        side_effect=lambda **kwargs: RealAsyncClient(transport=transport, **kwargs),
    )


class TestEmailAdapter:
    @pytest.mark.asyncio
    async def test_not_configured(self):
        result = await EmailAdapter(api_key="").send("a@inshortbd.com", "Hi", "<p>Hi</p>")
        assert result.success is False
        assert result.error == NOT_CONFIGURED

    @pytest.mark.asyncio
    async def test_sends_payload(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg_1"})

        adapter = EmailAdapter(
            api_key="re_test",
            api_url="https://api.resend.test/emails",
            default_from="Inshort <news@inshortbd.com>",
        )
        with mock_http(handler):
            result = await adapter.send("a@inshortbd.com", "Hi", "<p>Hi</p>", reply_to="desk@inshortbd.com")

        assert result.success is True
        assert result.message_id == "msg_1"
        assert seen["auth"] == "Bearer re_test"
        assert seen["body"] == {
            "from": "Inshort <news@inshortbd.com>",
            "to": ["a@inshortbd.com"],
            "subject": "Hi",
            "html": "<p>Hi</p>",
            "reply_to": "desk@inshortbd.com",
        }

    @pytest.mark.asyncio
    async def test_api_error_message(self):
        adapter = EmailAdapter(api_key="re_test", api_url="https://api.resend.test/emails")
        with mock_http(lambda request: httpx.Response(422, json={"message": "Invalid `to` field"})):
            result = await adapter.send("bad", "Hi", "<p>Hi</p>")

        assert result.success is False
        assert result.error == "Invalid `to` field"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        adapter = EmailAdapter(api_key="re_test", api_url="https://api.resend.test/emails")
        with mock_http(handler):
            result = await adapter.send("a@inshortbd.com", "Hi", "<p>Hi</p>")

        assert result.success is False
        assert "connection refused" in result.error


PAGE = """
<html><head>
  <title> Budget 2025 explained </title>
  <meta name="description" content="What changes for you">
  <meta property="og:image" content="https://cdn.example.org/budget.jpg">
</head><body></body></html>
"""


class TestLinkPreview:
    def test_normalize_url(self):
        assert normalize_url(" example.org/a ") == "https://example.org/a"
        assert normalize_url("http://example.org") == "http://example.org"

    def test_falls_back_to_title_and_host(self):
        meta = extract_metadata(PAGE, "https://news.example.org/budget")
        assert meta.title == "Budget 2025 explained"
        assert meta.description == "What changes for you"
        assert meta.image == "https://cdn.example.org/budget.jpg"
        assert meta.site_name == "news.example.org"

    def test_open_graph_wins(self):
        html = '<meta property="og:title" content="OG title"><title>Plain</title>'
        assert extract_metadata(html, "https://example.org").title == "OG title"

    @pytest.mark.asyncio
    async def test_fetch_shape(self):
        with mock_http(lambda request: httpx.Response(200, text=PAGE)):
            preview = await LinkPreviewAdapter().fetch("news.example.org/budget")

        assert preview["success"] == 1
        assert preview["link"] == "https://news.example.org/budget"
        assert preview["meta"]["image"] == {"url": "https://cdn.example.org/budget.jpg"}
        assert preview["meta"]["siteName"] == "news.example.org"

    @pytest.mark.asyncio
    async def test_fetch_failure(self):
        with mock_http(lambda request: httpx.Response(404)):
            with pytest.raises(ExternalServiceError):
                await LinkPreviewAdapter().fetch("https://example.org/missing")

    @pytest.mark.asyncio
    async def test_empty_url(self):
        with pytest.raises(ValidationError):
            await LinkPreviewAdapter().fetch("")


class TestRedisAdapter:
    @pytest.fixture
    def adapter(self):
        adapter = RedisAdapter(url="redis://localhost:6379/0")
        adapter._client = MagicMock()
        return adapter

    def test_first_hit_starts_window(self, adapter):
        adapter.client.incrby.return_value = 1

        assert adapter.check_rate_limit("rate:subscribe:1.2.3.4", 5, 3600) == (True, 1)
        adapter.client.expire.assert_called_once_with("rate:subscribe:1.2.3.4", 3600)

    def test_over_limit(self, adapter):
        adapter.client.incrby.return_value = 6

        assert adapter.check_rate_limit("k", 5, 3600) == (False, 6)
        adapter.client.expire.assert_not_called()

    def test_allows_when_redis_is_down(self, adapter):
        adapter.client.incrby.side_effect = RedisConnectionError("down")
        assert adapter.check_rate_limit("k", 5, 3600) == (True, 0)

    def test_hgetall_skips_bad_json(self, adapter):
        adapter.client.hgetall.return_value = {"a": '{"x": 1}', "b": "not json"}
        assert adapter.hgetall_json("presence:1") == {"a": {"x": 1}}

    def test_ping_failure(self, adapter):
        adapter.client.ping.side_effect = RedisConnectionError("down")
        assert adapter.ping() is False
