import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from putting_analyzer.api_clients import (
    AuthenticationError,
    BaseAPIClient,
    ClientError,
    CostTracker,
    RateLimitError,
    ServerError,
)
from putting_analyzer.api_clients.base_client import APIUsage


def _client(**kwargs) -> BaseAPIClient:
    return BaseAPIClient(platform_name="openai", api_key="sk-test", base_url="https://api.example.com/v1/", **kwargs)


def _response(status, body="", headers=None):
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.text = AsyncMock(return_value=body)
    return response


@pytest.mark.asyncio
async def test_retries_server_errors_with_backoff():
    client = _client(max_retries=2)
    call = AsyncMock(side_effect=[ServerError("openai", 502), asyncio.TimeoutError(), {"ok": True}])

    with patch("putting_analyzer.api_clients.base_client.asyncio.sleep", AsyncMock()) as sleep:
        result = await client._call_with_retry(call, operation_name="Scorecard OCR")

    assert result == {"ok": True}
    assert call.await_count == 3
    assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_rate_limit_waits_retry_after():
    client = _client(max_retries=1)
    call = AsyncMock(side_effect=[RateLimitError("openai", retry_after=7), "done"])

    with patch("putting_analyzer.api_clients.base_client.asyncio.sleep", AsyncMock()) as sleep:
        assert await client._call_with_retry(call) == "done"

    sleep.assert_awaited_once_with(7.0)


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    client = _client(max_retries=1)
    call = AsyncMock(side_effect=ServerError("openai", 500, "boom"))

    with patch("putting_analyzer.api_clients.base_client.asyncio.sleep", AsyncMock()):
        with pytest.raises(ServerError):
            await client._call_with_retry(call)
    assert call.await_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [AuthenticationError("openai"), ClientError("openai", 400, "bad image")])
async def test_auth_and_client_errors_are_not_retried(error):
    client = _client(max_retries=3)
    call = AsyncMock(side_effect=error)

    with pytest.raises(type(error)):
        await client._call_with_retry(call)
    assert call.await_count == 1


@pytest.mark.asyncio
async def test_handle_response_status_maps_errors():
    client = _client()

    await client._handle_response_status(_response(200))

    with pytest.raises(RateLimitError) as exc_info:
        await client._handle_response_status(_response(429, headers={"Retry-After": "12"}))
    assert exc_info.value.retry_after == 12

    with pytest.raises(RateLimitError) as exc_info:
        await client._handle_response_status(_response(429, headers={"Retry-After": "soon"}))
    assert exc_info.value.retry_after == 60

    with pytest.raises(AuthenticationError):
        await client._handle_response_status(_response(401))

    with pytest.raises(ServerError):
        await client._handle_response_status(_response(503, "upstream down"))

    body = '{"error": {"message": "Invalid image URL", "type": "invalid_request_error"}}'
    with pytest.raises(ClientError, match="Invalid image URL") as exc_info:
        await client._handle_response_status(_response(400, body))
    assert exc_info.value.status_code == 400


def test_headers_and_base_url():
    client = _client()

    assert client.base_url == "https://api.example.com/v1"
    assert client._build_headers() == {
        "Content-Type": "application/json",
        "Authorization": "Bearer sk-test",
    }
    assert "Authorization" not in BaseAPIClient("openai")._build_headers()


def test_cost_tracker_totals():
    tracker = CostTracker(input_cost_per_mtok=5.0, output_cost_per_mtok=15.0)
    assert tracker.get_stats()["avg_cost_per_request"] == 0

    tracker.record_usage(APIUsage(operation="Scorecard OCR", input_tokens=200_000, output_tokens=20_000))
    tracker.record_usage(APIUsage(operation="Scorecard OCR", input_tokens=200_000, output_tokens=20_000))

    stats = tracker.get_stats()
    assert stats["total_requests"] == 2
    assert stats["total_input_tokens"] == 400_000
    assert stats["total_cost"] == pytest.approx(2 * (1.0 + 0.3))
    assert stats["avg_cost_per_request"] == pytest.approx(1.3)


@pytest.mark.asyncio
async def test_session_lifecycle():
    client = _client(timeout=5)

    async with client:
        assert client.session is not None
        assert not client.session.closed
    assert client.session is None
