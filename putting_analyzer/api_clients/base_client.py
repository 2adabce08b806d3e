"""Async HTTP client shared by the model-backed readers: errors, retries, token costs"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60  # seconds, when a 429 carries no usable Retry-After


# ============================================================================
# CUSTOM EXCEPTION CLASSES
# ============================================================================

class APIError(Exception):
    """Base exception for model API failures"""

    def __init__(
        self,
        platform: str,
        operation: str,
        status_code: Optional[int] = None,
        message: str = "",
        details: Optional[Dict] = None
    ):
        self.platform = platform
        self.operation = operation
        self.status_code = status_code
        self.details = details or {}

        text = f"[{platform}] {operation}"
        if status_code:
            text += f" (HTTP {status_code})"
        if message:
            text += f": {message}"
        super().__init__(text)


class RateLimitError(APIError):
    """HTTP 429; retried after ``retry_after`` seconds"""

    def __init__(self, platform: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after if retry_after is not None else DEFAULT_RETRY_AFTER
        super().__init__(platform, "Rate limit exceeded", 429, details={'retry_after': self.retry_after})


class AuthenticationError(APIError):
    """HTTP 401; never retried"""

    def __init__(self, platform: str, message: str = "Invalid API key"):
        super().__init__(platform, "Authentication failed", 401, message)


class ServerError(APIError):
    """HTTP 5xx; retried with backoff"""

    def __init__(self, platform: str, status_code: int, response_text: str = ""):
        super().__init__(platform, "Server error", status_code, response_text[:100])


class ClientError(APIError):
    """Other HTTP 4xx (bad image URL, oversized request, ...); never retried"""

    def __init__(self, platform: str, status_code: int, message: str = ""):
        super().__init__(platform, "Client error", status_code, message)


# ============================================================================
# COST TRACKING
# ============================================================================

@dataclass
class APIUsage:
    """Tokens consumed by one model call"""

    operation: str
    input_tokens: int = 0
    output_tokens: int = 0
    platform: str = "unknown"
    timestamp: datetime = field(default_factory=datetime.now)

    def cost(self, input_cost_per_mtok: float = 0, output_cost_per_mtok: float = 0) -> float:
        return (
            self.input_tokens * input_cost_per_mtok
            + self.output_tokens * output_cost_per_mtok
        ) / 1_000_000


class CostTracker:
    """Running token and dollar totals across scorecard reads"""

    def __init__(self, input_cost_per_mtok: float = 0, output_cost_per_mtok: float = 0):
        self.input_cost_per_mtok = input_cost_per_mtok
        self.output_cost_per_mtok = output_cost_per_mtok
        self.usage_history: List[APIUsage] = []

    def record_usage(self, usage: APIUsage) -> None:
        self.usage_history.append(usage)

    def total_cost(self) -> float:
        return sum(u.cost(self.input_cost_per_mtok, self.output_cost_per_mtok) for u in self.usage_history)

    def get_stats(self) -> Dict[str, Any]:
        requests = len(self.usage_history)
        total_cost = self.total_cost()
        return {
            'total_cost': total_cost,
            'total_requests': requests,
            'total_input_tokens': sum(u.input_tokens for u in self.usage_history),
            'total_output_tokens': sum(u.output_tokens for u in self.usage_history),
            'avg_cost_per_request': total_cost / requests if requests else 0.0,
        }


# ============================================================================
# BASE API CLIENT
# ============================================================================

class BaseAPIClient:
    """
    Bearer-authenticated JSON client for a model API

    Use as ``async with client:`` to open the aiohttp session. Calls made
    through ``_call_with_retry`` back off exponentially on timeouts, dropped
    connections and 5xx responses, wait out 429s, and fail fast on 401/4xx.
    """

    def __init__(
        self,
        platform_name: str,
        api_key: Optional[str] = None,
        base_url: str = "",
        timeout: int = 60,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        input_cost_per_mtok: float = 0,
        output_cost_per_mtok: float = 0,
    ):
        """
        Args:
            platform_name: Name used in logs and errors (e.g., 'openai')
            api_key: Bearer token sent with every request
            base_url: API root; a trailing slash is dropped
            timeout: Total request timeout in seconds
            max_retries: Retries after the first attempt
            backoff_base: Delay before retry n is backoff_base ** n seconds (1s, 2s, 4s...)
            input_cost_per_mtok: Dollars per million prompt tokens
            output_cost_per_mtok: Dollars per million completion tokens
        """
        self.platform_name = platform_name
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.session: Optional[aiohttp.ClientSession] = None
        self.cost_tracker = CostTracker(input_cost_per_mtok, output_cost_per_mtok)

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_seconds))
        logger.debug(f"Opened {self.platform_name} session")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None
            logger.debug(f"Closed {self.platform_name} session")

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    # ========================================================================
    # RETRY LOGIC WITH EXPONENTIAL BACKOFF
    # ========================================================================

    def _retry_delay(self, error: Exception, attempt: int) -> Optional[float]:
        """Seconds to wait before retrying after ``error``, or None if it must not be retried."""
        if isinstance(error, RateLimitError):
            return float(error.retry_after)
        if isinstance(error, (AuthenticationError, ClientError)):
            return None
        if isinstance(error, (ServerError, asyncio.TimeoutError, aiohttp.ClientError)):
            return self.backoff_base ** attempt
        return None

    async def _call_with_retry(
        self,
        coro_fn: Callable[[], Awaitable[Any]],
        operation_name: str = "API call",
        max_retries: Optional[int] = None,
    ) -> Any:
        """
        Run ``coro_fn`` until it succeeds or retries run out

        Args:
            coro_fn: Zero-argument async callable (called again on each attempt)
            operation_name: Label for log lines
            max_retries: Override the client's max_retries for this call

        Raises:
            The last error once retries are exhausted; non-retryable errors
            (401, other 4xx, anything unexpected) immediately
        """
        retries = self.max_retries if max_retries is None else max_retries
        attempts = retries + 1

        for attempt in range(attempts):
            try:
                logger.debug(f"[{self.platform_name}] {operation_name} (attempt {attempt + 1}/{attempts})")
                return await coro_fn()
            except (APIError, asyncio.TimeoutError, aiohttp.ClientError) as e:
                delay = self._retry_delay(e, attempt)
                if delay is None:
                    logger.error(f"[{self.platform_name}] {operation_name} failed: {e}")
                    raise
                if attempt == attempts - 1:
                    logger.error(f"[{self.platform_name}] {operation_name} failed after {attempts} attempts: {e}")
                    raise
                logger.warning(
                    f"[{self.platform_name}] {operation_name} failed ({str(e) or type(e).__name__}). "
                    f"Retrying in {delay:.1f}s..."
                )
                await asyncio.sleep(delay)

    # ========================================================================
    # RESPONSE HANDLING
    # ========================================================================

    @staticmethod
    def _error_message(body: str) -> str:
        """Pull ``error.message`` out of an OpenAI-style error body, else the raw text."""
        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            return body
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            return str(payload["error"].get("message") or body)
        return body

    async def _handle_response_status(self, response: aiohttp.ClientResponse) -> None:
        """
        Raise the matching APIError for a non-2xx response

        Raises:
            RateLimitError: 429
            AuthenticationError: 401
            ServerError: 5xx
            ClientError: any other 4xx
        """
        status = response.status
        if status < 400:
            return

        if status == 429:
            try:
                retry_after = int(response.headers.get('Retry-After', DEFAULT_RETRY_AFTER))
            except ValueError:
                retry_after = DEFAULT_RETRY_AFTER
            raise RateLimitError(self.platform_name, retry_after=retry_after)

        body = await response.text()
        if status == 401:
            raise AuthenticationError(self.platform_name, self._error_message(body)[:200] or "Invalid API key")
        if status >= 500:
            raise ServerError(self.platform_name, status, body)
        raise ClientError(self.platform_name, status, self._error_message(body)[:200])

    # ========================================================================
    # COST TRACKING
    # ========================================================================

    def record_usage(self, operation: str, input_tokens: int = 0, output_tokens: int = 0) -> None:
        self.cost_tracker.record_usage(
            APIUsage(
                operation=operation,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                platform=self.platform_name,
            )
        )

    def get_cost_stats(self) -> Dict[str, Any]:
        return self.cost_tracker.get_stats()
