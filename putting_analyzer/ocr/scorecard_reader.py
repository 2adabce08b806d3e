"""Vision-model reader that turns scorecard photos into card readings."""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import aiohttp

from putting_analyzer.api_clients.base_client import APIError, BaseAPIClient
from putting_analyzer.ocr.card_converter import OcrHoleReading
from putting_analyzer.ocr.prompts import OCR_SYSTEM_PROMPT, OCR_USER_INSTRUCTION
from putting_analyzer.utils import ModelResponseParser

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
}


def image_to_data_url(path: Union[str, Path]) -> str:
    """
    Encode a local image as a data: URL the chat API accepts in place of a link

    Raises:
        ValueError: If the file extension is not a supported image type
        OSError: If the file cannot be read
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in MIME_TYPES:
        raise ValueError(
            f"Unsupported file type: {suffix or '(none)'}. "
            f"Supported: {', '.join(sorted(MIME_TYPES.keys()))}"
        )
    with open(file_path, "rb") as f:
        data = f.read()
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{MIME_TYPES[suffix]};base64,{encoded}"


@dataclass
class ScorecardReading:
    """Outcome of reading one image; failures keep the raw text or error for review"""

    image_url: str
    success: bool
    data: Optional[Dict[str, Any]] = None
    raw_content: Optional[str] = None
    error: Optional[str] = None

    def hole_reading(self) -> Optional[OcrHoleReading]:
        if not self.success or self.data is None:
            return None
        return OcrHoleReading.from_dict(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imageUrl": self.image_url,
            "success": self.success,
            "data": self.data,
            "rawContent": self.raw_content,
            "error": self.error,
        }


class ScorecardReader:
    """Sends scorecard images to an OpenAI-compatible chat endpoint and parses the JSON reply."""

    def __init__(self, config):
        self.client = BaseAPIClient(
            platform_name="openai",
            api_key=config.openai_api_key,
            base_url=config.openai.base_url,
            timeout=config.openai.timeout_seconds,
            input_cost_per_mtok=config.openai.input_cost_per_mtok,
            output_cost_per_mtok=config.openai.output_cost_per_mtok,
        )
        self.config = config

    def _build_messages(self, image_url: str) -> List[Dict[str, Any]]:
        return [
            {"role": "system", "content": OCR_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": OCR_USER_INSTRUCTION},
                    {
                        "type": "image_url",
                        "image_url": {"url": image_url, "detail": self.config.openai.image_detail},
                    },
                ],
            },
        ]

    async def _call_openai_api(self, messages: List[Dict[str, Any]]) -> str:
        """Call the Chat Completions API and return the message content."""

        if not self.client.session:
            raise RuntimeError("OpenAI client session not initialized")

        payload = {
            "model": self.config.openai.model,
            "messages": messages,
            "temperature": self.config.openai.temperature,
            "max_tokens": self.config.openai.max_tokens,
            "response_format": {"type": "json_object"},
        }

        url = f"{self.client.base_url}/chat/completions"
        headers = self.client._build_headers()

        async def make_request():
            async with self.client.session.post(
                url,
                json=payload,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.client.timeout_seconds),
            ) as response:
                await self.client._handle_response_status(response)
                return await response.json()

        try:
            response = await self.client._call_with_retry(make_request, operation_name="Scorecard OCR")

            usage = response.get("usage") or {}
            prompt_tokens = usage.get("prompt_tokens", 0)
            completion_tokens = usage.get("completion_tokens", 0)
            if prompt_tokens or completion_tokens:
                self.client.record_usage(
                    operation="Scorecard OCR",
                    input_tokens=prompt_tokens,
                    output_tokens=completion_tokens,
                )

            choices = response.get("choices") or []
            if not choices:
                raise APIError(platform="openai", operation="Parse response", message="Empty choices array")

            content = (choices[0].get("message") or {}).get("content") or ""
            if not content:
                raise APIError(platform="openai", operation="Parse response", message="Empty message content")

            return content

        except APIError:
            raise
        except Exception as e:
            raise APIError(platform="openai", operation="API call", message=str(e))

    async def _read(self, image_url: str) -> ScorecardReading:
        content = await self._call_openai_api(self._build_messages(image_url))
        data = ModelResponseParser.extract_json_from_text(content)
        if data is None:
            logger.warning(f"Scorecard reply was not a JSON object ({len(content)} chars)")
            return ScorecardReading(image_url=image_url, success=False, raw_content=content)
        return ScorecardReading(image_url=image_url, success=True, data=data)

    async def read_scorecard(self, image_url: str) -> ScorecardReading:
        """
        Read one scorecard image (http(s) or data: URL)

        Opens the HTTP session for the call when the client isn't already
        in use as a context manager.

        Raises:
            APIError: If the request fails or the reply has no content
        """
        logger.info(f"Reading scorecard: {image_url[:80]}")
        if self.client.session is None:
            async with self.client:
                return await self._read(image_url)
        return await self._read(image_url)

    async def read_batch(self, image_urls: Sequence[str]) -> List[ScorecardReading]:
        """
        Read several images one after another over a single session

        A failure on one image is recorded in its entry and does not stop the
        rest; results keep the input order.
        """
        results: List[ScorecardReading] = []
        async with self.client:
            for index, image_url in enumerate(image_urls, start=1):
                try:
                    results.append(await self._read(image_url))
                except APIError as e:
                    logger.error(f"Scorecard {index}/{len(image_urls)} failed: {e}")
                    results.append(ScorecardReading(image_url=image_url, success=False, error=str(e)))

        succeeded = sum(1 for r in results if r.success)
        logger.info(f"Read {succeeded}/{len(results)} scorecards")
        return results

    def get_api_stats(self) -> dict:
        return self.client.get_cost_stats()
