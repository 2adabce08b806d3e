"""Response parsing utilities for model output"""

import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class ModelResponseParser:
    """Parser for chat-completion message content that should hold JSON"""

    @staticmethod
    def extract_json_from_text(text: str) -> Optional[Dict[str, Any]]:
        """
        Extract and parse a JSON object from a model response

        Models sometimes wrap JSON in markdown code blocks like:
        ```json
        {"key": "value"}
        ```

        This method handles both bare JSON and markdown-wrapped JSON.

        Args:
            text: Raw message content

        Returns:
            Parsed JSON object, or None if no object could be parsed
        """
        if not text:
            logger.warning("Empty model response text")
            return None

        candidates = []
        if '```json' in text:
            try:
                candidates.append(text.split('```json')[1].split('```')[0])
            except IndexError:
                pass
        if '```' in text:
            try:
                candidates.append(text.split('```')[1].split('```')[0])
            except IndexError:
                pass
        candidates.append(text)

        for candidate in candidates:
            try:
                parsed = json.loads(candidate.strip())
            except json.JSONDecodeError as e:
                logger.debug(f"Candidate is not JSON: {e}")
                continue
            if isinstance(parsed, dict):
                return parsed
            logger.debug(f"Ignoring non-object JSON of type {type(parsed).__name__}")

        logger.warning(f"Failed to parse model response as a JSON object. Text: {text[:200]}")
        return None
