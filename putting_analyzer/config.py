"""Configuration management with validation and typed access"""

import json
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from putting_analyzer.models import DEFAULT_STRIDE_LENGTH, Period
from putting_analyzer.utils.errors import ConfigError

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION DATACLASSES
# ============================================================================

@dataclass
class APIConfig:
    """Credentials for model APIs"""

    openai_api_key: Optional[str] = None

    def validate(self) -> None:
        if self.openai_api_key is not None and not str(self.openai_api_key).strip():
            raise ValueError("openai_api_key cannot be blank")


@dataclass
class OpenAIConfig:
    """Configuration for the vision model that reads scorecards"""

    model: str = "gpt-4o"
    temperature: float = 0.0
    max_tokens: int = 2000
    base_url: str = "https://api.openai.com/v1"
    image_detail: str = "high"  # "high" | "low" | "auto"
    timeout_seconds: int = 60
    input_cost_per_mtok: float = 0.0
    output_cost_per_mtok: float = 0.0

    def validate(self) -> None:
        if not self.model:
            raise ValueError("model name cannot be empty")
        if not (0 <= self.temperature <= 2):
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {self.max_tokens}")
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        detail = (self.image_detail or "").strip().lower()
        if detail not in {"high", "low", "auto"}:
            raise ValueError(f"image_detail must be 'high', 'low' or 'auto', got {self.image_detail!r}")
        self.image_detail = detail
        if self.timeout_seconds < 1:
            raise ValueError(f"timeout_seconds must be >= 1, got {self.timeout_seconds}")
        if self.input_cost_per_mtok < 0 or self.output_cost_per_mtok < 0:
            raise ValueError("Pricing costs cannot be negative")


@dataclass
class AnalyticsConfig:
    """Defaults applied when recording putts and filtering rounds"""

    stride_length: float = DEFAULT_STRIDE_LENGTH
    default_period: str = "all"

    def validate(self) -> None:
        if self.stride_length <= 0:
            raise ValueError(f"stride_length must be > 0, got {self.stride_length}")
        period = str(self.default_period or "").strip().lower()
        valid = {p.value for p in Period}
        if period not in valid:
            raise ValueError(f"default_period must be one of {sorted(valid)}, got {self.default_period!r}")
        self.default_period = period


# ============================================================================
# MAIN CONFIG MANAGER
# ============================================================================

class ConfigManager:
    """
    Central configuration management with validation and typed access

    Values come from a JSON file; secrets prefer environment variables
    (a local .env is loaded first).
    """

    def __init__(self, config_file: str = "config.json"):
        """
        Load and validate configuration from JSON file

        Args:
            config_file: Path to config JSON file

        Raises:
            json.JSONDecodeError: If config file is invalid JSON
            ConfigError: If configuration validation fails
        """
        load_dotenv()

        self.config_path = Path(config_file)

        if not self.config_path.exists():
            logger.warning(f"Config file not found: {config_file}. Using defaults and environment variables.")
            raw_config = {}
        else:
            with open(self.config_path) as f:
                raw_config = json.load(f)

        if not isinstance(raw_config, dict):
            raise ConfigError("top-level config must be a JSON object", config_key=str(self.config_path))

        self._parse_config(raw_config)

    def _get_secret(self, env_var: str, json_value: Optional[str] = None) -> Optional[str]:
        """
        Get secret from environment variable, falling back to JSON value.
        Filters out placeholder values containing 'YOUR_'.
        """
        val = os.getenv(env_var)
        if not val:
            val = json_value

        if val and isinstance(val, str) and 'YOUR_' in val:
            return None
        return val or None

    def _parse_config(self, raw_config: Dict[str, Any]) -> None:
        """Parse raw JSON config into typed dataclasses"""

        api_raw = raw_config.get('api', {})
        self.api = APIConfig(
            openai_api_key=self._get_secret('OPENAI_API_KEY', api_raw.get('openai_api_key')),
        )
        try:
            self.api.validate()
        except ValueError as e:
            raise ConfigError(f"Invalid API config: {e}", config_key="api")

        openai_raw = raw_config.get('openai', {})
        self.openai = OpenAIConfig(
            model=openai_raw.get('model', 'gpt-4o'),
            temperature=openai_raw.get('temperature', 0.0),
            max_tokens=openai_raw.get('max_tokens', 2000),
            base_url=openai_raw.get('base_url', 'https://api.openai.com/v1'),
            image_detail=openai_raw.get('image_detail', 'high'),
            timeout_seconds=openai_raw.get('timeout_seconds', 60),
            input_cost_per_mtok=openai_raw.get('input_cost_per_mtok', 0.0),
            output_cost_per_mtok=openai_raw.get('output_cost_per_mtok', 0.0),
        )
        try:
            self.openai.validate()
        except ValueError as e:
            raise ConfigError(f"Invalid OpenAI config: {e}", config_key="openai")

        analytics_raw = raw_config.get('analytics', {})
        self.analytics = AnalyticsConfig(
            stride_length=analytics_raw.get('stride_length', DEFAULT_STRIDE_LENGTH),
            default_period=analytics_raw.get('default_period', 'all'),
        )
        try:
            self.analytics.validate()
        except ValueError as e:
            raise ConfigError(f"Invalid analytics config: {e}", config_key="analytics")

        logger.info(f"Configuration loaded and validated from {self.config_path}")

    # ========================================================================
    # CONVENIENCE PROPERTIES
    # ========================================================================

    @property
    def openai_api_key(self) -> str:
        if not self.api.openai_api_key:
            raise ConfigError("OpenAI API key not configured", config_key="OPENAI_API_KEY")
        return str(self.api.openai_api_key)

    @property
    def stride_length(self) -> float:
        return self.analytics.stride_length

    @property
    def default_period(self) -> Period:
        return Period(self.analytics.default_period)

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def validate_for_mode(self, mode: str) -> None:
        """
        Check that the keys a CLI command needs are present

        Args:
            mode: 'summary', 'bands' or 'scan'

        Raises:
            ConfigError: If required configuration for the mode is missing
        """
        logger.debug(f"Validating configuration for mode: {mode}")

        if mode == 'scan' and not self.api.openai_api_key:
            raise ConfigError("OPENAI_API_KEY is required for scan mode", config_key="OPENAI_API_KEY")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for debugging (API key redacted)"""
        key = self.api.openai_api_key
        return {
            'api': {
                'openai_api_key': (key[:6] + '...') if key else None,
            },
            'openai': {
                'model': self.openai.model,
                'temperature': self.openai.temperature,
                'max_tokens': self.openai.max_tokens,
                'base_url': self.openai.base_url,
                'image_detail': self.openai.image_detail,
                'timeout_seconds': self.openai.timeout_seconds,
                'input_cost_per_mtok': self.openai.input_cost_per_mtok,
                'output_cost_per_mtok': self.openai.output_cost_per_mtok,
            },
            'analytics': {
                'stride_length': self.analytics.stride_length,
                'default_period': self.analytics.default_period,
            },
        }
