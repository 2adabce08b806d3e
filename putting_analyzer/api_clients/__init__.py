from .base_client import (
    BaseAPIClient,
    APIError,
    RateLimitError,
    AuthenticationError,
    ServerError,
    ClientError,
    APIUsage,
    CostTracker,
)

__all__ = [
    'BaseAPIClient',
    'APIError',
    'RateLimitError',
    'AuthenticationError',
    'ServerError',
    'ClientError',
    'APIUsage',
    'CostTracker',
]
