from .response_parser import ModelResponseParser
from .errors import (
    ValidationError,
    RecordError,
    ConfigError,
)

__all__ = [
    'ModelResponseParser',
    'ValidationError',
    'RecordError',
    'ConfigError',
]
