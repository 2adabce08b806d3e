"""Custom exception classes for record and configuration handling"""

from typing import Optional, Any


# ============================================================================
# VALIDATION ERRORS
# ============================================================================

class ValidationError(ValueError):
    """Base validation error for invalid data"""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value

        full_message = message
        if field and value is not None:
            full_message = f"{message} (field: {field}, value: {value!r})"
        elif field:
            full_message = f"{message} (field: {field})"

        super().__init__(full_message)


class RecordError(ValidationError):
    """Malformed round/hole/putt record at the storage or OCR boundary"""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, record: str = "record"):
        self.record = record
        super().__init__(f"Invalid {record}: {message}", field=field, value=value)


class ConfigError(ValidationError):
    """Error in configuration"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        super().__init__(message, field="config", value=config_key)
