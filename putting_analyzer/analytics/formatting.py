"""Display helpers shared by the CLI and report tables."""

from datetime import datetime
from typing import Union

from putting_analyzer.models import parse_record_date


def format_date(value: Union[str, datetime]) -> str:
    """'2024-01-05T09:00:00Z' -> '2024/1/5'"""
    moment = parse_record_date(value)
    return f"{moment.year}/{moment.month}/{moment.day}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"
