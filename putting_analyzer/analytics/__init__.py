"""Analytics modules (deterministic putting statistics)."""

from .putting_stats import (
    DISTANCE_RANGES,
    SPEED_RANGES,
    PuttContext,
    RangeBucket,
    analyze_by_distance,
    analyze_by_slope,
    calculate_analytics_summary,
    calculate_basic_stats,
    calculate_cup_in_rate,
    calculate_distance,
    calculate_distance_stats,
    calculate_green_speed_stats,
    calculate_mental_stats,
    calculate_one_putt_rate,
    calculate_slope_stats,
    calculate_stats,
    calculate_three_putt_rate,
    extract_all_putts,
    extract_first_putts,
    get_distance_range,
    percentage,
)
from .period import filter_rounds_by_period, period_cutoff
from .formatting import format_date, format_percentage

__all__ = [
    "DISTANCE_RANGES",
    "SPEED_RANGES",
    "PuttContext",
    "RangeBucket",
    "analyze_by_distance",
    "analyze_by_slope",
    "calculate_analytics_summary",
    "calculate_basic_stats",
    "calculate_cup_in_rate",
    "calculate_distance",
    "calculate_distance_stats",
    "calculate_green_speed_stats",
    "calculate_mental_stats",
    "calculate_one_putt_rate",
    "calculate_slope_stats",
    "calculate_stats",
    "calculate_three_putt_rate",
    "extract_all_putts",
    "extract_first_putts",
    "get_distance_range",
    "percentage",
    "filter_rounds_by_period",
    "period_cutoff",
    "format_date",
    "format_percentage",
]
