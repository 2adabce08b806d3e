from .enums import (
    CompetitionFormat,
    GrassType,
    GreenCondition,
    MentalState,
    Period,
    RoundType,
    ScoreResult,
    SlopeLeftRight,
    SlopeUpDown,
    Weather,
    WindSpeed,
)
from .round import DEFAULT_STRIDE_LENGTH, Putt, Hole, Round, parse_record_date
from .stats import (
    AnalyticsSummary,
    BasicStats,
    CategoryRate,
    DistanceStats,
    GreenSpeedStats,
    MentalStats,
    PuttingStats,
    SlopeStats,
)
from .loader import load_rounds

__all__ = [
    'CompetitionFormat',
    'GrassType',
    'GreenCondition',
    'MentalState',
    'Period',
    'RoundType',
    'ScoreResult',
    'SlopeLeftRight',
    'SlopeUpDown',
    'Weather',
    'WindSpeed',
    'DEFAULT_STRIDE_LENGTH',
    'Putt',
    'Hole',
    'Round',
    'parse_record_date',
    'AnalyticsSummary',
    'BasicStats',
    'CategoryRate',
    'DistanceStats',
    'GreenSpeedStats',
    'MentalStats',
    'PuttingStats',
    'SlopeStats',
    'load_rounds',
]
