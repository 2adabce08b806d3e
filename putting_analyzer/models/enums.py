"""Closed category sets recorded on rounds and putts"""

from enum import Enum
from typing import Any


class SlopeUpDown(Enum):
    """Green incline along the line of the putt (card Line U/D)"""
    FLAT = "flat"
    UPHILL = "uphill"
    DOWNHILL = "downhill"
    UP_DOWN = "up_down"      # uphill first, then downhill
    DOWN_UP = "down_up"      # downhill first, then uphill


class SlopeLeftRight(Enum):
    """Break across the line of the putt (card Line L/R)"""
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"
    LEFT_RIGHT = "left_right"
    RIGHT_LEFT = "right_left"


class MentalState(Enum):
    """Self-reported disposition before the stroke, P (positive) through N (negative)"""
    POSITIVE = "P"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    NEGATIVE = "N"

    @classmethod
    def parse(cls, value: Any) -> "MentalState":
        """Accept enum members, 'P'/'N', and the 1-5 scale as int, whole float or str."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid mental state: {value!r}")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, int):
            value = str(value)
        return cls(str(value).strip().upper())


class ScoreResult(Enum):
    """Hole result relative to par (card Result)"""
    EAGLE = "eagle"
    BIRDIE = "birdie"
    PAR = "par"
    BOGEY = "bogey"
    DOUBLE_BOGEY_PLUS = "double_bogey_plus"


class Period(Enum):
    """Trailing window used to filter rounds before aggregation"""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class GrassType(Enum):
    BENT = "bent"
    KORAI = "korai"
    BERMUDA = "bermuda"
    OTHER = "other"


class Weather(Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    WINDY = "windy"


class WindSpeed(Enum):
    CALM = "calm"
    LIGHT = "light"
    MODERATE = "moderate"
    STRONG = "strong"


class GreenCondition(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"


class RoundType(Enum):
    COMPETITION = "competition"
    CLUB_COMPETITION = "club_competition"
    PRIVATE = "private"
    PRACTICE = "practice"


class CompetitionFormat(Enum):
    STROKE = "stroke"
    MATCH = "match"
