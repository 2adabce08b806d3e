"""Aggregate records produced by the analytics engine for presentation code"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .enums import MentalState, SlopeUpDown


@dataclass(frozen=True)
class BasicStats:
    total_rounds: int
    total_holes: int
    total_putts: int
    average_putts_per_round: float
    average_putts_per_hole: float


@dataclass(frozen=True)
class DistanceStats:
    """First-putt results inside one distance range (e.g. '3-5m')"""

    range: str
    attempts: int
    cup_ins: int
    rate: float  # percentage 0-100


@dataclass(frozen=True)
class SlopeStats:
    slope: SlopeUpDown
    attempts: int
    cup_ins: int
    rate: float


@dataclass(frozen=True)
class GreenSpeedStats:
    """Rounds played in one stimpmeter range and their putts per hole"""

    speed_range: str
    average_putts: float
    rounds: int


@dataclass(frozen=True)
class MentalStats:
    state: MentalState
    attempts: int
    cup_ins: int
    rate: float


@dataclass(frozen=True)
class AnalyticsSummary:
    """
    Everything the analytics screen renders, computed in one call

    average_putts is putts per hole; rates are unrounded percentages.
    """

    total_rounds: int
    average_putts: float
    one_putt_rate: float
    three_putt_rate: float
    cup_in_rate: float
    distance_stats: List[DistanceStats] = field(default_factory=list)
    slope_stats: List[SlopeStats] = field(default_factory=list)
    green_speed_stats: List[GreenSpeedStats] = field(default_factory=list)
    mental_stats: List[MentalStats] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready dict; enum members are replaced by their values."""
        data = asdict(self)
        for row in data["slope_stats"]:
            row["slope"] = row["slope"].value
        for row in data["mental_stats"]:
            row["state"] = row["state"].value
        return data


@dataclass(frozen=True)
class PuttingStats:
    """Headline numbers shown on the home screen"""

    total_rounds: int
    avg_putts_per_round: float
    avg_putts_per_hole: float
    one_putt_rate: float
    three_putt_rate: float


@dataclass(frozen=True)
class CategoryRate:
    success_rate: float
    count: int
