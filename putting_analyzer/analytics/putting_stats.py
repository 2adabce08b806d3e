"""
Deterministic putting statistics over recorded rounds.

Every function is pure: rounds in, plain aggregate records out. Empty input
and empty buckets report 0 rather than raising or returning NaN. Accuracy
breakdowns only look at first putts (stroke 1) so clean-up putts don't
inflate the make rates.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from putting_analyzer.models import (
    AnalyticsSummary,
    BasicStats,
    CategoryRate,
    DistanceStats,
    GreenSpeedStats,
    Hole,
    MentalState,
    MentalStats,
    Putt,
    PuttingStats,
    Round,
    SlopeStats,
    SlopeUpDown,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeBucket:
    """Half-open range [min, max) with its display label"""

    min: float
    max: float
    label: str

    def contains(self, value: float) -> bool:
        return self.min <= value < self.max


# First-putt distance ranges, meters
DISTANCE_RANGES: Tuple[RangeBucket, ...] = (
    RangeBucket(0, 1, "0-1m"),
    RangeBucket(1, 2, "1-2m"),
    RangeBucket(2, 3, "2-3m"),
    RangeBucket(3, 5, "3-5m"),
    RangeBucket(5, 7, "5-7m"),
    RangeBucket(7, 10, "7-10m"),
    RangeBucket(10, math.inf, "10m+"),
)

# Stimpmeter ranges, feet
SPEED_RANGES: Tuple[RangeBucket, ...] = (
    RangeBucket(0, 8, "~8ft"),
    RangeBucket(8, 9, "8-9ft"),
    RangeBucket(9, 10, "9-10ft"),
    RangeBucket(10, 11, "10-11ft"),
    RangeBucket(11, math.inf, "11ft+"),
)

SLOPE_ORDER: Tuple[SlopeUpDown, ...] = (
    SlopeUpDown.FLAT,
    SlopeUpDown.UPHILL,
    SlopeUpDown.DOWNHILL,
    SlopeUpDown.UP_DOWN,
    SlopeUpDown.DOWN_UP,
)

MENTAL_ORDER: Tuple[MentalState, ...] = (
    MentalState.POSITIVE,
    MentalState.ONE,
    MentalState.TWO,
    MentalState.THREE,
    MentalState.FOUR,
    MentalState.FIVE,
    MentalState.NEGATIVE,
)

# Three-band categorizer thresholds, meters (upper edges are exclusive)
SHORT_PUTT_MAX = 2.0
MEDIUM_PUTT_MAX = 5.0
DISTANCE_BANDS: Tuple[str, ...] = ("short", "medium", "long")


@dataclass(frozen=True)
class PuttContext:
    putt: Putt
    hole: Hole
    round: Round


def percentage(matches: int, total: int) -> float:
    """matches / total as a 0-100 percentage, 0 when total is 0"""
    return (matches / total) * 100 if total > 0 else 0.0


def _cup_in_rate(putts: Sequence[PuttContext]) -> Tuple[int, int, float]:
    attempts = len(putts)
    cup_ins = sum(1 for ctx in putts if ctx.putt.cup_in)
    return attempts, cup_ins, percentage(cup_ins, attempts)


def _iter_holes(rounds: Iterable[Round]) -> Iterator[Hole]:
    for round_ in rounds:
        yield from round_.holes


# ============================================================================
# PUTT EXTRACTION
# ============================================================================

def extract_all_putts(rounds: Iterable[Round]) -> List[PuttContext]:
    """Every recorded putt with the hole and round it belongs to."""
    return [
        PuttContext(putt=putt, hole=hole, round=round_)
        for round_ in rounds
        for hole in round_.holes
        for putt in hole.putts
    ]


def extract_first_putts(rounds: Iterable[Round]) -> List[PuttContext]:
    return [ctx for ctx in extract_all_putts(rounds) if ctx.putt.stroke_number == 1]


# ============================================================================
# SCALAR STATS
# ============================================================================

def calculate_basic_stats(rounds: Sequence[Round]) -> BasicStats:
    total_rounds = len(rounds)
    total_holes = 0
    total_putts = 0

    for round_ in rounds:
        total_holes += len(round_.holes)
        total_putts += round_.total_putts

    return BasicStats(
        total_rounds=total_rounds,
        total_holes=total_holes,
        total_putts=total_putts,
        average_putts_per_round=total_putts / total_rounds if total_rounds > 0 else 0.0,
        average_putts_per_hole=total_putts / total_holes if total_holes > 0 else 0.0,
    )


def calculate_one_putt_rate(rounds: Sequence[Round]) -> float:
    """Share of holes finished in exactly one putt."""
    holes = list(_iter_holes(rounds))
    return percentage(sum(1 for h in holes if h.total_putts == 1), len(holes))


def calculate_three_putt_rate(rounds: Sequence[Round]) -> float:
    """Share of holes that took three or more putts."""
    holes = list(_iter_holes(rounds))
    return percentage(sum(1 for h in holes if h.total_putts >= 3), len(holes))


def calculate_cup_in_rate(rounds: Sequence[Round]) -> float:
    """Share of first putts holed."""
    _, _, rate = _cup_in_rate(extract_first_putts(rounds))
    return rate


# ============================================================================
# BUCKETED BREAKDOWNS
# ============================================================================

def calculate_distance_stats(rounds: Sequence[Round]) -> List[DistanceStats]:
    first_putts = extract_first_putts(rounds)

    stats = []
    for bucket in DISTANCE_RANGES:
        in_range = [ctx for ctx in first_putts if bucket.contains(ctx.putt.distance_meters)]
        attempts, cup_ins, rate = _cup_in_rate(in_range)
        stats.append(DistanceStats(range=bucket.label, attempts=attempts, cup_ins=cup_ins, rate=rate))
    return stats


def calculate_slope_stats(rounds: Sequence[Round]) -> List[SlopeStats]:
    first_putts = extract_first_putts(rounds)

    stats = []
    for slope in SLOPE_ORDER:
        with_slope = [ctx for ctx in first_putts if ctx.putt.line_ud is slope]
        attempts, cup_ins, rate = _cup_in_rate(with_slope)
        stats.append(SlopeStats(slope=slope, attempts=attempts, cup_ins=cup_ins, rate=rate))
    return stats


def calculate_green_speed_stats(rounds: Sequence[Round]) -> List[GreenSpeedStats]:
    """Putts per hole for rounds grouped by stimpmeter reading."""
    stats = []
    for bucket in SPEED_RANGES:
        in_range = [r for r in rounds if bucket.contains(r.stimpmeter)]
        total_putts = sum(r.total_putts for r in in_range)
        total_holes = sum(len(r.holes) for r in in_range)
        stats.append(
            GreenSpeedStats(
                speed_range=bucket.label,
                average_putts=total_putts / total_holes if total_holes > 0 else 0.0,
                rounds=len(in_range),
            )
        )
    return stats


def calculate_mental_stats(rounds: Sequence[Round]) -> List[MentalStats]:
    first_putts = extract_first_putts(rounds)

    stats = []
    for state in MENTAL_ORDER:
        with_state = [ctx for ctx in first_putts if ctx.putt.mental is state]
        attempts, cup_ins, rate = _cup_in_rate(with_state)
        stats.append(MentalStats(state=state, attempts=attempts, cup_ins=cup_ins, rate=rate))
    return stats


def calculate_analytics_summary(rounds: Sequence[Round]) -> AnalyticsSummary:
    basic = calculate_basic_stats(rounds)
    summary = AnalyticsSummary(
        total_rounds=basic.total_rounds,
        average_putts=basic.average_putts_per_hole,
        one_putt_rate=calculate_one_putt_rate(rounds),
        three_putt_rate=calculate_three_putt_rate(rounds),
        cup_in_rate=calculate_cup_in_rate(rounds),
        distance_stats=calculate_distance_stats(rounds),
        slope_stats=calculate_slope_stats(rounds),
        green_speed_stats=calculate_green_speed_stats(rounds),
        mental_stats=calculate_mental_stats(rounds),
    )
    logger.debug(
        f"Summary over {basic.total_rounds} rounds / {basic.total_holes} holes: "
        f"{summary.average_putts:.2f} putts/hole, cup-in {summary.cup_in_rate:.1f}%"
    )
    return summary


# ============================================================================
# THREE-BAND AND COMPATIBILITY BREAKDOWNS
# ============================================================================

def get_distance_range(distance_meters: float) -> str:
    """Coarse band: 'short' (< 2m), 'medium' (< 5m) or 'long'. NaN has no band."""
    if math.isnan(distance_meters):
        raise ValueError("distance is NaN")
    if distance_meters < SHORT_PUTT_MAX:
        return "short"
    if distance_meters < MEDIUM_PUTT_MAX:
        return "medium"
    return "long"


def calculate_distance(steps: float, stride_length: float) -> float:
    """Putt length in meters from paced steps."""
    return steps * stride_length


def calculate_stats(rounds: Sequence[Round]) -> PuttingStats:
    basic = calculate_basic_stats(rounds)
    return PuttingStats(
        total_rounds=basic.total_rounds,
        avg_putts_per_round=basic.average_putts_per_round,
        avg_putts_per_hole=basic.average_putts_per_hole,
        one_putt_rate=calculate_one_putt_rate(rounds),
        three_putt_rate=calculate_three_putt_rate(rounds),
    )


def analyze_by_distance(rounds: Sequence[Round]) -> Dict[str, CategoryRate]:
    """First-putt success per three-band distance category; NaN distances count nowhere."""
    counts = {band: [0, 0] for band in DISTANCE_BANDS}  # [attempts, cup_ins]

    for ctx in extract_first_putts(rounds):
        if math.isnan(ctx.putt.distance_meters):
            continue
        band = counts[get_distance_range(ctx.putt.distance_meters)]
        band[0] += 1
        if ctx.putt.cup_in:
            band[1] += 1

    return {
        band: CategoryRate(success_rate=percentage(cup_ins, attempts), count=attempts)
        for band, (attempts, cup_ins) in counts.items()
    }


def analyze_by_slope(rounds: Sequence[Round]) -> Dict[SlopeUpDown, CategoryRate]:
    """First-putt success per up/down slope, keyed by every SlopeUpDown value."""
    return {
        row.slope: CategoryRate(success_rate=row.rate, count=row.attempts)
        for row in calculate_slope_stats(rounds)
    }
