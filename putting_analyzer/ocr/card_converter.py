"""
Convert scorecard readings (card notation) into Hole / Putt records.

The paper card uses short codes (F, UD, St, Ba, D+, ...); readings come from
a model so every field is treated as possibly missing or garbled. Unreadable
values fall back to None, or to the same defaults a blank entry form uses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from putting_analyzer.models import (
    DEFAULT_STRIDE_LENGTH,
    Hole,
    MentalState,
    Putt,
    ScoreResult,
    SlopeLeftRight,
    SlopeUpDown,
)

logger = logging.getLogger(__name__)

# Card notation -> app values
CARD_RESULT: Dict[str, ScoreResult] = {
    "E": ScoreResult.EAGLE,
    "Ba": ScoreResult.BIRDIE,
    "P": ScoreResult.PAR,
    "Bo": ScoreResult.BOGEY,
    "D+": ScoreResult.DOUBLE_BOGEY_PLUS,
}

CARD_LINE_UD: Dict[str, SlopeUpDown] = {
    "F": SlopeUpDown.FLAT,
    "U": SlopeUpDown.UPHILL,
    "D": SlopeUpDown.DOWNHILL,
    "UD": SlopeUpDown.UP_DOWN,
    "DU": SlopeUpDown.DOWN_UP,
}

CARD_LINE_LR: Dict[str, SlopeLeftRight] = {
    "St": SlopeLeftRight.STRAIGHT,
    "L": SlopeLeftRight.LEFT,
    "R": SlopeLeftRight.RIGHT,
    "LR": SlopeLeftRight.LEFT_RIGHT,
    "RL": SlopeLeftRight.RIGHT_LEFT,
}

SCALE_VALUES = range(1, 6)  # missed direction / touch bubbles


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_scale(value: Any) -> Optional[int]:
    number = _optional_float(value)
    if number is None or not number.is_integer() or int(number) not in SCALE_VALUES:
        return None
    return int(number)


def _optional_code(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class OcrPuttReading:
    """One putt section of the card exactly as read (card codes, not app values)"""

    putt_number: int
    cup_in: bool = False
    dist_prev: Optional[float] = None
    result: Optional[str] = None
    length_steps: Optional[float] = None
    length_yards: Optional[float] = None
    missed_direction: Optional[int] = None
    touch: Optional[int] = None
    line_ud: Optional[str] = None
    line_lr: Optional[str] = None
    mental: Optional[Union[str, int]] = None

    def is_blank(self) -> bool:
        """True when nothing was marked in this putt section."""
        return not self.cup_in and all(
            value is None
            for value in (
                self.dist_prev,
                self.result,
                self.length_steps,
                self.length_yards,
                self.missed_direction,
                self.touch,
                self.line_ud,
                self.line_lr,
                self.mental,
            )
        )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], position: int = 1) -> "OcrPuttReading":
        putt_number = _optional_scale(raw.get("puttNumber"))
        mental = raw.get("mental")
        if isinstance(mental, float) and mental.is_integer():
            mental = int(mental)
        return cls(
            putt_number=putt_number if putt_number is not None else position,
            cup_in=raw.get("cupIn") is True,
            dist_prev=_optional_float(raw.get("distPrev")),
            result=_optional_code(raw.get("result")),
            length_steps=_optional_float(raw.get("lengthSteps")),
            length_yards=_optional_float(raw.get("lengthYards")),
            missed_direction=_optional_scale(raw.get("missedDirection")),
            touch=_optional_scale(raw.get("touch")),
            line_ud=_optional_code(raw.get("lineUD")),
            line_lr=_optional_code(raw.get("lineLR")),
            mental=mental if isinstance(mental, int) and not isinstance(mental, bool) else _optional_code(mental),
        )


@dataclass(frozen=True)
class OcrHoleReading:
    """Header and putt sections of one hole card"""

    hole: Optional[int]
    date: Optional[str] = None  # 'MM/DD' as written on the card
    course: Optional[str] = None
    putts: Tuple[OcrPuttReading, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "OcrHoleReading":
        hole = _optional_float(raw.get("hole"))
        putts_raw = raw.get("putts")
        if not isinstance(putts_raw, list):
            putts_raw = []
        return cls(
            hole=int(hole) if hole is not None and hole.is_integer() else None,
            date=_optional_code(raw.get("date")),
            course=_optional_code(raw.get("course")),
            putts=tuple(
                OcrPuttReading.from_dict(p, position=i + 1)
                for i, p in enumerate(putts_raw)
                if isinstance(p, dict)
            ),
        )


def _mental_from_card(value: Optional[Union[str, int]]) -> MentalState:
    if value is None:
        return MentalState.THREE
    try:
        return MentalState.parse(value)
    except ValueError:
        logger.debug(f"Unreadable mental mark {value!r}; using neutral")
        return MentalState.THREE


def convert_ocr_putt(
    reading: OcrPuttReading,
    stride_length: float = DEFAULT_STRIDE_LENGTH,
) -> Optional[Putt]:
    """
    Card putt section -> Putt, or None when the section was left blank

    Distance is paced steps times stride length (0 when steps are missing).
    Unknown line codes fall back to flat / straight and mental to 3.
    """
    if reading.is_blank():
        return None

    steps = reading.length_steps or 0
    return Putt(
        stroke_number=reading.putt_number,
        cup_in=reading.cup_in,
        dist_prev=reading.dist_prev,
        result=CARD_RESULT.get(reading.result) if reading.result else None,
        length_steps=reading.length_steps,
        length_yards=reading.length_yards,
        distance_meters=steps * stride_length,
        missed_direction=reading.missed_direction,
        touch=reading.touch,
        line_ud=CARD_LINE_UD.get(reading.line_ud or "", SlopeUpDown.FLAT),
        line_lr=CARD_LINE_LR.get(reading.line_lr or "", SlopeLeftRight.STRAIGHT),
        mental=_mental_from_card(reading.mental),
    )


def convert_ocr_hole(
    reading: OcrHoleReading,
    stride_length: float = DEFAULT_STRIDE_LENGTH,
) -> Optional[Hole]:
    """
    Card -> Hole, or None when the hole number couldn't be read

    The hole's score comes from the first putt's Result bubble (par if unread).
    """
    if not reading.hole:
        return None

    putts: List[Putt] = []
    score_result = ScoreResult.PAR
    for putt_reading in reading.putts:
        putt = convert_ocr_putt(putt_reading, stride_length)
        if putt is not None:
            putts.append(putt)
        if putt_reading.putt_number == 1 and putt_reading.result in CARD_RESULT:
            score_result = CARD_RESULT[putt_reading.result]

    return Hole(
        hole_number=reading.hole,
        score_result=score_result,
        total_putts=len(putts),
        putts=tuple(putts),
    )


def convert_ocr_batch(
    readings: Iterable[OcrHoleReading],
    stride_length: float = DEFAULT_STRIDE_LENGTH,
) -> List[Hole]:
    """Convert several hole cards, dropping unreadable ones, ordered by hole number."""
    holes = []
    skipped = 0
    for reading in readings:
        hole = convert_ocr_hole(reading, stride_length)
        if hole is None:
            skipped += 1
            continue
        holes.append(hole)

    if skipped:
        logger.warning(f"Skipped {skipped} card(s) without a readable hole number")
    holes.sort(key=lambda h: h.hole_number)
    return holes
