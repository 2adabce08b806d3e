"""Round / hole / putt records consumed by the analytics engine"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from .enums import (
    CompetitionFormat,
    GrassType,
    GreenCondition,
    MentalState,
    RoundType,
    ScoreResult,
    SlopeLeftRight,
    SlopeUpDown,
    Weather,
    WindSpeed,
)
from putting_analyzer.utils.errors import RecordError

E = TypeVar("E", bound=Enum)

_MISSING = object()

DEFAULT_STRIDE_LENGTH = 0.7  # meters per paced step


def _lookup(raw: Dict[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    """Return the first key present in ``raw`` (camelCase or snake_case spelling)."""
    for key in keys:
        if key in raw:
            return raw[key]
    return default


def _require(raw: Dict[str, Any], record: str, *keys: str) -> Any:
    value = _lookup(raw, *keys)
    if value is _MISSING or value is None:
        raise RecordError("missing required field", field=keys[0], record=record)
    return value


def _enum(enum_cls: Type[E], value: Any, field_name: str, record: str) -> E:
    try:
        if enum_cls is MentalState:
            return MentalState.parse(value)  # type: ignore[return-value]
        return enum_cls(value)
    except ValueError:
        raise RecordError(f"unknown {enum_cls.__name__}", field=field_name, value=value, record=record)


def _optional_enum(enum_cls: Type[E], value: Any, field_name: str, record: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return _enum(enum_cls, value, field_name, record)


def _number(value: Any, field_name: str, record: str) -> float:
    if isinstance(value, bool):
        raise RecordError("expected a number", field=field_name, value=value, record=record)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordError("expected a number", field=field_name, value=value, record=record)


def _optional_number(value: Any, field_name: str, record: str) -> Optional[float]:
    if value is None or value == "":
        return None
    return _number(value, field_name, record)


def _integer(value: Any, field_name: str, record: str) -> int:
    number = _number(value, field_name, record)
    if not number.is_integer():
        raise RecordError("expected a whole number", field=field_name, value=value, record=record)
    return int(number)


def _optional_int(value: Any, field_name: str, record: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return _integer(value, field_name, record)


def _flag(value: Any, field_name: str, record: str) -> bool:
    """Strict boolean; missing or null reads as False."""
    if value is None:
        return False
    if not isinstance(value, bool):
        raise RecordError("expected a boolean", field=field_name, value=value, record=record)
    return value


def parse_record_date(value: Any) -> datetime:
    """Parse an ISO-8601 date or datetime string (trailing 'Z' allowed)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise RecordError("unparseable date", field="date", value=value, record="round")


def _format_record_date(value: datetime) -> str:
    if value.tzinfo is not None and value.utcoffset() == timedelta(0):
        return value.isoformat().replace("+00:00", "Z")
    return value.isoformat()


def _enum_value(value: Optional[Enum]) -> Any:
    return None if value is None else value.value


@dataclass(frozen=True)
class Putt:
    """
    One putting stroke on a hole

    Only stroke_number, distance_meters and the slope/mental tags are always
    recorded; every other field may be None when the golfer left it blank.
    """

    stroke_number: int  # 1st/2nd/3rd putt on the hole
    distance_meters: float  # paced steps * stride length
    line_ud: SlopeUpDown
    line_lr: SlopeLeftRight
    mental: MentalState
    cup_in: bool = False
    dist_prev: Optional[float] = None  # yards left by the previous putt
    result: Optional[ScoreResult] = None
    length_steps: Optional[float] = None
    length_yards: Optional[float] = None
    missed_direction: Optional[int] = None  # 1-5
    touch: Optional[int] = None  # stroke strength, 1 (soft) - 5 (firm)

    @property
    def is_first_putt(self) -> bool:
        return self.stroke_number == 1

    @classmethod
    def default(cls, stroke_number: int) -> "Putt":
        """Blank putt as shown on a fresh hole entry form"""
        return cls(
            stroke_number=stroke_number,
            distance_meters=0.0,
            line_ud=SlopeUpDown.FLAT,
            line_lr=SlopeLeftRight.STRAIGHT,
            mental=MentalState.THREE,
        )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Putt":
        record = "putt"
        if not isinstance(raw, dict):
            raise RecordError("expected an object", value=raw, record=record)
        return cls(
            stroke_number=_integer(_require(raw, record, "strokeNumber", "stroke_number"), "strokeNumber", record),
            distance_meters=_number(_require(raw, record, "distanceMeters", "distance_meters"), "distanceMeters", record),
            line_ud=_enum(SlopeUpDown, _require(raw, record, "lineUD", "line_ud"), "lineUD", record),
            line_lr=_enum(SlopeLeftRight, _require(raw, record, "lineLR", "line_lr"), "lineLR", record),
            mental=_enum(MentalState, _require(raw, record, "mental"), "mental", record),
            cup_in=_flag(_lookup(raw, "cupIn", "cup_in", default=None), "cupIn", record),
            dist_prev=_optional_number(_lookup(raw, "distPrev", "dist_prev", default=None), "distPrev", record),
            result=_optional_enum(ScoreResult, _lookup(raw, "result", default=None), "result", record),
            length_steps=_optional_number(_lookup(raw, "lengthSteps", "length_steps", default=None), "lengthSteps", record),
            length_yards=_optional_number(_lookup(raw, "lengthYards", "length_yards", default=None), "lengthYards", record),
            missed_direction=_optional_int(
                _lookup(raw, "missedDirection", "missed_direction", default=None), "missedDirection", record
            ),
            touch=_optional_int(_lookup(raw, "touch", default=None), "touch", record),
        )

    def to_dict(self) -> Dict[str, Any]:
        mental: Any = self.mental.value
        if mental.isdigit():
            mental = int(mental)
        return {
            "strokeNumber": self.stroke_number,
            "cupIn": self.cup_in,
            "distPrev": self.dist_prev,
            "result": _enum_value(self.result),
            "lengthSteps": self.length_steps,
            "lengthYards": self.length_yards,
            "distanceMeters": self.distance_meters,
            "missedDirection": self.missed_direction,
            "touch": self.touch,
            "lineUD": self.line_ud.value,
            "lineLR": self.line_lr.value,
            "mental": mental,
        }


@dataclass(frozen=True)
class Hole:
    """One hole's putting, up to three putts ordered by stroke number"""

    hole_number: int
    total_putts: int
    putts: Tuple[Putt, ...] = ()
    score_result: Optional[ScoreResult] = None

    def first_putt(self) -> Optional[Putt]:
        for putt in self.putts:
            if putt.is_first_putt:
                return putt
        return None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Hole":
        record = "hole"
        if not isinstance(raw, dict):
            raise RecordError("expected an object", value=raw, record=record)
        putts_raw = _lookup(raw, "putts", default=None) or []
        if not isinstance(putts_raw, list):
            raise RecordError("putts must be a list", field="putts", value=putts_raw, record=record)
        return cls(
            hole_number=_integer(_require(raw, record, "holeNumber", "hole_number"), "holeNumber", record),
            total_putts=_integer(_require(raw, record, "totalPutts", "total_putts"), "totalPutts", record),
            putts=tuple(Putt.from_dict(p) for p in putts_raw),
            score_result=_optional_enum(
                ScoreResult, _lookup(raw, "scoreResult", "score_result", default=None), "scoreResult", record
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "holeNumber": self.hole_number,
            "scoreResult": _enum_value(self.score_result),
            "totalPutts": self.total_putts,
            "putts": [p.to_dict() for p in self.putts],
        }


@dataclass(frozen=True)
class Round:
    """
    One golf round with its green conditions and per-hole putting

    total_putts is denormalized from the holes; producers keep it equal to
    the sum of each hole's total_putts and the engine trusts it.
    """

    id: str
    date: datetime
    stimpmeter: float  # green speed, feet
    holes: Tuple[Hole, ...]
    total_putts: int
    course_id: str = ""
    course_name: str = ""
    front_nine_green: str = ""
    back_nine_green: str = ""
    putter_id: str = ""
    putter_name: str = ""
    grass_type: Optional[GrassType] = None
    weather: Optional[Weather] = None
    wind_speed: Optional[WindSpeed] = None
    green_condition: Optional[GreenCondition] = None
    round_type: Optional[RoundType] = None
    competition_format: Optional[CompetitionFormat] = None
    temperature: Optional[float] = None  # Celsius
    mowing_height: Optional[float] = None  # mm
    compaction: Optional[float] = None

    def __str__(self) -> str:
        course = self.course_name or "unknown course"
        return f"{course} on {self.date:%Y-%m-%d} ({self.total_putts} putts)"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Round":
        record = "round"
        if not isinstance(raw, dict):
            raise RecordError("expected an object", value=raw, record=record)
        holes_raw = _lookup(raw, "holes", default=None) or []
        if not isinstance(holes_raw, list):
            raise RecordError("holes must be a list", field="holes", value=holes_raw, record=record)
        holes = tuple(Hole.from_dict(h) for h in holes_raw)

        total_putts = _lookup(raw, "totalPutts", "total_putts", default=None)
        if total_putts is None:
            total_putts = sum(h.total_putts for h in holes)

        return cls(
            id=str(_require(raw, record, "id")),
            date=parse_record_date(_require(raw, record, "date")),
            stimpmeter=_number(_require(raw, record, "stimpmeter"), "stimpmeter", record),
            holes=holes,
            total_putts=_integer(total_putts, "totalPutts", record),
            course_id=str(_lookup(raw, "courseId", "course_id", default="") or ""),
            course_name=str(_lookup(raw, "courseName", "course_name", default="") or ""),
            front_nine_green=str(_lookup(raw, "frontNineGreen", "front_nine_green", default="") or ""),
            back_nine_green=str(_lookup(raw, "backNineGreen", "back_nine_green", default="") or ""),
            putter_id=str(_lookup(raw, "putterId", "putter_id", default="") or ""),
            putter_name=str(_lookup(raw, "putterName", "putter_name", default="") or ""),
            grass_type=_optional_enum(GrassType, _lookup(raw, "grassType", "grass_type", default=None), "grassType", record),
            weather=_optional_enum(Weather, _lookup(raw, "weather", default=None), "weather", record),
            wind_speed=_optional_enum(WindSpeed, _lookup(raw, "windSpeed", "wind_speed", default=None), "windSpeed", record),
            green_condition=_optional_enum(
                GreenCondition, _lookup(raw, "greenCondition", "green_condition", default=None), "greenCondition", record
            ),
            round_type=_optional_enum(RoundType, _lookup(raw, "roundType", "round_type", default=None), "roundType", record),
            competition_format=_optional_enum(
                CompetitionFormat,
                _lookup(raw, "competitionFormat", "competition_format", default=None),
                "competitionFormat",
                record,
            ),
            temperature=_optional_number(_lookup(raw, "temperature", default=None), "temperature", record),
            mowing_height=_optional_number(_lookup(raw, "mowingHeight", "mowing_height", default=None), "mowingHeight", record),
            compaction=_optional_number(_lookup(raw, "compaction", default=None), "compaction", record),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": _format_record_date(self.date),
            "weather": _enum_value(self.weather),
            "temperature": self.temperature,
            "windSpeed": _enum_value(self.wind_speed),
            "courseId": self.course_id,
            "courseName": self.course_name,
            "frontNineGreen": self.front_nine_green,
            "backNineGreen": self.back_nine_green,
            "roundType": _enum_value(self.round_type),
            "competitionFormat": _enum_value(self.competition_format),
            "grassType": _enum_value(self.grass_type),
            "stimpmeter": self.stimpmeter,
            "mowingHeight": self.mowing_height,
            "compaction": self.compaction,
            "greenCondition": _enum_value(self.green_condition),
            "putterId": self.putter_id,
            "putterName": self.putter_name,
            "holes": [h.to_dict() for h in self.holes],
            "totalPutts": self.total_putts,
        }
