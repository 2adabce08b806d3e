import json
from datetime import datetime, timezone

import pytest

from putting_analyzer.models import (
    GrassType,
    Hole,
    MentalState,
    Putt,
    Round,
    ScoreResult,
    SlopeLeftRight,
    SlopeUpDown,
    load_rounds,
    parse_record_date,
)
from putting_analyzer.utils import RecordError, ValidationError


def _round_record(**overrides):
    record = {
        "id": "round-1",
        "date": "2024-05-04T08:30:00Z",
        "weather": "sunny",
        "windSpeed": "light",
        "courseName": "River Bend",
        "grassType": "bent",
        "stimpmeter": 9.5,
        "greenCondition": "good",
        "roundType": "practice",
        "holes": [
            {
                "holeNumber": 1,
                "scoreResult": "par",
                "totalPutts": 2,
                "putts": [
                    {
                        "strokeNumber": 1,
                        "cupIn": False,
                        "distanceMeters": 4.2,
                        "lineUD": "uphill",
                        "lineLR": "left_right",
                        "mental": "P",
                        "lengthSteps": 6,
                        "touch": 3,
                    },
                    {
                        "strokeNumber": 2,
                        "cupIn": True,
                        "distanceMeters": 0.7,
                        "lineUD": "flat",
                        "lineLR": "straight",
                        "mental": 2,
                    },
                ],
            },
            {"holeNumber": 2, "totalPutts": 1, "putts": []},
        ],
        "totalPutts": 3,
    }
    record.update(overrides)
    return record


def test_round_from_dict_parses_nested_records():
    round_ = Round.from_dict(_round_record())

    assert round_.id == "round-1"
    assert round_.date == datetime(2024, 5, 4, 8, 30, tzinfo=timezone.utc)
    assert round_.grass_type is GrassType.BENT
    assert round_.stimpmeter == pytest.approx(9.5)
    assert round_.total_putts == 3
    assert len(round_.holes) == 2

    hole = round_.holes[0]
    assert hole.score_result is ScoreResult.PAR
    assert hole.first_putt().line_ud is SlopeUpDown.UPHILL
    assert hole.first_putt().line_lr is SlopeLeftRight.LEFT_RIGHT
    assert hole.first_putt().mental is MentalState.POSITIVE
    assert hole.putts[1].mental is MentalState.TWO
    assert hole.putts[1].cup_in is True
    assert round_.holes[1].score_result is None


def test_round_to_dict_round_trips_camel_case():
    raw = _round_record()
    data = Round.from_dict(raw).to_dict()

    assert data["date"] == "2024-05-04T08:30:00Z"
    assert data["holes"][0]["putts"][0]["lineLR"] == "left_right"
    assert data["holes"][0]["putts"][1]["mental"] == 2
    assert data["holes"][0]["putts"][0]["mental"] == "P"
    assert Round.from_dict(data) == Round.from_dict(raw)


def test_missing_total_putts_is_summed_from_holes():
    raw = _round_record()
    del raw["totalPutts"]
    assert Round.from_dict(raw).total_putts == 3


def test_snake_case_keys_are_accepted():
    putt = Putt.from_dict(
        {"stroke_number": 1, "distance_meters": 1.4, "line_ud": "down_up", "line_lr": "right", "mental": "N"}
    )
    assert putt.line_ud is SlopeUpDown.DOWN_UP
    assert putt.mental is MentalState.NEGATIVE
    assert putt.cup_in is False


def test_unknown_enum_value_raises_record_error():
    raw = _round_record()
    raw["holes"][0]["putts"][0]["lineUD"] = "sideways"

    with pytest.raises(RecordError) as exc_info:
        Round.from_dict(raw)
    assert exc_info.value.field == "lineUD"
    assert isinstance(exc_info.value, ValidationError)


def test_missing_required_field_raises_record_error():
    with pytest.raises(RecordError, match="missing required field"):
        Hole.from_dict({"holeNumber": 3, "putts": []})


def test_bad_date_raises_record_error():
    with pytest.raises(RecordError):
        Round.from_dict(_round_record(date="yesterday"))


def test_putt_default_matches_blank_entry_form():
    putt = Putt.default(2)
    assert putt.stroke_number == 2
    assert putt.distance_meters == 0
    assert putt.line_ud is SlopeUpDown.FLAT
    assert putt.line_lr is SlopeLeftRight.STRAIGHT
    assert putt.mental is MentalState.THREE
    assert putt.cup_in is False
    assert not putt.is_first_putt


@pytest.mark.parametrize(
    "value,expected",
    [
        ("P", MentalState.POSITIVE),
        ("n", MentalState.NEGATIVE),
        (3, MentalState.THREE),
        (3.0, MentalState.THREE),
        ("5", MentalState.FIVE),
    ],
)
def test_mental_state_parse(value, expected):
    assert MentalState.parse(value) is expected


@pytest.mark.parametrize("value", [0, 6, 2.5, True, "X"])
def test_mental_state_parse_rejects_out_of_scale(value):
    with pytest.raises(ValueError):
        MentalState.parse(value)


def test_parse_record_date_variants():
    assert parse_record_date("2024-01-05") == datetime(2024, 1, 5)
    assert parse_record_date("2024-01-05T09:00:00+09:00").utcoffset().total_seconds() == 9 * 3600
    moment = datetime(2024, 1, 5, 10)
    assert parse_record_date(moment) is moment


def test_round_str_mentions_course_and_putts():
    assert str(Round.from_dict(_round_record())) == "River Bend on 2024-05-04 (3 putts)"


def test_load_rounds_accepts_list_and_wrapped_object(tmp_path):
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([_round_record()]))
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"rounds": [_round_record(), _round_record(id="round-2")]}))

    assert [r.id for r in load_rounds(bare)] == ["round-1"]
    assert [r.id for r in load_rounds(str(wrapped))] == ["round-1", "round-2"]


def test_load_rounds_rejects_other_shapes(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"data": []}))

    with pytest.raises(RecordError):
        load_rounds(path)


@pytest.mark.parametrize("value", ["false", "true", 1, 0, "yes"])
def test_non_boolean_cup_in_raises_record_error(value):
    raw = _round_record()
    raw["holes"][0]["putts"][0]["cupIn"] = value

    with pytest.raises(RecordError, match="expected a boolean") as exc_info:
        Round.from_dict(raw)
    assert exc_info.value.field == "cupIn"


def test_null_cup_in_reads_as_missed():
    raw = _round_record()
    raw["holes"][0]["putts"][1]["cupIn"] = None

    assert Round.from_dict(raw).holes[0].putts[1].cup_in is False


@pytest.mark.parametrize("field", ["strokeNumber", "totalPutts", "holeNumber", "touch"])
def test_fractional_counts_raise_record_error(field):
    raw = _round_record()
    hole = raw["holes"][0]
    if field in hole:
        hole[field] = 1.5
    else:
        hole["putts"][0][field] = 1.5

    with pytest.raises(RecordError, match="expected a whole number") as exc_info:
        Round.from_dict(raw)
    assert exc_info.value.field == field


def test_whole_float_counts_are_accepted():
    raw = _round_record()
    raw["holes"][0]["putts"][0]["strokeNumber"] = 1.0
    raw["holes"][0]["putts"][0]["mental"] = 3.0

    putt = Round.from_dict(raw).holes[0].putts[0]
    assert putt.stroke_number == 1
    assert putt.is_first_putt
    assert putt.mental is MentalState.THREE
