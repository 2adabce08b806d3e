import json
from datetime import datetime, timedelta

import pytest

from putting_analyzer.__main__ import EXIT_OK, EXIT_RUNTIME_ERROR, EXIT_USAGE_ERROR, main


def _putt(stroke, distance, cup_in, line_ud="flat", mental=3):
    return {
        "strokeNumber": stroke,
        "cupIn": cup_in,
        "distanceMeters": distance,
        "lineUD": line_ud,
        "lineLR": "straight",
        "mental": mental,
    }


def _rounds_file(tmp_path, days_ago=(1, 400)):
    now = datetime.now()
    rounds = []
    for i, age in enumerate(days_ago):
        rounds.append(
            {
                "id": f"round-{i}",
                "date": (now - timedelta(days=age)).isoformat(),
                "stimpmeter": 9.5,
                "holes": [
                    {"holeNumber": 1, "totalPutts": 1, "putts": [_putt(1, 1.2, True, "uphill")]},
                    {
                        "holeNumber": 2,
                        "totalPutts": 2,
                        "putts": [_putt(1, 6.0, False, "downhill"), _putt(2, 0.4, True)],
                    },
                ],
                "totalPutts": 3,
            }
        )
    path = tmp_path / "rounds.json"
    path.write_text(json.dumps({"rounds": rounds}))
    return str(path)


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.setattr("putting_analyzer.config.load_dotenv", lambda: None)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return str(tmp_path / "config.json")


def test_summary_json(tmp_path, capsys, config_path):
    code = main(["--config", config_path, "summary", _rounds_file(tmp_path), "--json"])

    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["total_rounds"] == 2
    assert data["average_putts"] == pytest.approx(1.5)
    assert data["cup_in_rate"] == pytest.approx(50.0)
    assert data["slope_stats"][1]["slope"] == "uphill"


def test_summary_period_filter(tmp_path, capsys, config_path):
    code = main(["--config", config_path, "summary", _rounds_file(tmp_path), "--period", "month", "--json"])

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out)["total_rounds"] == 1


def test_summary_default_period_from_config(tmp_path, capsys, config_path):
    with open(config_path, "w") as f:
        json.dump({"analytics": {"default_period": "week"}}, f)

    assert main(["--config", config_path, "summary", _rounds_file(tmp_path), "--json"]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["total_rounds"] == 1


def test_summary_tables_and_csv(tmp_path, capsys, config_path):
    rounds = _rounds_file(tmp_path)

    assert main(["--config", config_path, "summary", rounds]) == EXIT_OK
    assert "=== DISTANCE ===" in capsys.readouterr().out

    out_dir = tmp_path / "csv"
    assert main(["--config", config_path, "summary", rounds, "--csv-dir", str(out_dir)]) == EXIT_OK
    assert (out_dir / "overview.csv").exists()


def test_bands_output(tmp_path, capsys, config_path):
    code = main(["--config", config_path, "bands", _rounds_file(tmp_path, days_ago=(2,))])

    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["stats"]["one_putt_rate"] == pytest.approx(50.0)
    assert data["distance"]["short"] == {"success_rate": 100.0, "count": 1}
    assert data["distance"]["long"] == {"success_rate": 0.0, "count": 1}
    assert data["slope"]["uphill"]["count"] == 1
    assert set(data["slope"]) == {"flat", "uphill", "downhill", "up_down", "down_up"}


def test_malformed_rounds_fail_at_runtime(tmp_path, config_path):
    path = tmp_path / "rounds.json"
    path.write_text(json.dumps([{"id": "x", "date": "2024-01-01"}]))

    assert main(["--config", config_path, "summary", str(path)]) == EXIT_RUNTIME_ERROR


def test_missing_rounds_file_fails_at_runtime(tmp_path, config_path):
    assert main(["--config", config_path, "bands", str(tmp_path / "missing.json")]) == EXIT_RUNTIME_ERROR


def test_invalid_config_is_usage_error(tmp_path, config_path):
    with open(config_path, "w") as f:
        json.dump({"analytics": {"stride_length": -1}}, f)

    assert main(["--config", config_path, "summary", _rounds_file(tmp_path)]) == EXIT_USAGE_ERROR


def test_scan_without_key_is_usage_error(tmp_path, config_path):
    assert main(["--config", config_path, "scan", "https://example.com/card.jpg"]) == EXIT_USAGE_ERROR


def test_unknown_period_is_rejected_by_argparse(tmp_path, config_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", config_path, "summary", _rounds_file(tmp_path), "--period", "fortnight"])
    assert exc_info.value.code == 2
