import datetime as dt
import json
from zoneinfo import ZoneInfo

import pytest

from app.batch import build_document, build_parser, main, select_sites
from app.config import Settings
from app.data_sources import CallableForecastDataSource
from app.launch_sites import LAUNCH_SITES

EMPTY_SOURCE = CallableForecastDataSource(lambda site, model: None)


def test_select_sites_defaults_to_all():
    assert [s.id for s in select_sites(None)] == [s.id for s in LAUNCH_SITES]
    assert [s.id for s in select_sites([])] == [s.id for s in LAUNCH_SITES]


def test_select_sites_keeps_requested_order():
    assert [s.id for s in select_sites(["mt-vaca", "tollhouse"])] == ["mt-vaca", "tollhouse"]


def test_select_sites_rejects_unknown_ids():
    with pytest.raises(ValueError, match="nowhere"):
        select_sites(["tollhouse", "nowhere"])


def test_parser_defaults_come_from_settings():
    settings = Settings(output_path="out/forecast.json", log_level="WARNING")
    args = build_parser(settings).parse_args([])
    assert args.output == "out/forecast.json"
    assert args.log_level == "WARNING"
    assert args.sites is None


def test_build_document_stamps_generation_time():
    now = dt.datetime(2025, 6, 1, 7, 0, tzinfo=ZoneInfo("America/Los_Angeles"))
    doc = build_document(select_sites(["tollhouse"]), EMPTY_SOURCE, now=now,
                         settings=Settings(timezone="America/Los_Angeles"))
    assert doc.generated == "2025-06-01T07:00:00-07:00"
    assert [d.date for d in doc.forecasts[0].forecast][0] == dt.date(2025, 6, 1)


def test_main_writes_document(tmp_path):
    output = tmp_path / "data" / "forecast.json"
    code = main(
        ["--output", str(output), "--site", "tollhouse", "--site", "mt-vaca"],
        data_source=EMPTY_SOURCE,
        settings=Settings(),
    )
    assert code == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert "generated" in payload
    assert [f["site"]["id"] for f in payload["forecasts"]] == ["tollhouse", "mt-vaca"]
    first_day = payload["forecasts"][0]["forecast"][0]
    assert len(payload["forecasts"][0]["forecast"]) == 7
    assert first_day["topOfLift"] == 4200
    assert first_day["launchTime"] == "12:00 PM"
    assert first_day["xcReason"] == "No data"


def test_main_unknown_site_returns_error_code(tmp_path):
    output = tmp_path / "forecast.json"
    code = main(["--output", str(output), "--site", "nowhere"], data_source=EMPTY_SOURCE, settings=Settings())
    assert code == 2
    assert not output.exists()
