import json
from pathlib import Path

from app.data_sources.snapshot_source import SnapshotForecastDataSource
from app.domain import ForecastModel, LaunchSite


SITE = LaunchSite(
    id="mt-vaca", name="Mt Vaca", elevation=2800, latitude=38.37, longitude=-122.02,
    orientation="SW-W", max_wind=22,
)


def _payload():
    return {
        "hourly": {
            "time": ["2025-06-01T11:00", "2025-06-01T12:00"],
            "temperature_2m": [70.0, 72.0],
            "dew_point_2m": [48.0, 48.0],
            "wind_speed_10m": [9.0, 10.0],
            "wind_direction_10m": [250.0, 255.0],
            "cape": [300.0, 320.0],
        }
    }


def test_reads_saved_response(tmp_path: Path):
    (tmp_path / "mt-vaca-hrrr.json").write_text(json.dumps(_payload()), encoding="utf-8")
    source = SnapshotForecastDataSource.from_dir(tmp_path)

    run = source.fetch_model_run(SITE, ForecastModel.HRRR)

    assert run is not None
    assert run.model is ForecastModel.HRRR
    assert [s.temperature for s in run.samples] == [70.0, 72.0]
    assert run.samples[1].cape == 320.0
    assert run.samples[0].cloud_cover is None


def test_missing_snapshot_is_no_data(tmp_path: Path):
    source = SnapshotForecastDataSource.from_dir(tmp_path)
    assert source.fetch_model_run(SITE, ForecastModel.ECMWF) is None


def test_corrupt_snapshot_is_no_data(tmp_path: Path):
    (tmp_path / "mt-vaca-ecmwf.json").write_text("{not json", encoding="utf-8")
    source = SnapshotForecastDataSource.from_dir(tmp_path)
    assert source.fetch_model_run(SITE, ForecastModel.ECMWF) is None


def test_snapshot_with_bad_time_axis_is_no_data(tmp_path: Path):
    payload = _payload()
    payload["hourly"]["time"] = [None, 1717243200]
    (tmp_path / "mt-vaca-hrrr.json").write_text(json.dumps(payload), encoding="utf-8")
    source = SnapshotForecastDataSource.from_dir(tmp_path)
    assert source.fetch_model_run(SITE, ForecastModel.HRRR) is None
