import datetime as dt
import unittest

from app.domain import DayForecast, Flyability, LaunchSite, SiteForecast, SiteType, XCPotential
from app.forecast_service import no_data_forecast
from app.presentation import (
    best_condition,
    compact_launch_time,
    day_display_strings,
    day_label,
    day_score,
    format_date,
    rank_sites,
    site_summary,
)

DAY = dt.date(2025, 1, 6)


def _site(site_id="test", elevation=4200):
    return LaunchSite(
        id=site_id, name=site_id.title(), elevation=elevation, latitude=37.0, longitude=-120.0,
        orientation="SW-W", max_wind=18, site_type=SiteType.THERMAL,
    )


def _day(soaring=Flyability.POOR, thermal=Flyability.POOR, **overrides):
    values = dict(
        date=DAY, wind_speed=10, wind_direction=247.5, wind_gust=14, temperature=75, dew_point=45,
        tcon=82, cloud_base=11035, thermal_strength=7.5, top_of_lift=9256,
        flyability=Flyability.MARGINAL, conditions="Moderate: 7.5/10 thermals, top 9.3k",
        soaring_flyability=soaring, thermal_flyability=thermal, launch_time="11:30 AM",
        xc_potential=XCPotential.HIGH, xc_reason="5k+ AGL, 7.5/10", wind_direction_match=True,
        rain_info="Rain expected around 3pm",
    )
    values.update(overrides)
    return DayForecast(**values)


class TestLabels(unittest.TestCase):
    def test_day_label(self):
        self.assertEqual(day_label(0), "Today")
        self.assertEqual(day_label(1), "Tomorrow")
        self.assertEqual(day_label(2), "Day 3")
        self.assertEqual(day_label(6), "Day 7")

    def test_format_date(self):
        self.assertEqual(format_date(DAY), "Mon, Jan 6")
        self.assertEqual(format_date(dt.date(2025, 6, 14)), "Sat, Jun 14")

    def test_compact_launch_time(self):
        self.assertEqual(compact_launch_time("11:00 AM"), "11AM")
        self.assertEqual(compact_launch_time("11:30 AM"), "11:30AM")
        self.assertEqual(compact_launch_time("1:00 PM"), "1PM")


class TestDisplayStrings(unittest.TestCase):
    def test_real_day(self):
        strings = day_display_strings(_day(thermal=Flyability.MARGINAL, soaring=Flyability.GOOD), 0)
        self.assertEqual(strings["label"], "Today")
        self.assertEqual(strings["date"], "Mon, Jan 6")
        self.assertEqual(strings["wind"], "10 mph")
        self.assertEqual(strings["wind_detail"], "WSW G14")
        self.assertEqual(strings["thermal_strength"], "7.5/10")
        self.assertEqual(strings["top_of_lift"], "9.3k")
        self.assertEqual(strings["launch_time"], "11:30AM")
        self.assertEqual(strings["rain"], "Rain expected around 3pm")
        self.assertEqual(strings["best"], "good")
        self.assertEqual(strings["wind_direction"], "Wind OK")
        self.assertEqual(strings["xc"], "high: 5k+ AGL, 7.5/10")

    def test_placeholder_day_renders(self):
        strings = day_display_strings(no_data_forecast(_site(), DAY), 3)
        self.assertEqual(strings["label"], "Day 4")
        self.assertEqual(strings["wind"], "0 mph")
        self.assertEqual(strings["wind_detail"], "N G0")
        self.assertEqual(strings["top_of_lift"], "4.2k")
        self.assertEqual(strings["launch_time"], "12PM")
        self.assertEqual(strings["conditions"], "Forecast not available")
        self.assertEqual(strings["rain"], "")
        self.assertEqual(strings["best"], "poor")
        self.assertEqual(strings["wind_direction"], "Cross")
        self.assertEqual(strings["xc"], "low: No data")

    def test_site_summary_keeps_order(self):
        site = _site()
        forecast = SiteForecast(site=site, forecast=[no_data_forecast(site, DAY + dt.timedelta(days=i)) for i in range(7)])
        summary = site_summary(forecast)
        self.assertEqual(len(summary), 7)
        self.assertEqual([s["label"] for s in summary[:2]], ["Today", "Tomorrow"])
        self.assertEqual(summary[1]["date"], "Tue, Jan 7")


class TestRanking(unittest.TestCase):
    def test_best_condition(self):
        self.assertEqual(best_condition(_day(Flyability.POOR, Flyability.MARGINAL)), Flyability.MARGINAL)
        self.assertEqual(best_condition(_day(Flyability.GOOD, Flyability.POOR)), Flyability.GOOD)

    def test_rank_sites_by_day_index(self):
        poor = SiteForecast(site=_site("a"), forecast=[_day(), _day(thermal=Flyability.GOOD)])
        good = SiteForecast(site=_site("b"), forecast=[_day(thermal=Flyability.GOOD), _day()])
        marginal = SiteForecast(site=_site("c"), forecast=[_day(soaring=Flyability.MARGINAL), _day()])

        self.assertEqual([f.site.id for f in rank_sites([poor, good, marginal])], ["b", "c", "a"])
        self.assertEqual([f.site.id for f in rank_sites([poor, good, marginal], day_index=1)], ["a", "b", "c"])

    def test_rank_sites_is_stable_and_handles_short_lists(self):
        first = SiteForecast(site=_site("first"), forecast=[_day()])
        second = SiteForecast(site=_site("second"), forecast=[_day()])
        empty = SiteForecast(site=_site("empty"), forecast=[])
        self.assertEqual(day_score(empty, 0), 0)
        self.assertEqual(
            [f.site.id for f in rank_sites([empty, first, second])],
            ["first", "second", "empty"],
        )


if __name__ == "__main__":
    unittest.main()
