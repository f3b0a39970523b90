import unittest

from app.domain import Flyability, HourlyDataPoint, LaunchSite, SiteType
from app.launch_window import (
    DEFAULT_LAUNCH_TIME,
    best_launch_time,
    calculate_launch_time,
    format_launch_time,
    select_best_launch_hour,
)

GOOD, MARGINAL, POOR = Flyability.GOOD, Flyability.MARGINAL, Flyability.POOR

SITE = LaunchSite(
    id="dunlap", name="Dunlap", elevation=3200, latitude=36.74, longitude=-119.1,
    orientation="SW-W", max_wind=20, site_type=SiteType.THERMAL,
)


def _hour(hour, temperature=75, tcon=80, wind_speed=8, wind_gust=10, cloud_cover=30):
    return HourlyDataPoint(
        hour=hour, temperature=temperature, tcon=tcon, wind_speed=wind_speed,
        wind_direction=240, wind_gust=wind_gust, cloud_cover=cloud_cover,
    )


class TestFormatLaunchTime(unittest.TestCase):
    def test_formats(self):
        self.assertEqual(format_launch_time(10), "10:00 AM")
        self.assertEqual(format_launch_time(12), "12:00 PM")
        self.assertEqual(format_launch_time(13), "1:00 PM")
        self.assertEqual(format_launch_time(18), "6:00 PM")
        self.assertEqual(format_launch_time(0), "12:00 AM")


class TestSelectBestLaunchHour(unittest.TestCase):
    def test_picks_highest_score(self):
        hours = [_hour(10, temperature=70), _hour(14, temperature=80), _hour(16, temperature=78)]
        choice = select_best_launch_hour(hours, SITE)
        self.assertEqual(choice.hour.hour, 14)
        self.assertEqual(choice.launch_time, "2:00 PM")
        self.assertEqual(choice.score, 80)

    def test_ties_keep_earliest_hour(self):
        hours = [_hour(11), _hour(13), _hour(15)]
        self.assertEqual(select_best_launch_hour(hours, SITE).hour.hour, 11)

    def test_hours_outside_window_are_ignored(self):
        hours = [_hour(6, temperature=90), _hour(9, temperature=90), _hour(12, temperature=60)]
        self.assertEqual(select_best_launch_hour(hours, SITE).hour.hour, 12)

    def test_no_qualifying_hours(self):
        hours = [_hour(6), _hour(7)]
        self.assertIsNone(select_best_launch_hour(hours, SITE))
        self.assertEqual(best_launch_time(hours, SITE), DEFAULT_LAUNCH_TIME)
        self.assertEqual(best_launch_time([], SITE), "12:00 PM")


class TestLegacyLaunchTime(unittest.TestCase):
    def test_thermal_only(self):
        self.assertEqual(calculate_launch_time(GOOD, POOR, 7, 8, 80, 82), "11:00 AM")
        self.assertEqual(calculate_launch_time(GOOD, POOR, 5, 8, 80, 82), "11:30 AM")
        self.assertEqual(calculate_launch_time(GOOD, POOR, 4, 8, 80, 82), "12:00 PM")

    def test_soaring_only(self):
        self.assertEqual(calculate_launch_time(POOR, GOOD, 2, 15, 60, 80), "9:00 AM")
        self.assertEqual(calculate_launch_time(POOR, GOOD, 2, 12, 60, 80), "10:00 AM")
        self.assertEqual(calculate_launch_time(POOR, GOOD, 2, 9, 60, 80), "10:30 AM")

    def test_both_good(self):
        self.assertEqual(calculate_launch_time(GOOD, GOOD, 6, 12, 80, 83), "11:00 AM")
        self.assertEqual(calculate_launch_time(GOOD, GOOD, 6, 12, 80, 84), "10:30 AM")

    def test_mixed_classes(self):
        self.assertEqual(calculate_launch_time(GOOD, MARGINAL, 7, 12, 80, 83), "11:30 AM")
        self.assertEqual(calculate_launch_time(GOOD, MARGINAL, 6, 12, 80, 83), "12:00 PM")
        self.assertEqual(calculate_launch_time(MARGINAL, GOOD, 4, 12, 80, 86), "10:00 AM")

    def test_marginal_fallbacks(self):
        self.assertEqual(calculate_launch_time(MARGINAL, POOR, 4, 6, 80, 85), "12:00 PM")
        self.assertEqual(calculate_launch_time(MARGINAL, POOR, 4, 6, 80, 87), "1:00 PM")
        self.assertEqual(calculate_launch_time(POOR, MARGINAL, 1, 6, 60, 80), "11:00 AM")
        self.assertEqual(calculate_launch_time(POOR, POOR, 1, 6, 60, 80), "12:00 PM")


if __name__ == "__main__":
    unittest.main()
