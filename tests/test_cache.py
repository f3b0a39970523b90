import threading
import unittest

from app.data_sources.cache import RequestThrottle, ResponseCache, cache_key
from app.domain import ForecastModel, LaunchSite


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestResponseCache(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = ResponseCache(ttl_seconds=3600, clock=self.clock)

    def test_fresh_entry_is_returned(self):
        self.cache.set("k", {"hourly": {}})
        self.clock.advance(3599)
        self.assertEqual(self.cache.get_fresh("k"), {"hourly": {}})

    def test_expired_entry_is_not_fresh_but_still_available(self):
        self.cache.set("k", {"v": 1})
        self.clock.advance(3600)
        self.assertIsNone(self.cache.get_fresh("k"))
        self.assertEqual(self.cache.get_any("k"), {"v": 1})

    def test_missing_key(self):
        self.assertIsNone(self.cache.get_fresh("nope"))
        self.assertIsNone(self.cache.get_any("nope"))

    def test_set_refreshes_timestamp(self):
        self.cache.set("k", {"v": 1})
        self.clock.advance(4000)
        self.cache.set("k", {"v": 2})
        self.assertEqual(self.cache.get_fresh("k"), {"v": 2})

    def test_clear(self):
        self.cache.set("a", {})
        self.cache.set("b", {})
        self.assertEqual(len(self.cache), 2)
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)

    def test_shared_across_threads(self):
        def writer(prefix):
            for i in range(50):
                self.cache.set(f"{prefix}-{i}", {"i": i})
                self.cache.get_fresh(f"{prefix}-{i}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(self.cache), 400)


class TestRequestThrottle(unittest.TestCase):
    def test_first_call_does_not_sleep(self):
        clock = FakeClock()
        sleeps = []
        throttle = RequestThrottle(min_interval=0.15, clock=clock, sleep=sleeps.append)
        self.assertEqual(throttle.wait(), 0.0)
        self.assertEqual(sleeps, [])

    def test_back_to_back_calls_are_spaced(self):
        clock = FakeClock()
        sleeps = []

        def fake_sleep(seconds):
            sleeps.append(seconds)
            clock.advance(seconds)

        throttle = RequestThrottle(min_interval=0.15, clock=clock, sleep=fake_sleep)
        throttle.wait()
        clock.advance(0.05)
        slept = throttle.wait()
        self.assertAlmostEqual(slept, 0.10)
        self.assertEqual(len(sleeps), 1)

    def test_no_sleep_after_long_gap(self):
        clock = FakeClock()
        sleeps = []
        throttle = RequestThrottle(min_interval=0.15, clock=clock, sleep=sleeps.append)
        throttle.wait()
        clock.advance(1.0)
        throttle.wait()
        self.assertEqual(sleeps, [])

    def test_concurrent_callers_are_each_spaced(self):
        clock = FakeClock()
        sleeps = []
        throttle = RequestThrottle(min_interval=0.15, clock=clock, sleep=sleeps.append)
        threads = [threading.Thread(target=throttle.wait) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        # the clock never moves, so every call after the first waits the full interval
        self.assertEqual(len(sleeps), 5)
        self.assertTrue(all(abs(s - 0.15) < 1e-9 for s in sleeps))


def test_cache_key_rounds_coordinates_and_tags_model():
    site = LaunchSite(
        id="mt-vaca", name="Mt Vaca", elevation=2800, latitude=38.37, longitude=-122.02,
        orientation="SW-W", max_wind=22,
    )
    assert cache_key(site, ForecastModel.HRRR) == "38.3700,-122.0200-hrrr"
    assert cache_key(site, ForecastModel.ECMWF) == "38.3700,-122.0200-ecmwf"


if __name__ == "__main__":
    unittest.main()
