import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from irrigation_weather.errors import InsufficientWeatherDataError
from irrigation_weather.forecast_resampler import (
    partition_days,
    resample_forecast,
    summarize_bucket,
    summarize_icon,
)
from irrigation_weather.records import CanonicalHourlySample

BERLIN = ZoneInfo("Europe/Berlin")
MIDNIGHT = dt.datetime(2024, 6, 1, 0, 0, tzinfo=BERLIN)


def _sample(i: int, **overrides) -> CanonicalHourlySample:
    values = dict(
        timestamp=MIDNIGHT + dt.timedelta(hours=i),
        temperature=50.0 + (i % 24),
        humidity=60,
        precipitation=0.0,
        wind=4.0,
        cloud_cover=0.0,
        icon="01d",
    )
    values.update(overrides)
    return CanonicalHourlySample(**values)


def _forecast(n: int = 24 * 8):
    return [_sample(i) for i in range(n)]


class TestSummarizeIcon(unittest.TestCase):
    def test_all_same_non_clear_icon_is_kept(self):
        self.assertEqual(summarize_icon(["10d"] * 24), "10d")

    def test_two_distinct_non_clear_icons_collapse(self):
        self.assertEqual(summarize_icon(["10d"] * 12 + ["13d"] * 12), "01d")
        self.assertEqual(summarize_icon(["03d", "10d", "03d", "03d"]), "01d")

    def test_first_transition_from_clear_is_kept(self):
        self.assertEqual(summarize_icon(["01d"] * 5 + ["10d"] * 19), "10d")

    def test_all_clear(self):
        self.assertEqual(summarize_icon(["01d"] * 24), "01d")

    def test_clear_after_clouds_collapses(self):
        self.assertEqual(summarize_icon(["02d", "02d", "01d", "02d"]), "01d")


class TestBuckets(unittest.TestCase):
    def test_partitions_into_24_hour_buckets(self):
        buckets = partition_days(_forecast(24 * 8 - 1), 8)
        self.assertEqual(len(buckets), 8)
        self.assertEqual([len(b) for b in buckets], [24] * 7 + [23])

    def test_bucket_min_max_precip_and_date(self):
        bucket = [_sample(i, precipitation=0.1 if i in (3, 4) else 0.0) for i in range(24)]
        day = summarize_bucket(bucket, BERLIN)
        self.assertEqual(day.temp_min, 50.0)
        self.assertEqual(day.temp_max, 73.0)
        self.assertAlmostEqual(day.precip, 0.2)
        self.assertEqual(day.date, int(MIDNIGHT.timestamp()))

    def test_date_comes_from_mid_bucket(self):
        # Bucket starting one hour before midnight still dates to the next day.
        bucket = [_sample(i - 1) for i in range(24)]
        self.assertEqual(summarize_bucket(bucket, BERLIN).date, int(MIDNIGHT.timestamp()))


class TestResampleForecast(unittest.TestCase):
    def test_eight_days_with_non_decreasing_dates(self):
        # 24 * 8 + 1 fetched, final hour trimmed by the provider.
        weather = resample_forecast(
            _forecast(24 * 8), now=MIDNIGHT + dt.timedelta(hours=10, minutes=30), tz=BERLIN
        )
        self.assertEqual(len(weather.forecast), 8)
        dates = [d.date for d in weather.forecast]
        self.assertEqual(dates, sorted(dates))
        self.assertEqual(dates[0], int(MIDNIGHT.timestamp()))
        self.assertEqual(dates[1] - dates[0], 86400)
        self.assertEqual(weather.weather_provider, "BrightSky")

    def test_short_final_bucket_still_counts(self):
        weather = resample_forecast(_forecast(24 * 8 - 1), now=MIDNIGHT, tz=BERLIN)
        self.assertEqual(len(weather.forecast), 8)

    def test_current_conditions_track_latest_elapsed_hour(self):
        samples = _forecast()
        samples[10] = _sample(10, temperature=71.7, humidity=44, wind=9.9, icon="10d")
        samples[11] = _sample(11, temperature=99.0, humidity=10, wind=30.0, icon="11d")
        now = MIDNIGHT + dt.timedelta(hours=10, minutes=30)

        weather = resample_forecast(samples, now=now, tz=BERLIN)

        self.assertEqual(weather.temp, 71)
        self.assertEqual(weather.humidity, 44)
        self.assertEqual(weather.wind, 9)
        self.assertEqual(weather.icon, "10d")

    def test_current_uses_first_sample_before_any_hour_elapsed(self):
        samples = _forecast()
        samples[0] = _sample(0, temperature=41.9, wind=2.5, icon="02n")
        weather = resample_forecast(samples, now=MIDNIGHT - dt.timedelta(minutes=5), tz=BERLIN)
        self.assertEqual(weather.temp, 41)
        self.assertEqual(weather.wind, 2)
        self.assertEqual(weather.icon, "02n")

    def test_today_totals_and_flooring(self):
        samples = _forecast()
        samples[0] = _sample(0, temperature=48.6)
        samples[5] = _sample(5, precipitation=0.125)
        samples[30] = _sample(30, temperature=20.2)

        weather = resample_forecast(samples, now=MIDNIGHT + dt.timedelta(hours=2), tz=BERLIN)

        self.assertEqual(weather.min_temp, 48)
        self.assertEqual(weather.max_temp, 73)
        self.assertEqual(weather.precip, 0.125)
        self.assertEqual(weather.forecast[0].temp_min, 48)
        self.assertEqual(weather.forecast[1].temp_min, 20)
        self.assertEqual(weather.forecast[0].precip, 0.125)

    def test_missing_current_humidity_stays_missing(self):
        samples = [_sample(i, humidity=None) for i in range(48)]
        weather = resample_forecast(samples, now=MIDNIGHT + dt.timedelta(hours=3), forecast_days=2, tz=BERLIN)
        self.assertIsNone(weather.humidity)

    def test_empty_forecast_raises(self):
        with self.assertRaises(InsufficientWeatherDataError):
            resample_forecast([], now=MIDNIGHT, tz=BERLIN)

    def test_serializes_with_camel_case(self):
        payload = resample_forecast(_forecast(), now=MIDNIGHT, tz=BERLIN).model_dump(by_alias=True)
        self.assertIn("minTemp", payload)
        self.assertIn("tempMin", payload["forecast"][0])


if __name__ == "__main__":
    unittest.main()
