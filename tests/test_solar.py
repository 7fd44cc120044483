import datetime as dt
import math
import unittest
from zoneinfo import ZoneInfo

from irrigation_weather.records import CloudCoverInfo
from irrigation_weather.solar import (
    approximate_solar_radiation,
    clear_sky_insolation,
    cloud_attenuation,
    solar_elevation,
)

UTC = dt.timezone.utc
BERLIN = (52.52, 13.40)


def _day(cloud_cover: float, day=dt.datetime(2024, 6, 21, tzinfo=UTC)):
    return [
        CloudCoverInfo(
            start_time=day + dt.timedelta(hours=h),
            end_time=day + dt.timedelta(hours=h + 1),
            cloud_cover=cloud_cover,
        )
        for h in range(24)
    ]


class TestSolarPosition(unittest.TestCase):
    def test_noon_elevation_near_summer_solstice(self):
        # Solar noon in Berlin is about 11:07 UTC; max elevation is ~61°.
        elevation = math.degrees(solar_elevation(dt.datetime(2024, 6, 21, 11, 7, tzinfo=UTC), *BERLIN))
        self.assertAlmostEqual(elevation, 90 - 52.52 + 23.44, delta=1.0)

    def test_sun_is_below_horizon_at_midnight(self):
        self.assertLess(solar_elevation(dt.datetime(2024, 6, 21, 23, 0, tzinfo=UTC), *BERLIN), 0)

    def test_insolation_is_never_negative(self):
        self.assertEqual(clear_sky_insolation(-0.3), 0.0)
        self.assertAlmostEqual(clear_sky_insolation(math.pi / 2), 960.0)


class TestApproximateSolarRadiation(unittest.TestCase):
    def test_clear_summer_day(self):
        total = approximate_solar_radiation(_day(0.0), BERLIN)
        self.assertGreater(total, 6.0)
        self.assertLess(total, 10.0)

    def test_clouds_reduce_radiation(self):
        clear = approximate_solar_radiation(_day(0.0), BERLIN)
        overcast = approximate_solar_radiation(_day(1.0), BERLIN)
        self.assertAlmostEqual(overcast, clear * cloud_attenuation(1.0))
        self.assertAlmostEqual(cloud_attenuation(1.0), 0.25)

    def test_night_only_is_zero(self):
        night = dt.datetime(2024, 12, 21, 20, 0, tzinfo=UTC)
        intervals = [CloudCoverInfo(night, night + dt.timedelta(hours=1), 0.0)]
        self.assertEqual(approximate_solar_radiation(intervals, BERLIN), 0.0)

    def test_local_intervals_across_dst_end_integrate_elapsed_time(self):
        berlin = ZoneInfo("Europe/Berlin")
        sydney = (-33.87, 151.21)  # daylight while Berlin repeats 02:00
        first = dt.datetime(2024, 10, 27, 0, 0, tzinfo=UTC)
        utc_intervals = [
            CloudCoverInfo(first + dt.timedelta(hours=h), first + dt.timedelta(hours=h + 1), 0.2)
            for h in range(2)
        ]
        local_intervals = [
            CloudCoverInfo(i.start_time.astimezone(berlin), i.end_time.astimezone(berlin), i.cloud_cover)
            for i in utc_intervals
        ]

        expected = approximate_solar_radiation(utc_intervals, sydney)

        self.assertGreater(expected, 0.0)
        self.assertAlmostEqual(approximate_solar_radiation(local_intervals, sydney), expected)

    def test_winter_gets_less_than_summer(self):
        winter = approximate_solar_radiation(_day(0.0, dt.datetime(2024, 12, 21, tzinfo=UTC)), BERLIN)
        summer = approximate_solar_radiation(_day(0.0), BERLIN)
        self.assertLess(winter, summer)


if __name__ == "__main__":
    unittest.main()
