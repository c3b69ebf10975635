"""
Synthetic data generator module for the Traffic AQI System.

This module contains the TrafficDataGenerator class which produces an hourly
time series of traffic and air quality figures for a city. The series is a
trailing 24-hour window ending at the current wall-clock hour, shaped by
daypart traffic multipliers and bounded random jitter.

The generation model per hour:
- Traffic: city baseline scaled by daypart (peak 1.8, night 0.2, day 0.9)
- Heavy vehicles: 10% by day, 40% at night, with per-city night overrides
- Speed: falls linearly with traffic against a capacity of 3000 vehicles/h
- AQI: background share of the city baseline plus car, truck and weather terms
"""

import math
import numbers
from datetime import datetime
from typing import Callable, Iterator, Optional

import numpy as np

from .city import City
from .city_catalog import CityCatalog
from .traffic_data_point import TrafficDataPoint


class TrafficDataGenerator:
    """
    Generator of synthetic hourly traffic-and-AQI series.

    Every call draws fresh randomness, so two series for the same city share
    shape and invariants but not values. Pass a seeded numpy Generator and a
    fixed clock to make the output reproducible.
    """

    DEFAULT_COUNT = 24

    PEAK_HOURS = frozenset(list(range(8, 12)) + list(range(17, 21)))

    # Traffic multipliers per daypart
    PEAK_MULTIPLIER = 1.8
    NIGHT_MULTIPLIER = 0.2
    DAY_MULTIPLIER = 0.9
    TRAFFIC_JITTER = 100.0

    DAY_HEAVY_RATIO = 0.10
    NIGHT_HEAVY_RATIO = 0.40

    # Speed model: MAX_SPEED - (vehicles / ROAD_CAPACITY) * SPEED_DROP
    MAX_SPEED = 60.0
    ROAD_CAPACITY = 3000.0
    SPEED_DROP = 50.0
    SPEED_JITTER = 5.0
    MIN_SPEED = 5.0

    # AQI composition
    BACKGROUND_SHARE = 0.4
    CAR_EMISSION = 0.05
    TRUCK_EMISSION = 0.35
    IDLING_SPEED = 15.0
    IDLING_PENALTY = 1.5
    WEATHER_JITTER = 10.0
    MIN_AQI = 30
    PM25_RATIO = 0.55
    MIN_PM25 = 15

    def __init__(
        self,
        catalog: CityCatalog,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initializes the generator.

        Args:
            catalog: City catalog used to resolve city ids and overrides
            rng: Optional numpy random Generator; a fresh unseeded one is
                 created if omitted
            clock: Optional callable returning the current datetime; used to
                   anchor the trailing window (defaults to datetime.now)
        """
        self.catalog = catalog
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock if clock is not None else datetime.now

    @staticmethod
    def hour_for_index(index: int, count: int, current_hour: int) -> int:
        """Maps a series index to an hour of day; the last index is the current hour."""
        return (current_hour - (count - 1) + index) % 24

    @classmethod
    def daypart(cls, hour: int) -> str:
        """Classifies an hour of day as "peak", "night" or "day"."""
        if hour in cls.PEAK_HOURS:
            return "peak"
        if hour >= 23 or hour <= 5:
            return "night"
        return "day"

    def generate(self, city_id: str, count: int = DEFAULT_COUNT) -> Iterator[TrafficDataPoint]:
        """
        Lazily generates a series for a catalog city.

        Unknown city ids resolve to the catalog's default city.

        Args:
            city_id: Identifier of the city to simulate
            count: Number of hourly points (positive)

        Returns:
            Iterator yielding `count` points, oldest hour first
        """
        return self.generate_for_city(self.catalog.get(city_id), count)

    def generate_for_city(self, city: City, count: int = DEFAULT_COUNT) -> Iterator[TrafficDataPoint]:
        """
        Lazily generates a series for an arbitrary City (e.g. a custom map area).

        Raises:
            ValueError: If count is not a positive integer
        """
        if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")

        # Read the clock once so the window is consistent even if iterated slowly
        current_hour = self._clock().hour
        return self._iter_points(city, count, current_hour)

    def _iter_points(self, city: City, count: int, current_hour: int) -> Iterator[TrafficDataPoint]:
        for index in range(count):
            hour = self.hour_for_index(index, count, current_hour)
            yield self._make_point(city, index, hour)

    def generate_series(self, city_id: str, count: int = DEFAULT_COUNT) -> list[TrafficDataPoint]:
        """Eagerly generates a series as a list."""
        return list(self.generate(city_id, count))

    def current_stats(self, city_id: str) -> TrafficDataPoint:
        """Returns a single point for the current hour."""
        return next(self.generate(city_id, 1))

    def _make_point(self, city: City, index: int, hour: int) -> TrafficDataPoint:
        part = self.daypart(hour)
        is_night = part == "night"

        multiplier = {
            "peak": self.PEAK_MULTIPLIER,
            "night": self.NIGHT_MULTIPLIER,
            "day": self.DAY_MULTIPLIER,
        }[part]
        traffic = city.base_traffic * multiplier
        traffic += self._rng.uniform(-self.TRAFFIC_JITTER, self.TRAFFIC_JITTER)
        # Small custom-area baselines can go negative at night
        traffic = max(0.0, traffic)

        heavy_ratio = self.NIGHT_HEAVY_RATIO if is_night else self.DAY_HEAVY_RATIO
        if is_night:
            heavy_ratio = self.catalog.night_heavy_ratio(city.id, heavy_ratio)

        heavy_vehicle_count = math.floor(traffic * heavy_ratio)
        vehicle_count = math.floor(traffic)

        avg_speed = self.MAX_SPEED - (vehicle_count / self.ROAD_CAPACITY) * self.SPEED_DROP
        avg_speed += self._rng.uniform(-self.SPEED_JITTER, self.SPEED_JITTER)
        avg_speed = max(self.MIN_SPEED, avg_speed)

        speed_penalty = self.IDLING_PENALTY if avg_speed < self.IDLING_SPEED else 1.0

        aqi = city.base_aqi * self.BACKGROUND_SHARE
        aqi += vehicle_count * self.CAR_EMISSION * speed_penalty
        aqi += heavy_vehicle_count * self.TRUCK_EMISSION
        aqi += self._rng.uniform(-self.WEATHER_JITTER, self.WEATHER_JITTER)
        aqi_value = math.floor(max(self.MIN_AQI, aqi))

        pm25 = math.floor(max(self.MIN_PM25, aqi_value * self.PM25_RATIO))

        return TrafficDataPoint(
            id=index,
            time_slot=f"{hour:02d}:00",
            vehicle_count=vehicle_count,
            heavy_vehicle_count=heavy_vehicle_count,
            avg_speed=math.floor(avg_speed),
            aqi=aqi_value,
            pm25=pm25,
        )
