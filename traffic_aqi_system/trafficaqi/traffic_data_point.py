"""
Traffic data point module for the Traffic AQI System.

This module defines the TrafficDataPoint dataclass which represents one hour
slot of a generated traffic-and-air-quality series for a city.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrafficDataPoint:
    """
    One hourly observation of a generated series.

    Points are created fresh on each generation request and never mutated.

    Attributes:
        id: Sequence index within the series (0 = oldest hour)
        time_slot: Hour label formatted as "HH:00"
        vehicle_count: Vehicles per hour (>= 0)
        heavy_vehicle_count: Heavy vehicles per hour (<= vehicle_count)
        avg_speed: Average speed in km/h (>= 5)
        aqi: Air Quality Index (>= 30)
        pm25: PM2.5 concentration (>= 15)
    """

    id: int
    time_slot: str
    vehicle_count: int
    heavy_vehicle_count: int
    avg_speed: int
    aqi: int
    pm25: int

    def to_dict(self) -> dict[str, object]:
        """Converts the point to a serializable dictionary."""
        return {
            "id": self.id,
            "time_slot": self.time_slot,
            "vehicle_count": self.vehicle_count,
            "heavy_vehicle_count": self.heavy_vehicle_count,
            "avg_speed": self.avg_speed,
            "aqi": self.aqi,
            "pm25": self.pm25,
        }
