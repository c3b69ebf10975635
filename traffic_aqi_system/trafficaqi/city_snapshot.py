"""
City snapshot module for the Traffic AQI System.

This module defines the CitySnapshot dataclass shown in the map side panel:
the current figures for a city or custom area, either simulated or blended
with a live reading.
"""

from dataclasses import dataclass
from typing import Optional

from .air_quality_lookup import LiveAirQuality
from .city import City
from .traffic_data_point import TrafficDataPoint


@dataclass(frozen=True)
class CitySnapshot:
    """
    Current figures for one location.

    Attributes:
        city: The catalog city or custom area
        stats: Current-hour point; AQI, PM2.5 and vehicle count come from the
               live reading when one is present
        source: "live" if a live reading was used, otherwise "simulated"
        live: The live reading, if any
    """

    city: City
    stats: TrafficDataPoint
    source: str
    live: Optional[LiveAirQuality] = None

    @property
    def is_live(self) -> bool:
        return self.source == "live"
