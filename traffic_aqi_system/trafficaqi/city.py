"""
City module for the Traffic AQI System.

This module defines the City dataclass, the immutable reference record for a
location whose traffic and air quality are simulated or looked up.
"""

from dataclasses import dataclass

CUSTOM_AREA_ID = "custom_area"


@dataclass(frozen=True)
class City:
    """
    Immutable reference data for a city or an ad hoc map area.

    Attributes:
        id: Stable identifier used for lookups (e.g. "delhi")
        name: Display name
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        base_aqi: Intrinsic baseline pollution level
        base_traffic: Intrinsic baseline traffic volume (vehicles per hour)
        description: Free-text description shown in the UI
    """

    id: str
    name: str
    lat: float
    lng: float
    base_aqi: float
    base_traffic: float
    description: str = ""

    @property
    def is_custom_area(self) -> bool:
        return self.id == CUSTOM_AREA_ID

    @classmethod
    def custom_area(cls, lat: float, lng: float, base_aqi: float, base_traffic: float) -> "City":
        """
        Builds the synthetic City for a point picked on the map.

        The result is never part of the catalog.
        """
        return cls(
            id=CUSTOM_AREA_ID,
            name=f"Area ({lat:.3f}, {lng:.3f})",
            lat=lat,
            lng=lng,
            base_aqi=base_aqi,
            base_traffic=base_traffic,
            description="Custom selected location on map",
        )
