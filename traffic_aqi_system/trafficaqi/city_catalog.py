"""
City catalog module for the Traffic AQI System.

This module contains the CityCatalog class, a read-only configuration object
holding the ordered list of known cities and the per-city overrides used by
the data generator. The default catalog is built explicitly through
build_default_catalog() and passed to the components that need it.
"""

import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence

from .city import City

logger = logging.getLogger(__name__)

DEFAULT_CITIES: tuple[City, ...] = (
    City("delhi", "New Delhi", 28.61, 77.20, 180, 2200,
         "Capital territory with extremely high vehicular density."),
    City("mumbai", "Mumbai", 19.07, 72.87, 120, 2500,
         "Coastal metropolis with high congestion but better airflow."),
    City("bangalore", "Bengaluru", 12.97, 77.59, 90, 2000,
         "IT Hub with notorious slow-moving peak hour traffic."),
    City("chennai", "Chennai", 13.08, 80.27, 80, 1600,
         "Major port city with moderate humidity and density."),
    City("kolkata", "Kolkata", 22.57, 88.36, 140, 1500,
         "Dense urban fabric with older vehicle fleet."),
    City("hyderabad", "Hyderabad", 17.38, 78.48, 100, 1700,
         "Growing metro with expanding orbital traffic."),
    City("pune", "Pune", 18.52, 73.85, 95, 1400,
         "Educational hub with high two-wheeler density."),
    City("jaipur", "Jaipur", 26.91, 75.78, 110, 1100,
         "Tourist center with seasonal traffic spikes."),
    City("lucknow", "Lucknow", 26.84, 80.94, 150, 1200,
         "Northern plains city with low wind speeds."),
    City("ahmedabad", "Ahmedabad", 23.02, 72.57, 115, 1600,
         "Industrial hub with heavy transport movement."),
)

# Delhi restricts heavy vehicle entry to night hours, so its night share is higher
DEFAULT_NIGHT_HEAVY_RATIO_OVERRIDES: dict[str, float] = {
    "delhi": 0.55,
}


class CityCatalog:
    """
    Read-only, ordered collection of cities.

    The first city is the default: unknown identifiers resolve to it instead
    of failing, so the time-series pipeline stays total.

    Attributes:
        night_heavy_ratio_overrides: Read-only mapping of city id to the
            heavy-vehicle ratio used during night hours for that city
    """

    def __init__(
        self,
        cities: Sequence[City],
        night_heavy_ratio_overrides: Optional[Mapping[str, float]] = None,
    ) -> None:
        if not cities:
            raise ValueError("CityCatalog requires at least one city")
        ids = [city.id for city in cities]
        if len(set(ids)) != len(ids):
            raise ValueError("CityCatalog city ids must be unique")

        self._cities: tuple[City, ...] = tuple(cities)
        self._by_id: Mapping[str, City] = MappingProxyType({city.id: city for city in self._cities})
        self.night_heavy_ratio_overrides: Mapping[str, float] = MappingProxyType(
            dict(night_heavy_ratio_overrides or {})
        )

    def __iter__(self) -> Iterator[City]:
        return iter(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, city_id: object) -> bool:
        return city_id in self._by_id

    @property
    def cities(self) -> tuple[City, ...]:
        return self._cities

    @property
    def default_city(self) -> City:
        return self._cities[0]

    def get(self, city_id: str) -> City:
        """
        Resolves a city id against the catalog.

        Args:
            city_id: Identifier to look up

        Returns:
            The matching City, or the default city if the id is unknown
        """
        city = self._by_id.get(city_id)
        if city is None:
            logger.debug("Unknown city id %r, falling back to %r", city_id, self.default_city.id)
            return self.default_city
        return city

    def night_heavy_ratio(self, city_id: str, default: float) -> float:
        """Returns the night heavy-vehicle ratio for a city, or the given default."""
        return self.night_heavy_ratio_overrides.get(city_id, default)


def build_default_catalog() -> CityCatalog:
    """Builds the catalog of ten Indian cities shipped with the dashboard."""
    return CityCatalog(DEFAULT_CITIES, DEFAULT_NIGHT_HEAVY_RATIO_OVERRIDES)
