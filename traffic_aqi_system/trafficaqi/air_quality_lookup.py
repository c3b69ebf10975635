"""
Air quality lookup module for the Traffic AQI System.

This module contains the AirQualityLookup class which fetches observed AQI and
PM2.5 readings for a coordinate from the WAQI station feed. Supports two modes:
- "offline": No network access, every lookup reports no data
- "waqi": Real lookups via https://api.waqi.info (requires an API token)

Failures never raise: a lookup either returns a LiveAirQuality or None, and
the caller decides how to fall back to simulated values.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Hashable, Mapping, Optional

import requests

from .config import LOOKUP_MODES, AppConfig

logger = logging.getLogger(__name__)

WAQI_GEO_FEED_URL = "https://api.waqi.info/feed/geo:{lat};{lng}/"


@dataclass(frozen=True)
class LiveAirQuality:
    """
    An observed air quality reading.

    Attributes:
        aqi: Observed AQI (0 if the provider returned a non-numeric value)
        pm25: Observed PM2.5 sub-index, or the AQI when the station has none
        observed_at: When the reading was fetched
    """

    aqi: int
    pm25: int
    observed_at: datetime


def estimate_traffic_from_aqi(observed_aqi: float, baseline_traffic: float) -> int:
    """
    Estimates traffic volume from an observed AQI.

    An AQI of 100 is taken as the baseline for moderate traffic. The scaling
    factor observed_aqi / 100 is clamped between 0.3 (empty roads) and 2.5
    (gridlock) and applied to the baseline.

    Args:
        observed_aqi: Observed AQI value
        baseline_traffic: Typical traffic volume for the location

    Returns:
        Estimated vehicles per hour, floored to an integer
    """
    factor = min(2.5, max(0.3, observed_aqi / 100))
    return math.floor(baseline_traffic * factor)


def _parse_int(value: object) -> int:
    """Parses a provider field as an integer, treating non-numeric values as 0."""
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


class AirQualityLookup:
    """
    Adapter for the WAQI geo feed.

    Each lookup is an independent round trip with no shared state, so lookups
    for many coordinates can run in parallel (see fetch_many). There are no
    retries: a failed call simply reports no data.
    """

    MAX_WORKERS = 10

    def __init__(
        self,
        mode: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 6.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the lookup adapter.

        Args:
            mode: "offline" or "waqi". Defaults to "waqi" when a token is
                  given, otherwise "offline".
            token: WAQI API token
            timeout: HTTP timeout in seconds
            session: Optional requests Session (a module-level requests.get
                     is used when omitted)
        """
        if mode is None:
            mode = "waqi" if token else "offline"
        self.mode = mode.lower()
        if self.mode not in LOOKUP_MODES:
            logger.warning("Unknown lookup mode %r, falling back to offline mode", mode)
            self.mode = "offline"
        if self.mode == "waqi" and not token:
            logger.warning("WAQI lookup requested without a token, falling back to offline mode")
            self.mode = "offline"
        self._token = token
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_config(cls, config: AppConfig) -> "AirQualityLookup":
        return cls(mode=config.lookup_mode, token=config.waqi_token, timeout=config.lookup_timeout)

    @property
    def is_live(self) -> bool:
        return self.mode == "waqi"

    def fetch_real_air_quality(self, lat: float, lng: float) -> Optional[LiveAirQuality]:
        """
        Fetches the observed air quality nearest to a coordinate.

        Args:
            lat: Latitude in decimal degrees
            lng: Longitude in decimal degrees

        Returns:
            LiveAirQuality on success, or None if offline, on a non-success
            status, on a transport failure, or on an unusable response body
        """
        if not self.is_live:
            return None

        url = WAQI_GEO_FEED_URL.format(lat=lat, lng=lng)
        try:
            getter = self._session.get if self._session is not None else requests.get
            response = getter(url, params={"token": self._token}, timeout=self.timeout)
            if not response.ok:
                logger.warning("WAQI lookup for (%s, %s) failed with HTTP %s", lat, lng, response.status_code)
                return None
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("WAQI lookup for (%s, %s) failed: %s", lat, lng, e)
            return None

        return self.parse_feed(payload)

    @staticmethod
    def parse_feed(payload: object) -> Optional[LiveAirQuality]:
        """
        Converts a WAQI feed body into a LiveAirQuality.

        Returns None unless the body reports status "ok".
        """
        if not isinstance(payload, Mapping) or payload.get("status") != "ok":
            return None

        data = payload.get("data")
        if not isinstance(data, Mapping):
            data = {}

        aqi = _parse_int(data.get("aqi"))

        pm25_raw = None
        iaqi = data.get("iaqi")
        if isinstance(iaqi, Mapping):
            pm25_entry = iaqi.get("pm25")
            if isinstance(pm25_entry, Mapping):
                pm25_raw = pm25_entry.get("v")

        # A missing or zero PM2.5 reading falls back to the overall AQI
        pm25 = _parse_int(pm25_raw) if pm25_raw else aqi

        return LiveAirQuality(aqi=aqi, pm25=pm25, observed_at=datetime.now())

    def fetch_many(
        self, coordinates: Mapping[Hashable, tuple[float, float]]
    ) -> dict[Hashable, Optional[LiveAirQuality]]:
        """
        Looks up many coordinates in parallel.

        Args:
            coordinates: Mapping of caller key (e.g. city id) to (lat, lng)

        Returns:
            Mapping of the same keys to each lookup's own outcome
        """
        if not coordinates:
            return {}
        if not self.is_live:
            return {key: None for key in coordinates}

        workers = min(self.MAX_WORKERS, len(coordinates))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                key: executor.submit(self.fetch_real_air_quality, lat, lng)
                for key, (lat, lng) in coordinates.items()
            }
            return {key: future.result() for key, future in futures.items()}
