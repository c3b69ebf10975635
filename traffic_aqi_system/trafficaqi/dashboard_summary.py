"""
Dashboard summary module for the Traffic AQI System.

This module defines the DashboardSummary dataclass which aggregates a
generated series into the headline figures of the city dashboard.
"""

import math
from dataclasses import dataclass

from .city import City
from .traffic_data_point import TrafficDataPoint


@dataclass(frozen=True)
class DashboardSummary:
    """
    Headline figures for a city's 24-hour series.

    Attributes:
        city: The city the series belongs to
        series: The generated points, oldest first
        current: The most recent point of the series
        average_aqi: Mean AQI over the series, rounded half up
        peak_aqi: Highest AQI in the series
        peak_traffic: Highest vehicle count in the series
        traffic_contribution_pct: Share of the peak AQI above the city's
            baseline, in percent; 0 when the peak stays at or below baseline
    """

    city: City
    series: tuple[TrafficDataPoint, ...]
    current: TrafficDataPoint
    average_aqi: int
    peak_aqi: int
    peak_traffic: int
    traffic_contribution_pct: int

    @classmethod
    def from_series(cls, city: City, series: list[TrafficDataPoint]) -> "DashboardSummary":
        """
        Aggregates a non-empty series.

        Raises:
            ValueError: If the series is empty
        """
        if not series:
            raise ValueError("Cannot summarize an empty series")

        mean_aqi = sum(p.aqi for p in series) / len(series)
        peak_aqi = max(p.aqi for p in series)
        return cls(
            city=city,
            series=tuple(series),
            current=series[-1],
            average_aqi=math.floor(mean_aqi + 0.5),
            peak_aqi=peak_aqi,
            peak_traffic=max(p.vehicle_count for p in series),
            traffic_contribution_pct=traffic_contribution_pct(peak_aqi, city.base_aqi),
        )


def traffic_contribution_pct(peak_aqi: float, base_aqi: float) -> int:
    """
    Percentage of the peak AQI attributable to traffic above the baseline.

    Computed as (peak - base) / peak * 100, rounded half up and floored at 0.
    """
    if peak_aqi <= 0:
        return 0
    share = (peak_aqi - base_aqi) / peak_aqi * 100
    return max(0, math.floor(share + 0.5))
