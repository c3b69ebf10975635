"""
Dataset export module for the Traffic AQI System.

Converts a generated series into a pandas DataFrame for tables and charts, and
into CSV text for download.
"""

from typing import Iterable

import pandas as pd

from .traffic_data_point import TrafficDataPoint

EXPORT_COLUMNS = ["TimeSlot", "VehicleCount", "HeavyVehicleCount", "AvgSpeed", "AQI", "PM2.5"]

EXPORT_FILENAME = "traffic_aqi_data.csv"


def series_to_dataframe(points: Iterable[TrafficDataPoint]) -> pd.DataFrame:
    """
    Builds a DataFrame with one row per point and the export column names.

    Args:
        points: Generated traffic data points, in series order

    Returns:
        DataFrame with columns EXPORT_COLUMNS (empty if there are no points)
    """
    rows = [
        [p.time_slot, p.vehicle_count, p.heavy_vehicle_count, p.avg_speed, p.aqi, p.pm25]
        for p in points
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def series_to_csv(points: Iterable[TrafficDataPoint]) -> str:
    """Renders points as comma-separated text with a header row and "\\n" line endings."""
    return series_to_dataframe(points).to_csv(index=False, lineterminator="\n")
