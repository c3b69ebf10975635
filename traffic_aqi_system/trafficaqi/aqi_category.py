"""
AQI category module for the Traffic AQI System.

This module defines the ordered AQICategory enum together with the display
color of each category and the inclusive upper-bound thresholds used to
classify a numeric AQI value.
"""

from enum import Enum


class AQICategory(Enum):
    """
    Ordered air quality categories, from least to most severe.

    The enum value is the human-readable label used in descriptions and
    exports (e.g. "Very Poor").
    """

    GOOD = "Good"
    SATISFACTORY = "Satisfactory"
    MODERATE = "Moderate"
    POOR = "Poor"
    VERY_POOR = "Very Poor"
    SEVERE = "Severe"

    @property
    def severity(self) -> int:
        """Zero-based rank of the category (0 = Good, 5 = Severe)."""
        return list(AQICategory).index(self)

    def __str__(self) -> str:
        return self.value


AQI_COLORS: dict[AQICategory, str] = {
    AQICategory.GOOD: "#10b981",
    AQICategory.SATISFACTORY: "#84cc16",
    AQICategory.MODERATE: "#eab308",
    AQICategory.POOR: "#f97316",
    AQICategory.VERY_POOR: "#ef4444",
    AQICategory.SEVERE: "#7f1d1d",
}

# Inclusive upper bounds in ascending order; the last bucket catches everything
AQI_THRESHOLDS: tuple[tuple[float, AQICategory], ...] = (
    (50, AQICategory.GOOD),
    (100, AQICategory.SATISFACTORY),
    (200, AQICategory.MODERATE),
    (300, AQICategory.POOR),
    (400, AQICategory.VERY_POOR),
    (float("inf"), AQICategory.SEVERE),
)
