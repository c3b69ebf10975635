"""
AQI classifier module for the Traffic AQI System.

This module contains the AQIClassifier class which is a pure classifier that
maps a numeric AQI value to its category and display color. It is used by the
regression model to label predictions and by the map view to color markers.
"""

from dataclasses import dataclass

from .aqi_category import AQICategory, AQI_COLORS, AQI_THRESHOLDS


@dataclass(frozen=True)
class AQIClassification:
    """
    Result of classifying an AQI value.

    Attributes:
        category: The AQI category the value falls into
        color: Hex display color associated with the category
    """

    category: AQICategory
    color: str


class AQIClassifier:
    """
    Pure classifier for AQI values.

    Scans the category thresholds in ascending order and returns the first
    bucket whose upper bound is greater than or equal to the value. Upper
    bounds are inclusive, so an AQI of exactly 100 is "Satisfactory", not
    "Moderate". Values above every finite bound fall into "Severe".
    """

    def classify(self, aqi: float) -> AQIClassification:
        """
        Classifies an AQI value into a category and color.

        Args:
            aqi: AQI value (any non-negative real number)

        Returns:
            AQIClassification holding the category and its display color
        """
        category = AQI_THRESHOLDS[-1][1]
        for limit, candidate in AQI_THRESHOLDS:
            if aqi <= limit:
                category = candidate
                break
        return AQIClassification(category=category, color=AQI_COLORS[category])

    def color_for(self, aqi: float) -> str:
        """Returns only the display color for an AQI value."""
        return self.classify(aqi).color
