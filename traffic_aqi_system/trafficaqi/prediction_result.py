"""
Prediction result module for the Traffic AQI System.

This module defines the PredictionResult dataclass returned by the regression
model: the predicted AQI, its category and color, and the narrative texts
shown next to the gauge.
"""

from dataclasses import dataclass

from .aqi_category import AQICategory


@dataclass(frozen=True)
class PredictionResult:
    """
    Immutable outcome of a single prediction.

    Attributes:
        predicted_aqi: Predicted AQI, clamped to [10, 500]
        category: AQI category of the prediction
        color: Hex display color for the category
        description: One-sentence description of the category
        impact_analysis: Narrative explaining the main contributors
    """

    predicted_aqi: int
    category: AQICategory
    color: str
    description: str
    impact_analysis: str

    def to_dict(self) -> dict[str, object]:
        return {
            "predicted_aqi": self.predicted_aqi,
            "category": self.category.value,
            "color": self.color,
            "description": self.description,
            "impact_analysis": self.impact_analysis,
        }
