"""
Regression model module for the Traffic AQI System.

This module contains the AQIRegressionModel class which estimates AQI from a
traffic scenario using a fixed-coefficient linear model:

    AQI = b0 + b1 * VehicleCount * EVFactor + b2 * HeavyVehicleCount + b3 * AvgSpeed

The model layers two policy adjustments on top of the linear combination:
- Odd-even policy removes 40% of vehicles before anything else is computed
- EV adoption scales the per-vehicle coefficient by (1 - adoption * 0.8)

A flat congestion penalty is added below 10 km/h. The coefficients are tuned
constants, not fitted at runtime.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .aqi_classifier import AQIClassifier
from .prediction_input import PredictionInput
from .prediction_result import PredictionResult


@dataclass(frozen=True)
class ModelMetrics:
    """
    Static descriptive metrics of the regression model, for display only.

    Attributes:
        r_squared: Coefficient of determination
        mean_absolute_error: Mean absolute error in AQI points
        training_size: Number of samples the coefficients were tuned on
        features: Human-readable names of the model features
    """

    r_squared: float
    mean_absolute_error: float
    training_size: int
    features: tuple[str, ...]


MODEL_METRICS = ModelMetrics(
    r_squared=0.89,
    mean_absolute_error=12.4,
    training_size=5000,
    features=("Vehicle Flow", "Heavy Transport %", "Average Speed"),
)


def get_model_metrics() -> ModelMetrics:
    """Returns the fixed metrics record of the regression model."""
    return MODEL_METRICS


class AQIRegressionModel:
    """
    Fixed-coefficient linear regression predictor for AQI.

    predict() is a pure function of its input: no hidden state and no
    randomness. Out-of-range inputs are not rejected here; the output is only
    clamped. Use PredictionInput.validate() to reject bad scenarios first.
    """

    INTERCEPT = 35.5
    VEHICLE_COEF = 0.082
    HEAVY_VEHICLE_COEF = 0.48
    SPEED_COEF = -1.15

    # EVs remove at most 80% of per-vehicle emissions (road dust remains)
    EV_EMISSION_REDUCTION = 0.8
    ODD_EVEN_RETENTION = 0.6

    CONGESTION_SPEED = 10
    CONGESTION_PENALTY = 40

    MIN_AQI = 10
    MAX_AQI = 500

    # Narrative thresholds
    SLOW_TRAFFIC_SPEED = 15
    HEAVY_RATIO_THRESHOLD = 0.2
    EV_ADOPTION_THRESHOLD = 0.3
    HIGH_DENSITY_AQI = 200
    OPTIMAL_AQI = 100

    def __init__(self, classifier: Optional[AQIClassifier] = None) -> None:
        self.classifier = classifier if classifier is not None else AQIClassifier()

    def raw_score(self, prediction_input: PredictionInput) -> float:
        """
        Computes the unrounded, unclamped model score for a scenario.

        Args:
            prediction_input: The traffic scenario

        Returns:
            Linear score including the congestion penalty
        """
        vehicle_count = prediction_input.vehicle_count
        if prediction_input.is_odd_even_policy:
            vehicle_count = vehicle_count * self.ODD_EVEN_RETENTION

        heavy_vehicle_count = vehicle_count * prediction_input.heavy_vehicle_ratio
        ev_factor = 1 - prediction_input.ev_adoption * self.EV_EMISSION_REDUCTION

        score = (
            self.INTERCEPT
            + vehicle_count * self.VEHICLE_COEF * ev_factor
            + heavy_vehicle_count * self.HEAVY_VEHICLE_COEF
            + prediction_input.avg_speed * self.SPEED_COEF
        )

        if prediction_input.avg_speed < self.CONGESTION_SPEED:
            score += self.CONGESTION_PENALTY

        return score

    def predict(self, prediction_input: PredictionInput) -> PredictionResult:
        """
        Predicts AQI, category and narrative for a scenario.

        Args:
            prediction_input: The traffic scenario

        Returns:
            PredictionResult with AQI clamped to [10, 500]
        """
        score = self.raw_score(prediction_input)

        # NaN scores go to the minimum; the clamp also bounds infinite scores
        if math.isnan(score):
            score = self.MIN_AQI
        score = max(self.MIN_AQI, min(self.MAX_AQI, score))

        # Round half up, so 10.5 -> 11
        predicted_aqi = math.floor(score + 0.5)

        classification = self.classifier.classify(predicted_aqi)

        return PredictionResult(
            predicted_aqi=predicted_aqi,
            category=classification.category,
            color=classification.color,
            description=f"Air quality is considered {classification.category.value}.",
            impact_analysis=self.generate_insight(predicted_aqi, prediction_input),
        )

    def generate_insight(self, aqi: int, prediction_input: PredictionInput) -> str:
        """
        Builds the impact narrative for a predicted AQI.

        Conditions are evaluated in a fixed priority order and the matching
        sentences are joined with spaces. Predictions below 100 always get the
        single "conditions optimal" sentence.
        """
        if aqi < self.OPTIMAL_AQI:
            return "Conditions are optimal. Traffic flow is smooth and emissions are controlled."

        insights = []

        if prediction_input.avg_speed < self.SLOW_TRAFFIC_SPEED:
            insights.append("Severe congestion is significantly amplifying pollution levels.")

        if prediction_input.heavy_vehicle_ratio > self.HEAVY_RATIO_THRESHOLD:
            insights.append("High volume of diesel-heavy transport is a primary contributor.")

        if prediction_input.ev_adoption > self.EV_ADOPTION_THRESHOLD:
            percentage = _round_half_up(min(prediction_input.ev_adoption, 1.0) * 100)
            insights.append(f"EV adoption of {percentage}% is mitigating potential AQI spikes.")

        if prediction_input.is_odd_even_policy:
            insights.append("Odd-Even policy is active, reducing overall density.")

        if aqi > self.HIGH_DENSITY_AQI and not insights:
            insights.append("Traffic density is simply too high for the current infrastructure.")

        if not insights:
            return "Current traffic mix is resulting in standard emission levels."

        return " ".join(insights)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
