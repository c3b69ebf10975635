"""
Tests for AQIRegressionModel component.

Tests cover:
- Equivalence classes: good, moderate and very poor scenarios
- Boundary value analysis: output clamping, congestion and narrative thresholds
- Error scenarios: out-of-range inputs are clamped, not rejected
- Full decision path coverage: every impact-narrative branch
"""

import pytest
from trafficaqi.aqi_category import AQICategory
from trafficaqi.prediction_input import PredictionInput
from trafficaqi.regression_model import AQIRegressionModel, get_model_metrics


OPTIMAL = "Conditions are optimal. Traffic flow is smooth and emissions are controlled."
CONGESTION = "Severe congestion is significantly amplifying pollution levels."
HEAVY = "High volume of diesel-heavy transport is a primary contributor."
POLICY = "Odd-Even policy is active, reducing overall density."
HIGH_DENSITY = "Traffic density is simply too high for the current infrastructure."
STANDARD = "Current traffic mix is resulting in standard emission levels."


def _scenario(vehicle_count=2200, heavy_vehicle_ratio=0.15, avg_speed=30, ev_adoption=0.05, is_odd_even_policy=False):
    return PredictionInput(
        vehicle_count=vehicle_count,
        heavy_vehicle_ratio=heavy_vehicle_ratio,
        avg_speed=avg_speed,
        ev_adoption=ev_adoption,
        is_odd_even_policy=is_odd_even_policy,
    )


class TestAQIRegressionModel:
    """Test suite for AQIRegressionModel component."""

    @pytest.fixture
    def model(self):
        """Fixture providing an AQIRegressionModel instance."""
        return AQIRegressionModel()

    # ==================== Equivalence Classes ====================

    def test_reference_scenario(self, model):
        """
        Reference arithmetic:
        ev_factor = 0.96, heavy = 330,
        35.5 + 2200*0.082*0.96 + 330*0.48 - 30*1.15 = 332.584 -> 333.
        """
        assert model.raw_score(_scenario()) == pytest.approx(332.584)

        result = model.predict(_scenario())
        assert result.predicted_aqi == 333
        assert result.category == AQICategory.VERY_POOR
        assert result.color == "#ef4444"
        assert result.description == "Air quality is considered Very Poor."
        assert result.impact_analysis == HIGH_DENSITY

    def test_light_traffic_is_good(self, model):
        # 35.5 + 41 + 24 - 57.5 = 43
        result = model.predict(_scenario(vehicle_count=500, heavy_vehicle_ratio=0.1, avg_speed=50, ev_adoption=0))
        assert result.predicted_aqi == 43
        assert result.category == AQICategory.GOOD
        assert result.impact_analysis == OPTIMAL

    def test_moderate_scenario_standard_emissions(self, model):
        # 35.5 + 123 + 72 - 47.15 = 183.35
        result = model.predict(_scenario(vehicle_count=1500, heavy_vehicle_ratio=0.1, avg_speed=41, ev_adoption=0))
        assert result.predicted_aqi == 183
        assert result.category == AQICategory.MODERATE
        assert result.impact_analysis == STANDARD

    # ==================== Decision Path Coverage ====================

    def test_odd_even_scales_vehicles_before_heavy_count(self, model):
        """
        Policy: 2200 -> 1320 vehicles, heavy = 198,
        35.5 + 1320*0.082*0.96 + 198*0.48 - 34.5 = 199.95 -> 200.
        """
        result = model.predict(_scenario(is_odd_even_policy=True))
        assert model.raw_score(_scenario(is_odd_even_policy=True)) == pytest.approx(199.9504)
        assert result.predicted_aqi == 200
        assert result.category == AQICategory.MODERATE
        assert result.impact_analysis == POLICY

    @pytest.mark.parametrize("vehicle_count, avg_speed", [(800, 20), (2200, 30), (3500, 60)])
    def test_odd_even_strictly_lowers_prediction(self, model, vehicle_count, avg_speed):
        without = model.raw_score(_scenario(vehicle_count=vehicle_count, avg_speed=avg_speed))
        with_policy = model.raw_score(_scenario(vehicle_count=vehicle_count, avg_speed=avg_speed, is_odd_even_policy=True))
        assert with_policy < without

    def test_all_contributors_listed_in_priority_order(self, model):
        """
        3000 -> 1800 vehicles, heavy = 540, ev_factor = 0.6,
        35.5 + 88.56 + 259.2 - 13.8 = 369.46 -> 369.
        """
        result = model.predict(_scenario(
            vehicle_count=3000, heavy_vehicle_ratio=0.3, avg_speed=12, ev_adoption=0.5, is_odd_even_policy=True
        ))
        assert result.predicted_aqi == 369
        assert result.impact_analysis == " ".join([
            CONGESTION,
            HEAVY,
            "EV adoption of 50% is mitigating potential AQI spikes.",
            POLICY,
        ])

    def test_optimal_sentence_overrides_triggered_conditions(self, model):
        """Below 100 the optimal sentence wins even when congestion is present."""
        # 35.5 + 9.84 + 28.8 - 13.8 = 60.34
        result = model.predict(_scenario(vehicle_count=200, heavy_vehicle_ratio=0.3, avg_speed=12, ev_adoption=0.5))
        assert result.predicted_aqi == 60
        assert result.impact_analysis == OPTIMAL

    def test_high_density_only_when_nothing_else_triggered(self, model):
        result = model.predict(_scenario(heavy_vehicle_ratio=0.25))
        assert HEAVY in result.impact_analysis
        assert HIGH_DENSITY not in result.impact_analysis

    # ==================== Boundary Value Analysis ====================

    def test_congestion_penalty_below_ten(self, model):
        """Crossing below 10 km/h adds the flat +40 on top of the speed term."""
        at_ten = model.raw_score(_scenario(avg_speed=10))
        below = model.raw_score(_scenario(avg_speed=9))
        assert below - at_ten == pytest.approx(40 + 1.15)

    def test_narrative_thresholds_are_strict(self, model):
        """Speed 15, heavy ratio 0.2 and EV 0.3 do not trigger their sentences."""
        result = model.predict(_scenario(vehicle_count=2000, heavy_vehicle_ratio=0.2, avg_speed=15, ev_adoption=0.3))
        assert result.predicted_aqi >= 100
        assert CONGESTION not in result.impact_analysis
        assert HEAVY not in result.impact_analysis
        assert "EV adoption" not in result.impact_analysis

    def test_output_clamped_to_minimum(self, model):
        result = model.predict(_scenario(vehicle_count=100, heavy_vehicle_ratio=0, avg_speed=100, ev_adoption=0))
        assert model.raw_score(_scenario(vehicle_count=100, heavy_vehicle_ratio=0, avg_speed=100, ev_adoption=0)) < 10
        assert result.predicted_aqi == 10
        assert result.category == AQICategory.GOOD

    def test_output_clamped_to_maximum(self, model):
        result = model.predict(_scenario(vehicle_count=10000, heavy_vehicle_ratio=0.5, avg_speed=5))
        assert result.predicted_aqi == 500
        assert result.category == AQICategory.SEVERE
        assert result.color == "#7f1d1d"

    def test_rounds_half_up(self, model, monkeypatch):
        monkeypatch.setattr(model, "raw_score", lambda _: 12.5)
        assert model.predict(_scenario()).predicted_aqi == 13

    # ==================== Error Scenarios ====================

    def test_negative_inputs_are_clamped_not_rejected(self, model):
        result = model.predict(_scenario(vehicle_count=-5000, heavy_vehicle_ratio=0, avg_speed=200, ev_adoption=0))
        assert result.predicted_aqi == 10
        assert result.impact_analysis == OPTIMAL

    @pytest.mark.parametrize("field", ["vehicle_count", "heavy_vehicle_ratio", "avg_speed", "ev_adoption"])
    def test_nan_input_lands_on_minimum(self, model, field):
        result = model.predict(_scenario(**{field: float("nan")}))
        assert result.predicted_aqi == 10
        assert result.category == AQICategory.GOOD

    def test_infinite_traffic_clamped_to_maximum(self, model):
        result = model.predict(_scenario(vehicle_count=float("inf")))
        assert result.predicted_aqi == 500
        assert result.category == AQICategory.SEVERE

    def test_infinite_ev_adoption_keeps_narrative_total(self, model):
        """A negative count times an unbounded EV share drives the score to +inf."""
        result = model.predict(_scenario(vehicle_count=-100, ev_adoption=float("inf")))
        assert result.predicted_aqi == 500
        assert "EV adoption of 100%" in result.impact_analysis

    def test_infinite_speed_clamped_to_minimum(self, model):
        result = model.predict(_scenario(avg_speed=float("inf")))
        assert result.predicted_aqi == 10

    def test_predict_is_pure(self, model):
        scenario = _scenario(ev_adoption=0.4, is_odd_even_policy=True)
        assert model.predict(scenario) == model.predict(scenario)
        assert scenario.vehicle_count == 2200


class TestModelMetrics:
    """Test suite for the static model metrics accessor."""

    def test_fixed_metrics(self):
        metrics = get_model_metrics()
        assert metrics.r_squared == 0.89
        assert metrics.mean_absolute_error == 12.4
        assert metrics.training_size == 5000
        assert metrics.features == ("Vehicle Flow", "Heavy Transport %", "Average Speed")
