"""
Tests for AQIClassifier component.

Tests cover:
- Equivalence classes: one value inside each category
- Boundary value analysis: inclusive upper bounds 50/100/200/300/400
- Error scenarios: values beyond every finite bound
- Full decision path coverage: monotonic severity and idempotence
"""

import pytest
from trafficaqi.aqi_category import AQICategory, AQI_COLORS
from trafficaqi.aqi_classifier import AQIClassifier


class TestAQIClassifier:
    """Test suite for AQIClassifier component."""

    @pytest.fixture
    def classifier(self):
        """Fixture providing an AQIClassifier instance."""
        return AQIClassifier()

    # ==================== Equivalence Classes ====================

    @pytest.mark.parametrize("aqi, expected", [
        (25, AQICategory.GOOD),
        (75, AQICategory.SATISFACTORY),
        (150, AQICategory.MODERATE),
        (250, AQICategory.POOR),
        (350, AQICategory.VERY_POOR),
        (450, AQICategory.SEVERE),
    ])
    def test_value_inside_each_category(self, classifier, aqi, expected):
        """Equivalence class: a value inside each bucket maps to that bucket."""
        assert classifier.classify(aqi).category == expected

    def test_color_matches_category(self, classifier):
        """Each classification carries the display color of its category."""
        result = classifier.classify(333)
        assert result.category == AQICategory.VERY_POOR
        assert result.color == AQI_COLORS[AQICategory.VERY_POOR] == "#ef4444"

    def test_color_for_shortcut(self, classifier):
        assert classifier.color_for(10) == "#10b981"

    # ==================== Boundary Value Analysis ====================

    @pytest.mark.parametrize("limit, at_limit, above_limit", [
        (50, AQICategory.GOOD, AQICategory.SATISFACTORY),
        (100, AQICategory.SATISFACTORY, AQICategory.MODERATE),
        (200, AQICategory.MODERATE, AQICategory.POOR),
        (300, AQICategory.POOR, AQICategory.VERY_POOR),
        (400, AQICategory.VERY_POOR, AQICategory.SEVERE),
    ])
    def test_limits_are_inclusive(self, classifier, limit, at_limit, above_limit):
        """Boundary: a value equal to a limit belongs to the lower bucket."""
        assert classifier.classify(limit).category == at_limit
        assert classifier.classify(limit + 1).category == above_limit

    def test_fractional_value_just_above_limit(self, classifier):
        """Boundary: 50.5 is already above the Good limit."""
        assert classifier.classify(50.5).category == AQICategory.SATISFACTORY

    def test_zero_is_good(self, classifier):
        """Boundary: the lowest possible AQI."""
        assert classifier.classify(0).category == AQICategory.GOOD

    # ==================== Error Scenarios ====================

    def test_value_beyond_all_limits_is_severe(self, classifier):
        """Values above every finite limit fall into the catch-all bucket."""
        assert classifier.classify(10_000).category == AQICategory.SEVERE
        assert classifier.classify(float("inf")).category == AQICategory.SEVERE

    # ==================== Decision Path Coverage ====================

    def test_severity_is_monotonic(self, classifier):
        """Severity never decreases as AQI increases."""
        severities = [classifier.classify(v / 2).category.severity for v in range(0, 1200)]
        assert severities == sorted(severities)
        assert severities[0] == 0
        assert severities[-1] == AQICategory.SEVERE.severity

    def test_classify_is_idempotent(self, classifier):
        assert classifier.classify(180) == classifier.classify(180)
