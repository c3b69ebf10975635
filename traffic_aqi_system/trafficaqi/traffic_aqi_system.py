"""
Traffic AQI system module for the Traffic AQI System.

This module contains the TrafficAQISystem class, the orchestrator used by the
dashboard. It wires the city catalog, the synthetic data generator, the
regression model and the live lookup adapter together, and owns the policy
for falling back to simulated figures when no live reading is available.
"""

import dataclasses
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Optional

from .air_quality_lookup import AirQualityLookup, LiveAirQuality, estimate_traffic_from_aqi
from .city import City
from .city_catalog import CityCatalog, build_default_catalog
from .city_snapshot import CitySnapshot
from .config import AppConfig
from .dashboard_summary import DashboardSummary
from .data_generator import TrafficDataGenerator
from .dataset_export import series_to_csv
from .exceptions import InvalidScenarioError
from .prediction_input import PredictionInput
from .prediction_result import PredictionResult
from .regression_model import AQIRegressionModel, ModelMetrics, get_model_metrics
from .traffic_data_point import TrafficDataPoint

logger = logging.getLogger(__name__)


class TrafficAQISystem:
    """
    Core orchestrator for the traffic and air quality dashboard.

    Simulation, prediction and lookup stay independent components; this class
    combines them into the views of the dashboard. Live readings, when
    present, override simulated AQI and PM2.5 and drive the traffic estimate.
    Without a reading the simulated figures are used unchanged.
    """

    # Baseline traffic assumed for a point picked off the map
    CUSTOM_AREA_BASE_TRAFFIC = 1500

    # Default scenario for the predictor
    DEFAULT_HEAVY_VEHICLE_RATIO = 0.15
    DEFAULT_AVG_SPEED = 30
    DEFAULT_EV_ADOPTION = 0.05

    LOG_FILE_NAME = "prediction_log.log"

    def __init__(
        self,
        catalog: Optional[CityCatalog] = None,
        generator: Optional[TrafficDataGenerator] = None,
        model: Optional[AQIRegressionModel] = None,
        lookup: Optional[AirQualityLookup] = None,
        config: Optional[AppConfig] = None,
    ) -> None:
        """
        Initialize the system.

        Any component left out is built from the default catalog and the
        given configuration (AppConfig() if none is given).
        """
        self.config = config if config is not None else AppConfig()
        self.catalog = catalog if catalog is not None else build_default_catalog()
        self.generator = generator if generator is not None else TrafficDataGenerator(self.catalog)
        self.model = model if model is not None else AQIRegressionModel()
        self.lookup = lookup if lookup is not None else AirQualityLookup.from_config(self.config)
        self.log_file: Path = Path(self.config.log_dir) / self.LOG_FILE_NAME

    # ==================== Catalog & series ====================

    def cities(self) -> tuple[City, ...]:
        return self.catalog.cities

    def get_city(self, city_id: str) -> City:
        return self.catalog.get(city_id)

    def city_series(self, city_id: str, count: int = TrafficDataGenerator.DEFAULT_COUNT) -> list[TrafficDataPoint]:
        return self.generator.generate_series(city_id, count)

    def dashboard_summary(self, city_id: str) -> DashboardSummary:
        """Generates a fresh 24-hour series for a city and aggregates it."""
        city = self.catalog.get(city_id)
        series = list(self.generator.generate_for_city(city))
        return DashboardSummary.from_series(city, series)

    def export_csv(self, city_id: str) -> str:
        """Renders a fresh 24-hour series for a city as CSV text."""
        return series_to_csv(self.generator.generate(city_id))

    # ==================== Prediction ====================

    def default_scenario(self, city: City) -> PredictionInput:
        """Starting scenario for the predictor, based on the city's traffic baseline."""
        return PredictionInput(
            vehicle_count=city.base_traffic,
            heavy_vehicle_ratio=self.DEFAULT_HEAVY_VEHICLE_RATIO,
            avg_speed=self.DEFAULT_AVG_SPEED,
            ev_adoption=self.DEFAULT_EV_ADOPTION,
            is_odd_even_policy=False,
        )

    def predict_scenario(
        self,
        prediction_input: PredictionInput,
        enable_persistent_logging: bool = False,
    ) -> PredictionResult:
        """
        Validates a scenario and predicts its AQI.

        Args:
            prediction_input: The scenario to evaluate
            enable_persistent_logging: If True, append the prediction to the audit log

        Returns:
            The model's PredictionResult

        Raises:
            InvalidScenarioError: If the scenario has out-of-range values
        """
        valid, reason = prediction_input.validate()
        if not valid:
            logger.info("Rejected scenario: %s", reason)
            raise InvalidScenarioError(reason)

        result = self.model.predict(prediction_input)

        if enable_persistent_logging:
            self._log_prediction(prediction_input, result)

        return result

    def model_metrics(self) -> ModelMetrics:
        return get_model_metrics()

    # ==================== Live data ====================

    def live_readings(self) -> dict[str, Optional[LiveAirQuality]]:
        """Looks up every catalog city in parallel, keyed by city id."""
        coordinates = {city.id: (city.lat, city.lng) for city in self.catalog}
        return self.lookup.fetch_many(coordinates)

    def city_snapshot(self, city_id: str, live: Optional[LiveAirQuality] = None) -> CitySnapshot:
        """
        Current figures for a catalog city.

        Args:
            city_id: City to describe (unknown ids resolve to the default city)
            live: Live reading for the city, if one was fetched

        Returns:
            CitySnapshot with the live reading blended in, or purely simulated
        """
        city = self.catalog.get(city_id)
        stats = next(self.generator.generate_for_city(city, 1))

        if live is None:
            return CitySnapshot(city=city, stats=stats, source="simulated")

        traffic = estimate_traffic_from_aqi(live.aqi, city.base_traffic)
        stats = dataclasses.replace(
            stats,
            aqi=live.aqi,
            pm25=live.pm25,
            vehicle_count=traffic,
            # Heavy vehicles stay a subset of the estimated total
            heavy_vehicle_count=min(stats.heavy_vehicle_count, traffic),
        )
        return CitySnapshot(city=city, stats=stats, source="live", live=live)

    def custom_area(self, lat: float, lng: float) -> CitySnapshot:
        """
        Builds the snapshot for a point picked on the map.

        Uses the live reading for the point when there is one. Otherwise the
        AQI is derived from the coordinate so the same point always shows the
        same value.
        """
        live = self.lookup.fetch_real_air_quality(lat, lng)

        if live is not None:
            aqi = live.aqi
            pm25 = live.pm25
            source = "live"
        else:
            aqi = 50 + math.floor(((lat + lng) * 5000) % 200)
            pm25 = math.floor(aqi * 0.6)
            source = "simulated"

        traffic = estimate_traffic_from_aqi(aqi, self.CUSTOM_AREA_BASE_TRAFFIC)
        city = City.custom_area(lat, lng, base_aqi=aqi, base_traffic=traffic)

        stats = next(self.generator.generate_for_city(city, 1))
        stats = dataclasses.replace(
            stats,
            aqi=aqi,
            pm25=pm25,
            vehicle_count=traffic,
            heavy_vehicle_count=min(stats.heavy_vehicle_count, traffic),
        )
        return CitySnapshot(city=city, stats=stats, source=source, live=live)

    # ==================== Audit log ====================

    def _ensure_log_file_exists(self) -> None:
        """Create the log directory and a log file with a header if needed."""
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_file.exists():
            with open(self.log_file, 'w', encoding='utf-8') as f:
                f.write("# Traffic AQI Prediction Log\n")
                f.write("# Format: [TIMESTAMP] AQI | CATEGORY | VEHICLES | HEAVY% | SPEED | EV% | POLICY\n")
                f.write("# " + "=" * 80 + "\n\n")

    def _log_prediction(self, prediction_input: PredictionInput, result: PredictionResult) -> None:
        """
        Append one prediction to the persistent audit log.

        A failed write is reported through the module logger and does not
        affect the prediction.
        """
        policy_str = "ODD-EVEN" if prediction_input.is_odd_even_policy else "NONE"
        timestamp_str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_line = (
            f"[{timestamp_str}] {result.predicted_aqi:3d} | "
            f"{result.category.value:12s} | "
            f"{prediction_input.vehicle_count:7.0f} veh/h | "
            f"{prediction_input.heavy_vehicle_ratio * 100:3.0f}% heavy | "
            f"{prediction_input.avg_speed:3.0f} km/h | "
            f"{prediction_input.ev_adoption * 100:3.0f}% EV | "
            f"{policy_str}\n"
        )

        try:
            self._ensure_log_file_exists()
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(log_line)
        except OSError as e:
            logger.warning("Could not write prediction log %s: %s", self.log_file, e)
