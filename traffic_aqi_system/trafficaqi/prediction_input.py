"""
Prediction input module for the Traffic AQI System.

This module defines the PredictionInput dataclass which represents a traffic
scenario fed to the regression model. It provides validation so callers can
reject out-of-range scenarios before predicting.
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class PredictionInput:
    """
    A traffic scenario adjusted interactively by the user.

    Attributes:
        vehicle_count: Vehicles per hour (must be > 0)
        heavy_vehicle_ratio: Share of heavy vehicles (must be between 0 and 1)
        avg_speed: Average speed in km/h (must be > 0)
        ev_adoption: Share of electric vehicles (must be between 0 and 1)
        is_odd_even_policy: Whether the odd-even restriction is active
    """

    vehicle_count: float
    heavy_vehicle_ratio: float
    avg_speed: float
    ev_adoption: float
    is_odd_even_policy: bool = False

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates all scenario fields against acceptable ranges.

        Checks, in order:
        - every numeric field must be a finite number (no NaN or infinity)
        - vehicle_count must be positive
        - heavy_vehicle_ratio must be between 0 and 1
        - avg_speed must be positive
        - ev_adoption must be between 0 and 1

        Returns:
            A tuple containing:
            - bool: True if all validations pass, False otherwise
            - Optional[str]: None if valid, or a message naming the first invalid field
        """
        for field_name in ("vehicle_count", "heavy_vehicle_ratio", "avg_speed", "ev_adoption"):
            if not math.isfinite(getattr(self, field_name)):
                return (False, f"{field_name} must be a finite number")

        if self.vehicle_count <= 0:
            return (False, "vehicle_count must be > 0")

        if self.heavy_vehicle_ratio < 0 or self.heavy_vehicle_ratio > 1:
            return (False, "heavy_vehicle_ratio must be between 0 and 1")

        if self.avg_speed <= 0:
            return (False, "avg_speed must be > 0")

        if self.ev_adoption < 0 or self.ev_adoption > 1:
            return (False, "ev_adoption must be between 0 and 1")

        return (True, None)
