class TrafficAQIError(Exception):
    """Base exception for all Traffic AQI System errors."""
    pass

class InvalidScenarioError(TrafficAQIError):
    """Raised when a prediction scenario has out-of-range values."""
    pass

class ConfigurationError(TrafficAQIError):
    """Raised when configuration is invalid."""
    pass
