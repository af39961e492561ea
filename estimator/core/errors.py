class EstimatorError(Exception):
    """Base class for errors raised by the estimation core."""


class ValidationError(EstimatorError, ValueError):
    """Missing or invalid required input (e.g. an empty location)."""


class NotFoundError(EstimatorError, LookupError):
    """A template, project or location-keyed rate record does not exist."""
