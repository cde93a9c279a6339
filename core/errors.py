"""Error taxonomy for the workout map core."""


class WorkoutMapError(Exception):
    """Base class for recoverable workout map errors."""


class ValidationError(WorkoutMapError, ValueError):
    """Raised when form input cannot become a workout record."""


class GeolocationError(WorkoutMapError):
    """Raised when the user's position cannot be determined."""


class PersistenceCorruption(WorkoutMapError):
    """Raised when a persisted workout entry cannot be rebuilt."""
