class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is invalid or violates domain rules."""


class InvalidRateError(ValidationError):
    """Raised when an attendance rate outside [0, 100] reaches the evaluator."""


class ConfigurationError(DomainError):
    """Raised when standing thresholds are inconsistent (e.g. mahroom >= tasdiq)."""
