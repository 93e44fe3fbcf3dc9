"""
Custom exceptions for the Springz admin service.

These exceptions carry a message and a machine-readable code so API
handlers can map them onto standardized error responses.
"""


class StorefrontError(Exception):
    """Base exception for all storefront business logic errors."""

    def __init__(self, message: str, code: str = "STOREFRONT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(StorefrontError):
    """Invalid input data."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class InvalidRangeError(ValidationError):
    """Unrecognized analytics range token (strict mode only)."""

    def __init__(self, token, valid_ranges):
        self.token = token
        self.valid_ranges = tuple(valid_ranges)
        message = f"Invalid range '{token}'. Expected one of: {', '.join(self.valid_ranges)}"
        super().__init__(message, "range")


class AnalyticsError(StorefrontError):
    """A report could not be computed. Wraps the underlying store failure."""

    def __init__(self, message: str = "Failed to compute analytics", original_error: Exception = None):
        self.original_error = original_error
        super().__init__(message, "ANALYTICS_FAILED")


class AnalyticsQueryError(AnalyticsError):
    """One aggregate in a report fan-out failed."""

    def __init__(self, query_name: str, original_error: Exception = None):
        self.query_name = query_name
        super().__init__(f"Analytics query '{query_name}' failed", original_error)
