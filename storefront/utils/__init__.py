"""
Utility modules for the Springz admin service.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    bad_request,
    unauthorized,
    forbidden,
    internal_error
)
from .exceptions import (
    StorefrontError,
    ValidationError,
    InvalidRangeError,
    AnalyticsError,
    AnalyticsQueryError
)
