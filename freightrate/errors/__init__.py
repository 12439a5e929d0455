"""Error handling framework for freightrate.

This package provides:
- Typed domain exceptions raised by the rating engine
- Error code registry with E-XXXX format codes
- Error formatting for display

Error categories:
- E-1xxx: Input data errors
- E-2xxx: Serviceability errors
"""

from freightrate.errors.domain import (
    FreightRateError,
    InvalidPackageError,
    InvalidTariffError,
    UnserviceableAccessorialsError,
    UnserviceableError,
)
from freightrate.errors.formatter import format_error
from freightrate.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Domain
    "FreightRateError",
    "InvalidPackageError",
    "InvalidTariffError",
    "UnserviceableError",
    "UnserviceableAccessorialsError",
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Formatter
    "format_error",
]
