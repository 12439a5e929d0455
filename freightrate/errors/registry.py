"""Error code registry with E-XXXX format codes.

This module defines the error code system for freightrate, organizing
errors into categories:
- E-1xxx: Input data errors
- E-2xxx: Serviceability errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    DATA = "data"  # E-1xxx: Input data errors
    SERVICEABILITY = "serviceability"  # E-2xxx: Carrier cannot service


@dataclass(frozen=True)
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether the operation can be retried without changes.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


# Error registry - all defined error codes
ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Data errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.DATA,
        title="Invalid Package",
        message_template="Package is invalid: {reason}.",
        remediation="Correct the quantity, packaging, weight, or dimensions and retry.",
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.DATA,
        title="Invalid Tariff",
        message_template="Tariff is invalid: {reason}.",
        remediation="Fix the overlength rule definitions in the tariff.",
    ),
    # Serviceability errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.SERVICEABILITY,
        title="Unserviceable Shipment",
        message_template="{reason}",
        remediation="Split the shipment, reduce its size or weight, or choose another carrier.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.SERVICEABILITY,
        title="Unserviceable Accessorials",
        message_template="Unable to service {accessorials}",
        remediation="Remove the listed accessorials or choose a carrier that offers them.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category.

    Args:
        category: The error category to filter by.

    Returns:
        List of ErrorCode objects in the specified category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
