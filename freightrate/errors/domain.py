"""Typed domain exceptions raised by the rating engine.

Callers catch specific exception types rather than matching message
strings. Every exception carries an E-XXXX code from the registry and
renders its message from that code's template.

Usage:
    try:
        validate_packages(capability, packages, tariff)
    except UnserviceableError as e:
        reject_quote(str(e))
"""

from collections.abc import Iterable

from freightrate.errors.registry import get_error


def _render(code: str, **context: object) -> str:
    """Render the registry message template for code."""
    error_def = get_error(code)
    if error_def is None:
        return f"Unknown error: {code}"
    return error_def.message_template.format(**context)


class FreightRateError(Exception):
    """Base exception for all rating engine errors."""

    code: str = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidPackageError(FreightRateError, ValueError):
    """Malformed package construction input. Not retryable."""

    code = "E-1001"

    def __init__(self, reason: str) -> None:
        super().__init__(_render(self.code, reason=reason))
        self.reason = reason


class InvalidTariffError(FreightRateError, ValueError):
    """Malformed tariff or overlength rule."""

    code = "E-1002"

    def __init__(self, reason: str) -> None:
        super().__init__(_render(self.code, reason=reason))
        self.reason = reason


class UnserviceableError(FreightRateError):
    """Shipment exceeds carrier limits or lacks a required tariff.

    Attributes:
        violations: Individual violation messages, uncapitalized.
    """

    code = "E-2001"

    def __init__(self, message: str, violations: Iterable[str] | None = None) -> None:
        super().__init__(_render(self.code, reason=message))
        self.violations = list(violations) if violations is not None else [message]


class UnserviceableAccessorialsError(UnserviceableError):
    """One or more requested accessorials cannot be serviced.

    Attributes:
        accessorials: The offending accessorial codes.
    """

    code = "E-2002"

    def __init__(self, accessorials: Iterable[str]) -> None:
        ordered = list(dict.fromkeys(str(a) for a in accessorials))
        readable = ", ".join(a.replace("_", " ") for a in ordered)
        FreightRateError.__init__(self, _render(self.code, accessorials=readable))
        self.violations = ordered
        self.accessorials = frozenset(ordered)
