"""Error formatting for user display."""

from freightrate.errors.domain import FreightRateError
from freightrate.errors.registry import get_error


def format_error(error: FreightRateError, include_remediation: bool = True) -> str:
    """Format error for display to user.

    Args:
        error: The FreightRateError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string suitable for user display.
    """
    error_def = get_error(error.code)
    title = error_def.title if error_def else "Error"
    lines = [f"{error.code}: {title}", f"  {error.message}"]

    violations = getattr(error, "violations", None)
    if violations and len(violations) > 1:
        for violation in violations:
            lines.append(f"  - {violation}")

    if include_remediation and error_def:
        lines.append(f"  Action: {error_def.remediation}")

    return "\n".join(lines)
