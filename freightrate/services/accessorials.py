"""Accessorial serviceability checks.

Each carrier declares three accessorial sets: mappable (code → carrier
code), unquotable (accepted, not priced), and unserviceable. A requested
code the carrier does not declare at all is unserviceable.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from freightrate.errors import UnserviceableAccessorialsError
from freightrate.services.carrier_capability import CarrierCapability

logger = logging.getLogger(__name__)


def _code(accessorial: str | Enum) -> str:
    if isinstance(accessorial, Enum):
        return str(accessorial.value)
    return str(accessorial)


def unserviceable_accessorials(
    capability: CarrierCapability,
    accessorials: Iterable[str] | None,
) -> list[str]:
    """Return requested codes the carrier cannot service, in request order."""
    rejected: list[str] = []
    for accessorial in accessorials or ():
        code = _code(accessorial)
        if code in capability.unserviceable:
            rejected.append(code)
        elif code in capability.mappable or code in capability.unquotable:
            continue
        else:
            rejected.append(code)
    return list(dict.fromkeys(rejected))


def serviceable_accessorials(
    capability: CarrierCapability,
    accessorials: Iterable[str] | None,
) -> bool:
    """Check requested accessorials against the carrier's declared sets.

    Returns:
        True when every requested accessorial is mappable or unquotable.

    Raises:
        UnserviceableAccessorialsError: Listing the rejected codes.
    """
    rejected = unserviceable_accessorials(capability, accessorials)
    if rejected:
        logger.info("%s rejects accessorials: %s", capability.name or "Carrier", rejected)
        raise UnserviceableAccessorialsError(accessorials=rejected)
    return True


def map_accessorials(
    capability: CarrierCapability,
    accessorials: Iterable[str] | None,
) -> list[str]:
    """Validate, then translate accessorials into carrier-specific codes.

    Unquotable accessorials pass validation but have no carrier code, so
    they are left out of the result.
    """
    requested = [_code(a) for a in accessorials or ()]
    serviceable_accessorials(capability, requested)

    mapped: list[str] = []
    for code in dict.fromkeys(requested):
        carrier_code = capability.mappable.get(code)
        if carrier_code is not None:
            mapped.append(carrier_code)
    return mapped
