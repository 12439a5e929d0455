"""Static per-carrier limits consumed by the validators.

A CarrierCapability is built once per carrier (in code or from config)
and shared read-only by every rating request.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from freightrate.services.freight_constants import (
    DEFAULT_MAXIMUM_HEIGHT_IN,
    DEFAULT_MAXIMUM_WEIGHT_LBS,
    DEFAULT_MINIMUM_OVERLENGTH_IN,
)
from freightrate.services.units import Length, Weight, inches, pounds


@dataclass(frozen=True)
class CarrierCapability:
    """What a carrier can physically handle and which accessorials it offers.

    Attributes:
        name: Carrier display name or SCAC.
        maximum_height: Tallest handling unit accepted.
        maximum_weight: Heaviest shipment accepted (all packages combined).
        minimum_length_for_overlength_fees: Longest side at which overlength
            fees start.
        overlength_fees_require_tariff: True when the carrier does not quote
            overlength fees itself, so a tariff must supply them.
        mappable: Accessorial code → carrier-specific code.
        unquotable: Accessorials accepted but not priced by the carrier.
        unserviceable: Accessorials the carrier rejects outright.
    """

    name: str = ""
    maximum_height: Length = field(default_factory=lambda: inches(DEFAULT_MAXIMUM_HEIGHT_IN))
    maximum_weight: Weight = field(default_factory=lambda: pounds(DEFAULT_MAXIMUM_WEIGHT_LBS))
    minimum_length_for_overlength_fees: Length = field(
        default_factory=lambda: inches(DEFAULT_MINIMUM_OVERLENGTH_IN)
    )
    overlength_fees_require_tariff: bool = True
    mappable: Mapping[str, str] = field(default_factory=dict)
    unquotable: Iterable[str] = field(default_factory=frozenset)
    unserviceable: Iterable[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.mappable, Mapping):
            raise TypeError("mappable must be a mapping of accessorial code to carrier code")
        for name in ("unquotable", "unserviceable"):
            if isinstance(getattr(self, name), (str, bytes)):
                raise TypeError(f"{name} must be a collection of accessorial codes, not a string")
        # Freeze the accessorial tables so a shared capability cannot drift
        object.__setattr__(self, "mappable", MappingProxyType(dict(self.mappable)))
        object.__setattr__(self, "unquotable", frozenset(self.unquotable))
        object.__setattr__(self, "unserviceable", frozenset(self.unserviceable))
