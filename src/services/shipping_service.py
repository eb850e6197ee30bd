from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from domain.shipping import Parcel, ShippingOption
from shipping.postal_code import extract_postal_code

GRAMS_THRESHOLD = 50.0
DEFAULT_WEIGHT_KG = 0.3
DEFAULT_BOX = Parcel(weight_kg=0.0, length_cm=20.0, width_cm=15.0, height_cm=10.0)


class ShippingServiceError(Exception):
    pass


class OriginNotConfiguredError(ShippingServiceError):
    pass


class InvalidPostalCodeError(ShippingServiceError):
    pass


class EmptyCartError(ShippingServiceError):
    pass


class NoShippingOptionsError(ShippingServiceError):
    pass


@dataclass(frozen=True)
class CartLine:
    unit_price: Decimal
    quantity: int
    weight: float | None = None


class ShippingQuoteSource(Protocol):
    def get_quotes(
        self,
        origin_postal_code: str,
        dest_postal_code: str,
        parcels: Sequence[Parcel],
        insured_value: float | Decimal,
        *,
        timeout: float | None = None,
    ) -> list[ShippingOption]: ...


class ShippingService:
    def __init__(self, provider: ShippingQuoteSource, origin_postal_code: str) -> None:
        self.provider = provider
        self.origin_postal_code = origin_postal_code

    def calculate_options(
        self,
        destination_postal_code: str,
        lines: Sequence[CartLine],
        *,
        timeout: float | None = None,
    ) -> list[ShippingOption]:
        if not self.origin_postal_code:
            raise OriginNotConfiguredError("shipping origin not configured")
        destination = extract_postal_code(destination_postal_code)
        if not destination:
            raise InvalidPostalCodeError("invalid destination postal code")
        if not lines:
            raise EmptyCartError("cart is empty")

        parcel, insured_value = aggregate_parcel(lines)
        options = self.provider.get_quotes(
            self.origin_postal_code,
            destination,
            [parcel],
            insured_value,
            timeout=timeout,
        )
        if not options:
            raise NoShippingOptionsError("no shipping options available")
        return options


def aggregate_parcel(lines: Sequence[CartLine]) -> tuple[Parcel, Decimal]:
    """Fold cart lines into a single parcel in the default box plus the insured value.

    Item weights above ``GRAMS_THRESHOLD`` are assumed to be grams.
    """
    total_weight_kg = 0.0
    insured_value = Decimal("0")
    for line in lines:
        insured_value += line.unit_price * line.quantity
        if line.weight is None:
            continue
        weight = line.weight / 1000.0 if line.weight > GRAMS_THRESHOLD else line.weight
        total_weight_kg += weight * line.quantity

    if total_weight_kg <= 0:
        total_weight_kg = DEFAULT_WEIGHT_KG
    return DEFAULT_BOX.model_copy(update={"weight_kg": total_weight_kg}), insured_value


__all__ = [
    "CartLine",
    "EmptyCartError",
    "InvalidPostalCodeError",
    "NoShippingOptionsError",
    "OriginNotConfiguredError",
    "ShippingQuoteSource",
    "ShippingService",
    "ShippingServiceError",
    "aggregate_parcel",
]
