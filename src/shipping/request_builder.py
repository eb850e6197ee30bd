from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from domain.shipping import Parcel
from utils.formatting import format_float_trim

from .models import PackageDimensions, PostalAddress, QuoteOptions, QuoteRequest
from .postal_code import normalize_postal_code


def build_quote_request(
    origin_postal_code: str,
    dest_postal_code: str,
    parcels: Sequence[Parcel],
    insured_value: float | Decimal,
    services: str = "",
) -> QuoteRequest:
    """Map domain inputs onto the upstream quote payload.

    Only the first parcel is sent; additional parcels are ignored. An empty parcel
    list produces a zero-valued package, which the upstream API is free to reject.
    """
    package = PackageDimensions()
    if parcels:
        first = parcels[0]
        package = PackageDimensions(
            weight=first.weight_kg,
            height=first.height_cm,
            width=first.width_cm,
            length=first.length_cm,
        )

    insurance_value = float(insured_value)
    return QuoteRequest(
        from_=PostalAddress(postal_code=normalize_postal_code(origin_postal_code)),
        to=PostalAddress(postal_code=normalize_postal_code(dest_postal_code)),
        services=services,
        options=QuoteOptions(
            insurance_value=insurance_value,
            use_insurance_value=insurance_value > 0,
            own_hand=False,
            receipt=False,
        ),
        package=package,
    )


def quote_fingerprint(request: QuoteRequest) -> str:
    # Rounded so that float noise never splits the cache.
    parts = (
        normalize_postal_code(request.from_.postal_code),
        normalize_postal_code(request.to.postal_code),
        format_float_trim(request.package.weight, 3),
        format_float_trim(request.package.height, 1),
        format_float_trim(request.package.width, 1),
        format_float_trim(request.package.length, 1),
        format_float_trim(request.options.insurance_value, 2),
        request.services,
    )
    return "|".join(parts)


__all__ = ["build_quote_request", "quote_fingerprint"]
