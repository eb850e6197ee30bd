from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable

from domain.shipping import ShippingOption

from .models import ProviderQuote


def map_provider_quotes(items: Iterable[ProviderQuote]) -> list[ShippingOption]:
    """Convert provider quotes into shipping options, keeping upstream order.

    Items flagged with an error or without a finite positive price are dropped.
    """
    options: list[ShippingOption] = []
    for item in items:
        if item.has_error or item.price is None or not math.isfinite(item.price) or item.price <= 0:
            continue
        options.append(
            ShippingOption(
                carrier=item.company.name if item.company is not None else "",
                service_code=item.name,
                price=Decimal(str(item.price)),
                estimated_days=item.delivery_time or 0,
            )
        )
    return options


__all__ = ["map_provider_quotes"]
