from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, model_validator


class Parcel(BaseModel):
    """A package to be shipped. Weight in kilograms, dimensions in centimetres."""

    weight_kg: float = 0.0
    length_cm: float = 0.0
    width_cm: float = 0.0
    height_cm: float = 0.0


class ShippingOption(BaseModel, frozen=True):
    """A carrier service level offered for a route, with its price and delivery estimate."""

    carrier: str
    service_code: str
    price: Decimal
    estimated_days: int

    @model_validator(mode="after")
    def _validate_price(self) -> ShippingOption:
        if self.price <= 0:
            raise ValueError("price must be positive")
        return self
