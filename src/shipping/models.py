"""Wire shapes exchanged with the shipping-quote API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PostalAddress(BaseModel):
    postal_code: str


class PackageDimensions(BaseModel):
    weight: float = 0.0
    height: float = 0.0
    width: float = 0.0
    length: float = 0.0


class QuoteOptions(BaseModel):
    insurance_value: float = 0.0
    use_insurance_value: bool = False
    own_hand: bool = False
    receipt: bool = False


class QuoteRequest(BaseModel):
    from_: PostalAddress = Field(alias="from")
    to: PostalAddress
    services: str = ""
    options: QuoteOptions = Field(default_factory=QuoteOptions)
    package: PackageDimensions = Field(default_factory=PackageDimensions)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class ProviderCompany(BaseModel):
    name: str = ""


class ProviderQuote(BaseModel):
    id: int | str | None = None
    name: str = ""
    price: float | None = Field(default=None, allow_inf_nan=False)
    delivery_time: int | None = None
    has_error: bool = False
    company: ProviderCompany | None = None


__all__ = [
    "PackageDimensions",
    "PostalAddress",
    "ProviderCompany",
    "ProviderQuote",
    "QuoteOptions",
    "QuoteRequest",
]
