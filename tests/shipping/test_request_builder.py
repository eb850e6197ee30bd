from __future__ import annotations

from decimal import Decimal

from domain.shipping import Parcel
from shipping.request_builder import build_quote_request, quote_fingerprint

PARCEL = Parcel(weight_kg=1.2, height_cm=10, width_cm=15, length_cm=20)


def test_build_quote_request_normalizes_postal_codes_and_options() -> None:
    request = build_quote_request("01310-100", "20040-020", [PARCEL], 0, services="1,2,17")

    assert request.to_payload() == {
        "from": {"postal_code": "01310100"},
        "to": {"postal_code": "20040020"},
        "services": "1,2,17",
        "options": {
            "insurance_value": 0.0,
            "use_insurance_value": False,
            "own_hand": False,
            "receipt": False,
        },
        "package": {"weight": 1.2, "height": 10.0, "width": 15.0, "length": 20.0},
    }


def test_build_quote_request_enables_insurance_for_positive_value() -> None:
    request = build_quote_request("01310100", "20040020", [PARCEL], Decimal("149.90"))

    assert request.options.use_insurance_value is True
    assert request.options.insurance_value == 149.9


def test_build_quote_request_uses_only_first_parcel() -> None:
    second = Parcel(weight_kg=9, height_cm=90, width_cm=90, length_cm=90)

    request = build_quote_request("01310100", "20040020", [PARCEL, second], 0)

    assert request.package.weight == 1.2
    assert request.package.length == 20


def test_build_quote_request_without_parcels_sends_zero_package() -> None:
    request = build_quote_request("01310100", "20040020", [], 0)

    assert request.package.model_dump() == {"weight": 0.0, "height": 0.0, "width": 0.0, "length": 0.0}


def test_fingerprint_layout() -> None:
    request = build_quote_request("01310-100", "20040-020", [PARCEL], 0, services="1,2,17")

    assert quote_fingerprint(request) == "01310100|20040020|1.2|10|15|20|0|1,2,17"


def test_fingerprint_ignores_formatting_and_float_noise() -> None:
    noisy = Parcel(weight_kg=1.2000000001, height_cm=10.04, width_cm=14.96, length_cm=20.0)

    first = build_quote_request("01310-100", "20040-020", [PARCEL], 100.001, services="1,2")
    second = build_quote_request("01310100", " 20040 020", [noisy], 99.999, services="1,2")

    assert quote_fingerprint(first) == quote_fingerprint(second)


def test_fingerprint_differs_by_services_and_destination() -> None:
    base = quote_fingerprint(build_quote_request("01310100", "20040020", [PARCEL], 0, services="1"))

    assert quote_fingerprint(build_quote_request("01310100", "20040020", [PARCEL], 0, services="2")) != base
    assert quote_fingerprint(build_quote_request("01310100", "20040021", [PARCEL], 0, services="1")) != base
