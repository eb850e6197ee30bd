from __future__ import annotations

import pytest

from shipping.postal_code import extract_postal_code, normalize_postal_code


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("01310-100", "01310100"),
        (" 20040 020 ", "20040020"),
        ("CEP: 20.040-020", "20040020"),
        ("", ""),
        ("no digits", ""),
    ],
)
def test_normalize_postal_code_keeps_only_digits(raw: str, expected: str) -> None:
    assert normalize_postal_code(raw) == expected


def test_extract_postal_code_takes_last_eight_digits() -> None:
    assert extract_postal_code("Rua Augusta 1500, 01310-100") == "01310100"


def test_extract_postal_code_accepts_short_codes() -> None:
    assert extract_postal_code("zone 12345") == "12345"


def test_extract_postal_code_rejects_too_few_digits() -> None:
    assert extract_postal_code("apt 12") == ""
