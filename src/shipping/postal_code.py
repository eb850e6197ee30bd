from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_postal_code(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def extract_postal_code(text: str) -> str:
    """Pull a CEP out of free-form text.

    Returns the last eight digits when at least eight are present, the digits
    themselves when only five to seven are present, and an empty string otherwise.
    """
    digits = normalize_postal_code(text)
    if len(digits) >= 8:
        return digits[-8:]
    if len(digits) >= 5:
        return digits
    return ""


__all__ = ["extract_postal_code", "normalize_postal_code"]
