"""Domain models for shipping quotes.

Parcels describe what the caller wants to ship; shipping options are the normalized
offers returned to the rest of the application. Both are independent from the
upstream wire format so that provider changes stay inside the ``shipping`` package.
"""

__all__ = [
    "shipping",
]
