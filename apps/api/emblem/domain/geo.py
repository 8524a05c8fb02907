"""Geographic sector bucketing for placed art."""

from decimal import ROUND_DOWN, Decimal

SECTOR_DECIMALS = 3
_QUANTUM = Decimal(1).scaleb(-SECTOR_DECIMALS)


def _truncate(value: float) -> Decimal:
    return Decimal(repr(value)).quantize(_QUANTUM, rounding=ROUND_DOWN)


def get_sector(lat: float, long: float) -> str:
    """Return the sector key for a coordinate.

    Both components are truncated toward zero to ``SECTOR_DECIMALS`` places,
    so every point inside the same grid cell maps to the same key.
    """
    lat_part = _truncate(lat)
    long_part = _truncate(long)
    # Normalise -0.000 so both sides of the equator/meridian agree on zero.
    if lat_part.is_zero():
        lat_part = abs(lat_part)
    if long_part.is_zero():
        long_part = abs(long_part)
    return f"{lat_part}:{long_part}"
