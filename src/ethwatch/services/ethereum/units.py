"""Ether unit conversion."""

from decimal import Decimal, localcontext
from typing import Final

ETHER_DECIMALS: Final = 18
WEI_PER_ETHER: Final = Decimal(10) ** ETHER_DECIMALS


def wei_to_ether(wei: int) -> Decimal:
    """Convert a wei amount to ether without losing precision.

    The division runs with enough decimal precision for every digit of
    ``wei`` plus the 18 fractional places, so any uint256 balance converts
    exactly.

    Example:
        wei_to_ether(1_500_000_000_000_000_000) == Decimal("1.5")

    Raises:
        ValueError: If ``wei`` is negative.
    """
    if wei < 0:
        raise ValueError(f"wei amount must be non-negative, got {wei}")

    with localcontext() as ctx:
        ctx.prec = len(str(wei)) + ETHER_DECIMALS
        return Decimal(wei) / WEI_PER_ETHER
