"""Wallet and balance check models.

All models use Pydantic BaseModel (not dataclass).
"""

import re
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_ethereum_address(address: str) -> bool:
    """Check the ``0x`` + 40 hex characters format (case-insensitive)."""
    return bool(ADDRESS_PATTERN.match(address))


class Wallet(BaseModel):
    """A monitored wallet.

    Created once at startup from the wallets file and never mutated.

    Attributes:
        name: Human readable label used in metrics and logs.
        address: Ethereum address, ``0x`` followed by 40 hex characters.

    Example:
        wallet = Wallet(name="treasury", address="0x742d35Cc6634C0532925a3b844Bc454e4438f44e")
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Wallet label")
    address: str = Field(description="Ethereum address (0x + 40 hex chars)")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Validate Ethereum address format."""
        if not is_valid_ethereum_address(v):
            raise ValueError(f"invalid Ethereum address '{v}'")
        return v


class CheckOutcome(str, Enum):
    """Outcome of a single wallet balance check."""

    SUCCESS = "success"
    FAILURE = "failure"


class BalanceResult(BaseModel):
    """Result of checking one wallet in one round.

    Attributes:
        wallet: The wallet that was checked.
        amount_raw: Balance in wei (None on failure).
        amount_decimal: Balance in ether (None on failure).
        duration: Seconds spent on the query.
        outcome: SUCCESS or FAILURE.
        error: Error description on failure.
    """

    model_config = ConfigDict(frozen=True)

    wallet: Wallet
    amount_raw: int | None = Field(default=None, ge=0)
    amount_decimal: Decimal | None = Field(default=None, ge=0)
    duration: float = Field(default=0.0, ge=0)
    outcome: CheckOutcome
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is CheckOutcome.SUCCESS
