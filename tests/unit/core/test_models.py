"""Unit tests for wallet and balance result models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from ethwatch.core.models import BalanceResult, CheckOutcome, Wallet, is_valid_ethereum_address

ADDRESS = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"


class TestWallet:
    """Tests for the Wallet model."""

    def test_valid_wallet(self) -> None:
        wallet = Wallet(name="treasury", address=ADDRESS)
        assert wallet.name == "treasury"
        assert wallet.address == ADDRESS

    def test_wallet_is_immutable(self) -> None:
        wallet = Wallet(name="treasury", address=ADDRESS)

        with pytest.raises(ValidationError):
            wallet.name = "other"  # type: ignore[misc]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Wallet(name="", address=ADDRESS)

    def test_invalid_address_rejected(self) -> None:
        with pytest.raises(ValidationError, match="invalid Ethereum address"):
            Wallet(name="treasury", address="0x1234")

    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            (ADDRESS, True),
            (ADDRESS.lower(), True),
            ("0x" + ADDRESS[2:].upper(), True),
            (ADDRESS[2:], False),
            ("0X" + ADDRESS[2:], False),
            (ADDRESS + "0", False),
        ],
    )
    def test_address_format(self, address: str, expected: bool) -> None:
        assert is_valid_ethereum_address(address) is expected


class TestBalanceResult:
    """Tests for the BalanceResult model."""

    def test_success_result(self) -> None:
        result = BalanceResult(
            wallet=Wallet(name="treasury", address=ADDRESS),
            amount_raw=10**18,
            amount_decimal=Decimal(1),
            duration=0.1,
            outcome=CheckOutcome.SUCCESS,
        )
        assert result.succeeded

    def test_failure_result(self) -> None:
        result = BalanceResult(
            wallet=Wallet(name="treasury", address=ADDRESS),
            outcome=CheckOutcome.FAILURE,
            error="timeout",
        )
        assert not result.succeeded
        assert result.amount_raw is None

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BalanceResult(
                wallet=Wallet(name="treasury", address=ADDRESS),
                amount_raw=-1,
                outcome=CheckOutcome.SUCCESS,
            )
