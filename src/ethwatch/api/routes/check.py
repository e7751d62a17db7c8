"""On-demand balance check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ethwatch.api.dependencies import MonitorDep
from ethwatch.core.models import BalanceResult, CheckOutcome

router = APIRouter(prefix="/check", tags=["check"])


class WalletCheckSummary(BaseModel):
    """Outcome of one wallet in a manual check round.

    Balances are strings so wei and ether values stay exact in JSON.
    """

    name: str
    address: str
    outcome: CheckOutcome
    balance_wei: str | None = None
    balance_ether: str | None = None
    duration_seconds: float
    error: str | None = None

    @classmethod
    def from_result(cls, result: BalanceResult) -> "WalletCheckSummary":
        return cls(
            name=result.wallet.name,
            address=result.wallet.address,
            outcome=result.outcome,
            balance_wei=str(result.amount_raw) if result.amount_raw is not None else None,
            balance_ether=(
                format(result.amount_decimal, "f")
                if result.amount_decimal is not None
                else None
            ),
            duration_seconds=result.duration,
            error=result.error,
        )


class CheckResponse(BaseModel):
    """Response from a manual check round."""

    checked: int = Field(description="Wallets checked in this round")
    succeeded: int
    failed: int
    results: list[WalletCheckSummary]


@router.post("", response_model=CheckResponse)
async def trigger_check(monitor: MonitorDep) -> CheckResponse:
    """Run one balance check round now and return its outcomes."""
    results = await monitor.check_once()
    succeeded = sum(1 for result in results if result.succeeded)

    return CheckResponse(
        checked=len(results),
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=[WalletCheckSummary.from_result(result) for result in results],
    )
