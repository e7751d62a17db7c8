"""Periodic wallet balance monitor.

The monitor runs one check round immediately on start, then one round per
tick of a coalescing interval ticker until its stop event is set:

    stop_event = asyncio.Event()
    task = asyncio.create_task(monitor.start(stop_event))
    ...
    stop_event.set()
    await task

Each round fans out one task per wallet and joins them all before the
round ends, so rounds never overlap. A failed wallet query is isolated:
it is logged, counted as an error metric and the round carries on.

Shutdown is cooperative. The stop event is only observed between rounds,
so an in-flight round finishes and reports all its results before the
loop exits. The worst case is one round, bounded by the RPC per-call
timeout, plus whatever grace period the caller allows.
"""

import asyncio
import time
from collections.abc import Sequence

import structlog

from ethwatch.core.exceptions import RPCError
from ethwatch.core.models import BalanceResult, CheckOutcome, Wallet
from ethwatch.metrics.prometheus import MetricsSink
from ethwatch.monitor.ticker import IntervalTicker
from ethwatch.services.ethereum.rpc_client import BalanceQuery
from ethwatch.services.ethereum.units import wei_to_ether

log = structlog.get_logger(__name__)


class BalanceMonitor:
    """Checks wallet balances on a fixed interval and records metrics.

    Attributes:
        wallets: Wallets checked every round.
        interval: Seconds between rounds.
    """

    def __init__(
        self,
        client: BalanceQuery,
        metrics: MetricsSink,
        wallets: Sequence[Wallet],
        interval: float,
    ) -> None:
        """Initialize the monitor.

        Args:
            client: Balance query adapter.
            metrics: Sink receiving per-wallet outcomes.
            wallets: Wallets to check.
            interval: Seconds between rounds.
        """
        self._client = client
        self._metrics = metrics
        self.wallets = tuple(wallets)
        self.interval = interval
        self._started = False

    @property
    def running(self) -> bool:
        """True once start() has been called."""
        return self._started

    async def start(self, stop_event: asyncio.Event) -> None:
        """Run check rounds until ``stop_event`` is set.

        The first round runs immediately. A monitor can only be started once.
        """
        if self._started:
            log.warning("balance_monitor_already_started")
            return
        self._started = True

        log.info(
            "balance_monitor_starting",
            wallets_count=len(self.wallets),
            interval_seconds=self.interval,
        )

        await self.check_all_balances()

        ticker = IntervalTicker(self.interval)

        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=ticker.time_until_tick())
            except TimeoutError:
                ticker.consume()
                await self.check_all_balances()

        log.info("balance_monitor_stopped")

    async def check_once(self) -> list[BalanceResult]:
        """Run a single check round and return its results."""
        log.info("balance_check_triggered", wallets_count=len(self.wallets))
        return await self.check_all_balances()

    async def check_all_balances(self) -> list[BalanceResult]:
        """Check every wallet concurrently and wait for all of them.

        Returns:
            One result per wallet, in wallet order.
        """
        log.debug("checking_all_wallet_balances", wallets_count=len(self.wallets))

        outcomes = await asyncio.gather(
            *(self.check_wallet_balance(wallet) for wallet in self.wallets),
            return_exceptions=True,
        )

        results: list[BalanceResult] = []
        for wallet, outcome in zip(self.wallets, outcomes, strict=True):
            if isinstance(outcome, BalanceResult):
                results.append(outcome)
                continue

            if not isinstance(outcome, Exception):
                raise outcome

            # Unexpected failure inside the wallet task; still one outcome per wallet
            log.error(
                "wallet_balance_check_crashed",
                wallet_name=wallet.name,
                address=wallet.address,
                error=str(outcome),
                error_type=type(outcome).__name__,
            )
            self._metrics.record_error(wallet.name, wallet.address)
            results.append(
                BalanceResult(
                    wallet=wallet,
                    outcome=CheckOutcome.FAILURE,
                    error=str(outcome),
                )
            )

        failed = sum(1 for result in results if not result.succeeded)
        log.debug(
            "wallet_balances_checked",
            wallets_count=len(results),
            failed_count=failed,
        )
        return results

    async def check_wallet_balance(self, wallet: Wallet) -> BalanceResult:
        """Query one wallet and report the outcome to the metrics sink."""
        start = time.perf_counter()
        wallet_log = log.bind(wallet_name=wallet.name, address=wallet.address)

        try:
            balance_wei = await self._client.get_balance(wallet.address)
        except RPCError as e:
            wallet_log.error("wallet_balance_check_failed", error=str(e))
            self._metrics.record_error(wallet.name, wallet.address)
            return BalanceResult(
                wallet=wallet,
                duration=time.perf_counter() - start,
                outcome=CheckOutcome.FAILURE,
                error=str(e),
            )

        balance_ether = wei_to_ether(balance_wei)
        duration = time.perf_counter() - start

        result = BalanceResult(
            wallet=wallet,
            amount_raw=balance_wei,
            amount_decimal=balance_ether,
            duration=duration,
            outcome=CheckOutcome.SUCCESS,
        )

        try:
            self._metrics.record_success(
                wallet.name,
                wallet.address,
                balance_wei,
                balance_ether,
                time.time(),
                duration,
            )
        except Exception as e:
            # The query succeeded; a sink failure is not a balance check error
            wallet_log.error(
                "wallet_metrics_record_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return result

        wallet_log.debug(
            "wallet_balance_updated",
            balance_wei=str(balance_wei),
            balance_ether=float(balance_ether),
            duration_ms=duration * 1000,
        )

        return result
