"""FastAPI application factory.

The application lifespan is the driver of the balance monitor: it checks
RPC connectivity, starts the monitor loop as a background task, and on
shutdown signals it to stop, giving an in-flight round up to
``shutdown_grace_period`` seconds to finish.
"""

import asyncio
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from ethwatch.api.routes import check, health, metrics
from ethwatch.config.settings import Settings, load_settings
from ethwatch.config.wallets import load_wallets
from ethwatch.core.exceptions import ConnectivityError
from ethwatch.core.models import Wallet
from ethwatch.metrics.prometheus import PrometheusMetrics
from ethwatch.monitor.balance_monitor import BalanceMonitor
from ethwatch.services.ethereum.rpc_client import EthereumRPCClient

log = structlog.get_logger()


def _log_monitor_exit(task: asyncio.Task[None]) -> None:
    """Report a monitor loop that ended with an exception."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        log.error(
            "balance_monitor_crashed",
            error=str(error),
            error_type=type(error).__name__,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    client: EthereumRPCClient = app.state.rpc_client
    monitor: BalanceMonitor = app.state.monitor

    # Startup
    log.info(
        "application_starting",
        rpc_url=settings.ethereum_rpc,
        check_interval=settings.check_interval,
        metrics_port=settings.metrics_port,
        wallets_count=len(monitor.wallets),
    )

    try:
        await client.connect()
    except ConnectivityError as e:
        log.error("ethereum_client_connect_failed", error=str(e))
        await client.close()
        raise

    stop_event = asyncio.Event()
    monitor_task = asyncio.create_task(monitor.start(stop_event))
    monitor_task.add_done_callback(_log_monitor_exit)
    app.state.stop_event = stop_event
    app.state.monitor_task = monitor_task

    log.info("application_started")

    yield

    # Shutdown
    log.info("application_stopping")
    stop_event.set()

    # A crashed monitor was already reported by _log_monitor_exit
    if not monitor_task.done():
        try:
            await asyncio.wait_for(monitor_task, timeout=settings.shutdown_grace_period)
        except TimeoutError:
            # wait_for cancelled the task; the in-flight round is abandoned
            log.warning(
                "balance_monitor_stop_timeout",
                grace_period_seconds=settings.shutdown_grace_period,
            )

    await client.close()
    log.info("application_stopped")


def create_app(
    settings: Settings | None = None,
    wallets: Sequence[Wallet] | None = None,
    rpc_client: EthereumRPCClient | None = None,
    metrics_sink: PrometheusMetrics | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (loaded from the environment if omitted).
        wallets: Wallets to monitor (loaded from ``settings.wallets_file`` if omitted).
        rpc_client: Balance query client (built from settings if omitted).
        metrics_sink: Metrics sink (a fresh registry if omitted).

    Raises:
        ConfigurationError: If settings or the wallets file are invalid.
    """
    settings = settings or load_settings()
    if wallets is None:
        wallets = load_wallets(settings.wallets_file)
    if rpc_client is None:
        rpc_client = EthereumRPCClient(settings.ethereum_rpc, timeout=settings.rpc_timeout)
    if metrics_sink is None:
        metrics_sink = PrometheusMetrics()

    app = FastAPI(
        title=settings.app_name,
        description="Ethereum wallet balance exporter for Prometheus",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.rpc_client = rpc_client
    app.state.metrics = metrics_sink
    app.state.monitor = BalanceMonitor(
        client=rpc_client,
        metrics=metrics_sink,
        wallets=wallets,
        interval=settings.check_interval,
    )

    # Routes
    app.include_router(metrics.router)
    app.include_router(health.router)
    app.include_router(check.router, prefix="/api")

    return app
