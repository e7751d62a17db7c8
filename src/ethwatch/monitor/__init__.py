"""Balance monitor loop."""

from ethwatch.monitor.balance_monitor import BalanceMonitor
from ethwatch.monitor.ticker import IntervalTicker

__all__ = ["BalanceMonitor", "IntervalTicker"]
