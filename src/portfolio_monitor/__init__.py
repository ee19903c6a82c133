"""Portfolio monitor: cached market data and portfolio snapshots."""

__version__ = "0.1.0"
