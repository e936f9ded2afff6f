"""Polling directory watcher that reports file additions, modifications, deletions and moves."""

__version__ = "0.1.0"
__all__ = ["__version__"]