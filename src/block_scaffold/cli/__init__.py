"""CLI helpers exposed for other modules."""

from .ui import NullReporter, ProgressReporter, SpinnerReporter, select_with_arrows

__all__ = ["NullReporter", "ProgressReporter", "SpinnerReporter", "select_with_arrows"]
