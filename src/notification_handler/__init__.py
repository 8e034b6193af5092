"""Failure alerts for the VOD job-submit function."""

from .notifier import FailureNotifier, send_error

__all__ = ["FailureNotifier", "send_error"]
