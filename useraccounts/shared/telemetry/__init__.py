"""Shared telemetry: logging setup."""

from useraccounts.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
