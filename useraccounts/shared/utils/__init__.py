"""Shared utilities."""

from useraccounts.shared.utils.generators import generate_object_id

__all__ = ["generate_object_id"]
