"""Shared helpers used across layers (logging, id generation)."""
