"""User-account management service: FastAPI API over SQL with a Redis read-through cache."""

__version__ = "1.0.0"
