"""Infrastructure: Redis cache, SQL persistence and security adapters."""
