"""Application layer: DTOs, ports and the user-record access service."""
