"""Application services: identifier validation, response shaping and user access."""

from useraccounts.application.services.identifier_validator import is_valid_user_id
from useraccounts.application.services.user_service import UserAccessService

__all__ = ["UserAccessService", "is_valid_user_id"]
