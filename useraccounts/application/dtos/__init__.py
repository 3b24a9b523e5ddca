"""Application DTOs (commands, views and result envelopes)."""

from useraccounts.application.dtos.result import ResultEnvelope
from useraccounts.application.dtos.user import NewUser, UserUpdate, UserView

__all__ = ["NewUser", "ResultEnvelope", "UserUpdate", "UserView"]
