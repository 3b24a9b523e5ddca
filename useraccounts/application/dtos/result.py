"""Result envelope returned by every user-record operation."""

from __future__ import annotations

from dataclasses import dataclass

from useraccounts.application.dtos.user import UserView
from useraccounts.domain.enums import Outcome

Payload = UserView | list[UserView]


@dataclass(frozen=True)
class ResultEnvelope:
    """Outcome plus either a payload or a human-readable message."""

    outcome: Outcome
    payload: Payload | None = None
    message: str | None = None
