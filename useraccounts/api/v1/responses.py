"""Render ResultEnvelope values as HTTP responses."""

from fastapi.responses import JSONResponse

from useraccounts.application.dtos.result import ResultEnvelope
from useraccounts.application.dtos.user import UserView
from useraccounts.application.services.response_shaper import status_for
from useraccounts.core.config import get_settings
from useraccounts.schemas.user import MessageResponse, UserResponse


def _view(view: UserView) -> dict:
    return UserResponse(id=view.id, username=view.username).model_dump()


def to_response(envelope: ResultEnvelope) -> JSONResponse:
    """Map the envelope's outcome to a status and its payload or message to the body."""
    status = status_for(
        envelope.outcome,
        strict_client_errors=get_settings().strict_client_errors,
    )
    if isinstance(envelope.payload, list):
        content: dict | list = [_view(v) for v in envelope.payload]
    elif envelope.payload is not None:
        content = _view(envelope.payload)
    else:
        content = MessageResponse(message=envelope.message or "").model_dump()
    return JSONResponse(status_code=status, content=content)
