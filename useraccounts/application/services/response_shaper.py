"""Response shaping: build result envelopes and map outcomes to HTTP status.

Stateless helpers used by the access service (envelopes) and the HTTP
boundary (status codes).
"""

from useraccounts.application.dtos.result import Payload, ResultEnvelope
from useraccounts.domain.enums import Outcome

_STATUS_BY_OUTCOME: dict[Outcome, int] = {
    Outcome.OK: 200,
    Outcome.NOT_FOUND: 404,
    Outcome.FORBIDDEN: 403,
    Outcome.CONFLICT: 409,
    Outcome.BAD_INPUT: 500,
    Outcome.INTERNAL_ERROR: 500,
}


def ok(payload: Payload) -> ResultEnvelope:
    """Successful envelope carrying a view or list of views."""
    return ResultEnvelope(outcome=Outcome.OK, payload=payload)


def ok_message(message: str) -> ResultEnvelope:
    """Successful envelope carrying a confirmation message."""
    return ResultEnvelope(outcome=Outcome.OK, message=message)


def failure(outcome: Outcome, message: str) -> ResultEnvelope:
    """Failure envelope with the reason for the caller."""
    if outcome is Outcome.OK:
        raise ValueError("failure() requires a non-ok outcome")
    return ResultEnvelope(outcome=outcome, message=message)


def not_found(message: str) -> ResultEnvelope:
    return failure(Outcome.NOT_FOUND, message)


def forbidden(message: str) -> ResultEnvelope:
    return failure(Outcome.FORBIDDEN, message)


def conflict(message: str) -> ResultEnvelope:
    return failure(Outcome.CONFLICT, message)


def bad_input(message: str) -> ResultEnvelope:
    return failure(Outcome.BAD_INPUT, message)


def internal_error(message: str) -> ResultEnvelope:
    return failure(Outcome.INTERNAL_ERROR, message)


def status_for(outcome: Outcome, *, strict_client_errors: bool = False) -> int:
    """Return the HTTP status for an outcome.

    bad-input maps to 500 to stay compatible with existing clients; pass
    strict_client_errors=True to answer 400 instead.

    Args:
        outcome: Envelope outcome.
        strict_client_errors: Map bad-input to 400 when True.

    Returns:
        HTTP status code.
    """
    if outcome is Outcome.BAD_INPUT and strict_client_errors:
        return 400
    return _STATUS_BY_OUTCOME[outcome]
