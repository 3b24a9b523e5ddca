"""HTTP middleware: request ID, correlation ID, security headers.

Applied in useraccounts.main; first added = outermost.
"""

from useraccounts.middleware.correlation_id import CorrelationIDMiddleware
from useraccounts.middleware.request_id import RequestIDMiddleware
from useraccounts.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
