"""Application services - authentication, request gating and ownership."""

from taskapi.application.services.authentication_service import (
    AuthenticationService,
    LoginResult,
)
from taskapi.application.services.authenticator import (
    AuthenticationResult,
    Authenticator,
)
from taskapi.application.services.ownership import require_owner
from taskapi.application.services.request_gate import (
    GateDecision,
    PublicPathMatcher,
    RequestAuthenticationGate,
)

__all__ = [
    "AuthenticationResult",
    "AuthenticationService",
    "Authenticator",
    "GateDecision",
    "LoginResult",
    "PublicPathMatcher",
    "RequestAuthenticationGate",
    "require_owner",
]
