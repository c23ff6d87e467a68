from .backend import (
    AccessTier,
    AuthResult,
    Credentials,
    IdentityProvider,
    Principal,
    RejectReason,
    LOGIN_FAILED,
)
from .classifier import PrincipalClassifier
from .ad import AuthenticationResolver
from .guard import Guard
from .transparent import resolve_transparent_login

__all__ = [
    "AccessTier",
    "AuthResult",
    "Credentials",
    "IdentityProvider",
    "Principal",
    "RejectReason",
    "LOGIN_FAILED",
    "PrincipalClassifier",
    "AuthenticationResolver",
    "Guard",
    "resolve_transparent_login",
]
