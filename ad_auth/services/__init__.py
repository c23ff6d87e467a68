"""Authentication / authorization service layer.

Stable import surface for the HTTP adapter:
    from ad_auth.services import ...
"""

from .audit import audit_login
from .groups import GroupMembershipResolver
from .auth import (
    AccessTier,
    AuthResult,
    AuthenticationResolver,
    Credentials,
    Guard,
    Principal,
    PrincipalClassifier,
    RejectReason,
    resolve_transparent_login,
)

__all__ = [
    "audit_login",
    "GroupMembershipResolver",
    "AccessTier",
    "AuthResult",
    "AuthenticationResolver",
    "Credentials",
    "Guard",
    "Principal",
    "PrincipalClassifier",
    "RejectReason",
    "resolve_transparent_login",
]
