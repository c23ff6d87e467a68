from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Protocol


LOGIN_FAILED = "Login failed."


class AccessTier(enum.IntEnum):
    """Access level of a principal (0 = admin, 1 = member)."""

    ADMIN = 0
    MEMBER = 1
    UNAUTHORIZED = 2


class RejectReason(str, enum.Enum):
    """Internal reason for a failed login. Never shown to the user."""

    # missing, ambiguous or excluded by the group rules
    NOT_FOUND = "not_found"
    BAD_CREDENTIALS = "bad_credentials"
    NO_HEADER = "no_header"
    MALFORMED_HEADER = "malformed_header"
    DIRECTORY_ERROR = "directory_error"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = ""
    # Identity asserted by a trusted upstream (NTLM/SSO); no secret is checked.
    trusted: bool = False

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, trusted={self.trusted!r})"


@dataclass
class Principal:
    id: str
    username: str
    tier: AccessTier
    group: str = ""
    attributes: dict[str, list[str]] = field(default_factory=dict)

    @property
    def remember_token(self) -> str:
        return self.id

    @property
    def is_admin(self) -> bool:
        return self.tier == AccessTier.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "tier": self.tier.name.lower(),
            "group": self.group,
            "admin": self.is_admin,
        }


@dataclass
class AuthResult:
    """Outcome of one login attempt."""
    success: bool
    principal: Principal | None = None
    reason: RejectReason | None = None
    error_message: str = ""

    @classmethod
    def ok(cls, principal: Principal) -> "AuthResult":
        return cls(success=True, principal=principal)

    @classmethod
    def rejected(cls, reason: RejectReason) -> "AuthResult":
        # Same message for every reason (no account enumeration).
        return cls(success=False, reason=reason, error_message=LOGIN_FAILED)


class IdentityProvider(Protocol):
    """What a session/guard layer needs from an identity backend."""

    def find_by_id(self, identifier: str) -> Optional[Principal]:
        ...

    def find_by_token(self, identifier: str, token: str) -> Optional[Principal]:
        ...

    def find_by_credentials(self, credentials: Credentials) -> Optional[Principal]:
        ...

    def validate_credentials(self, principal: Optional[Principal], credentials: Credentials) -> bool:
        ...
