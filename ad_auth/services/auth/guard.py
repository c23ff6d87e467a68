from __future__ import annotations

from typing import Optional

from ..audit import audit_login
from .backend import AuthResult, Credentials, IdentityProvider, Principal, RejectReason
from .transparent import resolve_transparent_login


class Guard:
    """Login flow on top of an identity provider.

    Start -> identified -> validated -> authenticated, or rejected at any
    step. Nothing is kept between attempts.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self.provider = provider

    def attempt(self, credentials: Credentials, ip: str = "", ua: str = "") -> AuthResult:
        auth_type = "ntlm" if credentials.trusted else "password"

        principal = self.provider.find_by_credentials(credentials)
        if principal is None:
            audit_login(credentials.username, auth_type, False, RejectReason.NOT_FOUND.value, ip, ua)
            return AuthResult.rejected(RejectReason.NOT_FOUND)

        if not self.provider.validate_credentials(principal, credentials):
            audit_login(credentials.username, auth_type, False, RejectReason.BAD_CREDENTIALS.value, ip, ua)
            return AuthResult.rejected(RejectReason.BAD_CREDENTIALS)

        audit_login(principal.username, auth_type, True, "ok", ip, ua, details=f"tier={principal.tier.name}")
        return AuthResult.ok(principal)

    def auto(
        self,
        remote_user: Optional[str],
        current: Optional[Principal] = None,
        ip: str = "",
        ua: str = "",
    ) -> AuthResult:
        """Transparent (NTLM/SSO) login from an upstream `DOMAIN\\user` value."""
        if current is not None:
            return AuthResult.ok(current)

        # No value simply means the front end did not authenticate anyone.
        if not remote_user:
            return AuthResult.rejected(RejectReason.NO_HEADER)

        credentials = resolve_transparent_login(remote_user)
        if credentials is None:
            audit_login(remote_user, "ntlm", False, RejectReason.MALFORMED_HEADER.value, ip, ua)
            return AuthResult.rejected(RejectReason.MALFORMED_HEADER)

        return self.attempt(credentials, ip=ip, ua=ua)

    @staticmethod
    def admin(principal: Optional[Principal]) -> bool:
        return principal is not None and principal.is_admin
