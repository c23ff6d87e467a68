from __future__ import annotations

from typing import Optional

from .backend import Credentials

DOMAIN_SEPARATOR = "\\"


def resolve_transparent_login(remote_user: Optional[str]) -> Optional[Credentials]:
    """`DOMAIN\\username` from a trusted front end -> trusted credentials.

    None when the value is absent or not exactly two non-empty segments.
    """
    if not remote_user:
        return None
    parts = remote_user.strip().split(DOMAIN_SEPARATOR)
    if len(parts) != 2:
        return None
    domain, username = (p.strip() for p in parts)
    if not domain or not username:
        return None
    return Credentials(username=username.lower(), trusted=True)
