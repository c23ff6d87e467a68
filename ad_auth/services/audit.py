from __future__ import annotations

import logging

audit_log = logging.getLogger("ad_auth.audit")


def audit_login(
    username: str,
    auth_type: str,
    success: bool,
    result_code: str,
    ip: str = "",
    ua: str = "",
    details: str = "",
) -> None:
    """One line per login attempt; the reason stays internal."""
    level = logging.INFO if success else logging.WARNING
    audit_log.log(
        level,
        "login %s user=%r type=%s result=%s ip=%s ua=%r%s",
        "ok" if success else "failed",
        username,
        auth_type,
        result_code,
        ip or "-",
        (ua or "")[:200],
        f" details={details[:512]!r}" if details else "",
    )
