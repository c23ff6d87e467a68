from __future__ import annotations


class DirectoryError(Exception):
    """Base class for directory faults (not for failed logins)."""

    def __init__(self, message: str, result: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.result = dict(result or {})


class DirectoryConnectionError(DirectoryError):
    """The directory server could not be reached."""


class BindError(DirectoryError):
    """The service account bind was rejected."""


class DirectoryTimeout(DirectoryError):
    """A connect or an operation exceeded its deadline."""


def describe_result(result: dict | None) -> str:
    """Human readable diagnostic from an ldap3 result dict."""
    res = dict(result or {})
    desc = str(res.get("description") or "")
    msg = str(res.get("message") or "")
    if desc and msg and msg != desc:
        return f"{desc} ({msg})"
    return desc or msg or "unknown error"
