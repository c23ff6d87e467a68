from __future__ import annotations


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value or "":
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def equality_filter(attribute: str, value: str) -> str:
    """(attribute=value) with the value escaped."""
    return f"({attribute}={escape_ldap_filter_value(value)})"


def normalize_dn(dn: str) -> str:
    """Comparison key for DNs: AD treats them case-insensitively."""
    return (dn or "").strip().lower()
