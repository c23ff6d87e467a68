from __future__ import annotations


def domain_to_base_dn(domain: str) -> str:
    domain = (domain or "").strip().strip(".")
    if not domain or "." not in domain:
        return ""
    parts = [p for p in domain.split(".") if p]
    return ",".join([f"DC={p}" for p in parts])


def host_to_url(host: str, use_ssl: bool = False) -> str:
    """`dc01` / `dc01:389` / `ldaps://dc01` -> directory URL."""
    host = (host or "").strip()
    if not host:
        return ""
    if "://" in host:
        return host
    scheme = "ldaps" if use_ssl else "ldap"
    return f"{scheme}://{host}"


def bind_principal(dn_user: str, domain: str) -> str:
    u = (dn_user or "").strip()
    d = (domain or "").strip().strip(".")
    if not u:
        return ""
    # UPN or a full DN is used as is.
    if "@" in u or "=" in u:
        return u
    return f"{u}@{d}" if d else u


def group_dn(name: str, groupdn: str) -> str:
    """CN=<name>,<groupdn>"""
    name = (name or "").strip()
    groupdn = (groupdn or "").strip()
    return f"CN={name},{groupdn}" if groupdn else f"CN={name}"


def split_list(text: str) -> list[str]:
    if not text:
        return []
    return [x.strip() for x in text.split(";") if x.strip()]
