from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..ad_utils import bind_principal, domain_to_base_dn, host_to_url


@dataclass(frozen=True)
class DirectoryConfig:
    host: str
    dn_user: str
    dn_pass: str
    domain: str
    basedn: str = ""
    groupdn: str = ""
    attributes: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    admin_groups: tuple[str, ...] = ()
    owners: tuple[str, ...] = ()
    port: int | None = None
    use_ssl: bool = False
    starttls: bool = False
    tls_validate: bool = False
    ca_certs_file: str = ""
    connect_timeout: float = 5.0
    operation_timeout: float = 10.0
    max_group_depth: int = 25

    def __post_init__(self) -> None:
        # Lists may arrive as lists; keep the config hashable and immutable.
        for name in ("attributes", "groups", "admin_groups", "owners"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @property
    def url(self) -> str:
        return host_to_url(self.host, use_ssl=self.use_ssl)

    @property
    def base_dn(self) -> str:
        return self.basedn or domain_to_base_dn(self.domain)

    @property
    def group_base_dn(self) -> str:
        return self.groupdn or self.base_dn

    @property
    def bind_principal(self) -> str:
        return bind_principal(self.dn_user, self.domain)

    def __repr__(self) -> str:
        return f"DirectoryConfig(host={self.host!r}, bind={self.bind_principal!r}, basedn={self.base_dn!r})"


@dataclass
class RawRecord:
    """One directory entry: DN plus attribute values keyed by lower-cased name."""

    dn: str
    attributes: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_attributes(cls, dn: str, attributes: Mapping[str, object] | None) -> "RawRecord":
        norm: dict[str, list[str]] = {}
        for name, value in (attributes or {}).items():
            norm[str(name).lower()] = _as_str_list(value)
        return cls(dn=dn, attributes=norm)

    def get(self, name: str) -> list[str]:
        return list(self.attributes.get(name.lower(), []))

    def first(self, name: str, default: str = "") -> str:
        values = self.attributes.get(name.lower()) or []
        return values[0] if values else default

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self.attributes.get(name.lower()))


def _as_str_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray)):
        items: Iterable[object] = [value]
    elif isinstance(value, Iterable):
        items = value
    else:
        items = [value]
    out: list[str] = []
    for v in items:
        if isinstance(v, (bytes, bytearray)):
            out.append(bytes(v).decode("utf-8", errors="replace"))
        else:
            out.append(str(v))
    return out
