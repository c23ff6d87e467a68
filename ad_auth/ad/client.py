from __future__ import annotations

import logging
import ssl
import threading
from typing import Any, Optional, Sequence

from ldap3 import (
    Server,
    Connection,
    BASE,
    NONE,
    SUBTREE,
    Tls,
    ALL_ATTRIBUTES,
)
from ldap3.core.exceptions import (
    LDAPException,
    LDAPBindError,
    LDAPResponseTimeoutError,
    LDAPSocketOpenError,
    LDAPSocketReceiveError,
    LDAPStartTLSError,
)

from .errors import (
    BindError,
    DirectoryConnectionError,
    DirectoryTimeout,
    describe_result,
)
from .models import DirectoryConfig, RawRecord

log = logging.getLogger(__name__)

ANY_OBJECT_FILTER = "(objectclass=*)"

# ldap3 re-raises socket errors as dynamic subclasses of both its own
# exception and the socket error, or wraps them (rebind turns a receive
# error into LDAPBindError), so the whole chain is inspected.
_TIMEOUT_ERRORS = (LDAPResponseTimeoutError, LDAPSocketReceiveError, TimeoutError)


def _is_timeout(exc: BaseException | None) -> bool:
    """True if a timeout error appears anywhere in the exception chain."""
    seen: set[int] = set()
    stack: list[object] = [exc]
    while stack:
        e = stack.pop()
        if isinstance(e, (list, tuple)):
            # LDAPSocketOpenError('unable to open socket', exception_history)
            stack.extend(e)
            continue
        if not isinstance(e, BaseException) or id(e) in seen:
            continue
        seen.add(id(e))
        if isinstance(e, _TIMEOUT_ERRORS):
            return True
        stack.extend((e.__cause__, e.__context__))
        stack.extend(a for a in e.args if isinstance(a, (list, tuple, BaseException)))
    return False


class DirectoryClient:
    """One live, service-bound connection to the directory.

    Use `DirectoryClient.connect(cfg)` (optionally as a context manager);
    the connection is released by `close()` on every exit path.
    Operations on one client are serialized by a lock since a bind changes
    the identity of the whole connection.
    """

    def __init__(self, cfg: DirectoryConfig) -> None:
        self.cfg = cfg
        self.conn: Connection | None = None
        self._lock = threading.Lock()

        tls_kwargs: dict[str, Any] = {
            "validate": ssl.CERT_REQUIRED if cfg.tls_validate else ssl.CERT_NONE,
        }
        if cfg.tls_validate and cfg.ca_certs_file:
            tls_kwargs["ca_certs_file"] = cfg.ca_certs_file

        server_kwargs: dict[str, Any] = {
            "use_ssl": cfg.use_ssl,
            "get_info": NONE,
            "tls": Tls(**tls_kwargs),
            "connect_timeout": cfg.connect_timeout,
        }
        if cfg.port:
            server_kwargs["port"] = cfg.port
        self.server = Server(cfg.url, **server_kwargs)

    @classmethod
    def connect(cls, cfg: DirectoryConfig) -> "DirectoryClient":
        """Open the connection and bind with the service account.

        Raises DirectoryConnectionError, DirectoryTimeout or BindError.
        A half-open connection is released before the error propagates.
        """
        client = cls(cfg)
        try:
            client.open()
        except BaseException:
            client.close()
            raise
        return client

    def open(self) -> None:
        cfg = self.cfg
        # Protocol v3 and no referral chasing, AD does not work otherwise.
        conn = Connection(
            self.server,
            user=cfg.bind_principal,
            password=cfg.dn_pass,
            auto_bind=False,
            version=3,
            auto_referrals=False,
            receive_timeout=cfg.operation_timeout,
            raise_exceptions=False,
        )
        self.conn = conn

        try:
            conn.open()
            if cfg.starttls:
                conn.start_tls()
        except LDAPSocketOpenError as e:
            if _is_timeout(e):
                raise DirectoryTimeout(f"Timed out connecting to LDAP host {cfg.url}: {e}") from e
            raise DirectoryConnectionError(f"Could not connect to LDAP host {cfg.url}: {e}") from e
        except LDAPStartTLSError as e:
            raise DirectoryConnectionError(f"StartTLS failed on {cfg.url}: {e}") from e
        except LDAPException as e:
            if _is_timeout(e):
                raise DirectoryTimeout(f"Timed out connecting to LDAP host {cfg.url}: {e}") from e
            raise DirectoryConnectionError(f"Could not connect to LDAP host {cfg.url}: {e}") from e

        try:
            ok = bool(conn.bind())
        except LDAPBindError as e:
            raise BindError(f"Could not bind to AD: {cfg.bind_principal}: {e}", conn.result) from e
        except LDAPException as e:
            if _is_timeout(e):
                raise DirectoryTimeout(f"Timed out binding to {cfg.url}: {e}") from e
            raise DirectoryConnectionError(f"Could not bind to AD: {cfg.bind_principal}: {e}") from e
        if not ok:
            res = dict(conn.result or {})
            raise BindError(f"Could not bind to AD: {cfg.bind_principal}: {describe_result(res)}", res)

        log.debug("Connected to %s as %s", cfg.url, cfg.bind_principal)

    @property
    def closed(self) -> bool:
        return self.conn is None

    def close(self) -> None:
        conn, self.conn = self.conn, None
        if conn is None:
            return
        try:
            conn.unbind()
        except LDAPException as e:
            log.debug("Unbind from %s failed: %s", self.cfg.url, e)

    def __enter__(self) -> "DirectoryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _require_conn(self) -> Connection:
        if self.conn is None:
            raise DirectoryConnectionError(f"Connection to {self.cfg.url} is closed")
        return self.conn

    def read_by_dn(self, dn: str, attributes: Optional[Sequence[str]] = None) -> Optional[RawRecord]:
        """Point lookup by DN. None when missing, ambiguous or unreadable."""
        dn = (dn or "").strip()
        if not dn:
            return None
        return self._search_one(dn, ANY_OBJECT_FILTER, BASE, attributes)

    def search_by_filter(
        self,
        base_dn: str,
        search_filter: str,
        attributes: Optional[Sequence[str]] = None,
    ) -> Optional[RawRecord]:
        """Subtree search that must match exactly one entry."""
        if not base_dn:
            return None
        return self._search_one(base_dn, search_filter, SUBTREE, attributes)

    def _search_one(
        self,
        base: str,
        search_filter: str,
        scope: str,
        attributes: Optional[Sequence[str]],
    ) -> Optional[RawRecord]:
        attrs = list(attributes) if attributes else ALL_ATTRIBUTES
        with self._lock:
            conn = self._require_conn()
            try:
                ok = conn.search(
                    search_base=base,
                    search_filter=search_filter,
                    search_scope=scope,
                    attributes=attrs,
                    size_limit=2,
                )
            except LDAPException as e:
                if _is_timeout(e):
                    raise DirectoryTimeout(f"Search {search_filter} under {base} timed out: {e}") from e
                log.debug("Search %s under %s failed: %s", search_filter, base, e)
                return None

            entries = [r for r in (conn.response or []) if r.get("type") == "searchResEntry"]
            if not ok or len(entries) != 1:
                if len(entries) > 1:
                    log.debug("Search %s under %s is ambiguous", search_filter, base)
                return None

        e = entries[0]
        return RawRecord.from_attributes(str(e.get("dn") or base), e.get("attributes"))

    def bind_as(self, dn: str, secret: str) -> bool:
        """Try to authenticate `dn` on this connection.

        Failed authentication is False, not an exception. The service
        account identity is restored afterwards.
        """
        if not dn or not secret:
            return False
        with self._lock:
            conn = self._require_conn()
            try:
                ok = bool(conn.rebind(user=dn, password=secret))
            except LDAPException as e:
                if _is_timeout(e):
                    # The socket is unusable, no service rebind is attempted.
                    self.close()
                    raise DirectoryTimeout(f"Bind as {dn} timed out: {e}") from e
                log.debug("Bind as %s failed: %s", dn, e)
                ok = False
            self._restore_service_bind(conn)
            return ok

    def _restore_service_bind(self, conn: Connection) -> None:
        try:
            if conn.rebind(user=self.cfg.bind_principal, password=self.cfg.dn_pass):
                return
            reason = describe_result(conn.result)
        except LDAPException as e:
            reason = str(e)
        # Never keep serving lookups under a user's identity.
        log.error("Could not restore service bind as %s: %s", self.cfg.bind_principal, reason)
        self.close()
