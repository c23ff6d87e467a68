from __future__ import annotations

import logging
from typing import Optional

from ...ad import DirectoryClient, DirectoryConfig
from ...ad.utils import equality_filter
from ..groups import GroupMembershipResolver
from .backend import AccessTier, Credentials, Principal
from .classifier import SAM_ACCOUNT_NAME, PrincipalClassifier
from .transparent import resolve_transparent_login

log = logging.getLogger(__name__)


class AuthenticationResolver:
    """Directory backed identity provider.

    Looks principals up by DN or by account name, classifies them and
    validates secrets with a bind on the same connection. Stateless between
    calls apart from the connection it is given.
    """

    def __init__(self, client: DirectoryClient, cfg: DirectoryConfig | None = None) -> None:
        self.client = client
        self.cfg = cfg or client.cfg
        self.membership = GroupMembershipResolver(client, max_depth=self.cfg.max_group_depth)
        self.classifier = PrincipalClassifier(self.cfg, self.membership)

    def find_by_id(self, identifier: str) -> Optional[Principal]:
        rec = self.client.read_by_dn(identifier, self.cfg.attributes or None)
        return self.classifier.classify(rec)

    def find_by_token(self, identifier: str, token: str) -> Optional[Principal]:
        # The remember token is the DN itself, nothing is stored.
        return self.find_by_id(identifier)

    def find_by_credentials(self, credentials: Credentials) -> Optional[Principal]:
        username = (credentials.username or "").strip()
        if not username:
            return None
        rec = self.client.search_by_filter(
            self.cfg.base_dn,
            equality_filter(SAM_ACCOUNT_NAME.lower(), username),
            self.cfg.attributes or None,
        )
        if rec is None:
            log.debug("No unique entry for %r under %s", username, self.cfg.base_dn)
        return self.classifier.classify(rec)

    def validate_credentials(self, principal: Optional[Principal], credentials: Credentials) -> bool:
        if principal is None:
            return False
        if credentials.trusted:
            return True
        if not credentials.password:
            return False
        return self.client.bind_as(principal.id, credentials.password)

    @staticmethod
    def resolve_transparent_login(remote_user: Optional[str]) -> Optional[Credentials]:
        return resolve_transparent_login(remote_user)

    @staticmethod
    def is_admin(principal: Optional[Principal]) -> bool:
        return principal is not None and principal.tier == AccessTier.ADMIN
