from __future__ import annotations

import logging
from typing import Optional

from ...ad.models import DirectoryConfig, RawRecord
from ...ad_utils import group_dn
from ..groups import GroupMembershipResolver
from .backend import AccessTier, Principal

log = logging.getLogger(__name__)

SAM_ACCOUNT_NAME = "sAMAccountName"


class PrincipalClassifier:
    """Assigns an access tier and group label to a directory record.

    Rules run in a fixed order and later rules overwrite earlier ones:

    1. default tier is member, no group;
    2. when view groups are configured the tier becomes unresolved and
       membership in one of them is required;
    3. view group match -> member;
    4. admin group match -> admin (wins over a view group);
    5. owner account name -> admin with no group (wins over everything).

    A record still unresolved after that is rejected (None).
    """

    def __init__(self, cfg: DirectoryConfig, membership: GroupMembershipResolver) -> None:
        self.cfg = cfg
        self.membership = membership

    def _in_group(self, dn: str, name: str) -> bool:
        return self.membership.is_member(dn, group_dn(name, self.cfg.group_base_dn))

    def classify(self, record: Optional[RawRecord]) -> Optional[Principal]:
        if record is None:
            return None

        cfg = self.cfg
        dn = record.dn
        username = record.first(SAM_ACCOUNT_NAME)

        tier: AccessTier | None = AccessTier.MEMBER
        group = ""

        if cfg.groups:
            tier = None

        for name in cfg.groups:
            if dn and self._in_group(dn, name):
                tier = AccessTier.MEMBER
                group = name

        for name in cfg.admin_groups:
            if dn and self._in_group(dn, name):
                tier = AccessTier.ADMIN
                group = name

        for owner in cfg.owners:
            if SAM_ACCOUNT_NAME in record and username == owner:
                tier = AccessTier.ADMIN
                group = ""

        if tier is None:
            log.debug("%s is not in any view group", dn)
            return None

        log.debug("%s classified as %s (group=%r)", dn, tier.name, group)
        return Principal(
            id=dn,
            username=username,
            tier=tier,
            group=group,
            attributes={k: list(v) for k, v in record.attributes.items()},
        )
