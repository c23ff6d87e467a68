from __future__ import annotations

import logging
from collections import deque
from typing import Optional, Protocol, Sequence

from ..ad.models import RawRecord
from ..ad.utils import normalize_dn

log = logging.getLogger(__name__)

MEMBER_OF = "memberOf"
DEFAULT_MAX_DEPTH = 25


class DirectoryReader(Protocol):
    def read_by_dn(self, dn: str, attributes: Optional[Sequence[str]] = None) -> Optional[RawRecord]:
        ...


class GroupMembershipResolver:
    """Transitive `memberOf` walk (groups of groups).

    Breadth-first over an explicit queue with a visited set, so circular
    nesting terminates, and a depth cap bounding the number of levels read.
    No caching between calls.
    """

    def __init__(self, directory: DirectoryReader, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.directory = directory
        self.max_depth = max(0, int(max_depth))

    def direct_groups(self, dn: str) -> list[str]:
        rec = self.directory.read_by_dn(dn, [MEMBER_OF])
        if rec is None:
            return []
        return rec.get(MEMBER_OF)

    def is_member(self, principal_dn: str, target_group_dn: str) -> bool:
        if not principal_dn or not target_group_dn:
            return False

        target = normalize_dn(target_group_dn)
        visited = {normalize_dn(principal_dn)}
        queue: deque[tuple[str, int]] = deque([(principal_dn, 0)])

        while queue:
            dn, depth = queue.popleft()
            groups = self.direct_groups(dn)
            if not groups:
                continue
            if any(normalize_dn(g) == target for g in groups):
                return True
            if depth >= self.max_depth:
                log.debug("Group nesting depth %d reached at %s", self.max_depth, dn)
                continue
            for g in groups:
                key = normalize_dn(g)
                if key in visited:
                    continue
                visited.add(key)
                queue.append((g, depth + 1))

        return False
