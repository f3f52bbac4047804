# settleup/utils/references.py
# -----------------------------------------------------------------------------
# UNKNOWN MEMBER REFERENCES
# -----------------------------------------------------------------------------
# Records can outlive the member they point to (member removed from the group).
# What the engine does with such a reference is the caller's choice:
#   • ignore  - skip it silently (default);
#   • collect - skip it, log a warning, append an UnknownReference to the
#               caller's list (if one was passed);
#   • reject  - raise UnknownMemberError.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Union

from settleup import config
from settleup.errors import SettingsError, UnknownMemberError
from settleup.schemas.balance import UnknownReference

log = logging.getLogger(__name__)


class UnknownMemberPolicy(str, Enum):
    ignore = "ignore"
    collect = "collect"
    reject = "reject"


PolicyArg = Union[UnknownMemberPolicy, str, None]


def resolve_policy(policy: PolicyArg) -> UnknownMemberPolicy:
    if policy is None:
        policy = config.UNKNOWN_MEMBER_POLICY
    if isinstance(policy, UnknownMemberPolicy):
        return policy
    try:
        return UnknownMemberPolicy(str(policy).lower().strip())
    except ValueError:
        raise SettingsError(f"Unknown member policy must be ignore, collect or reject, got {policy!r}") from None


class MemberGuard:
    """Answers "may this member id take part in the fold?" under a policy."""

    def __init__(
        self,
        member_ids: Iterable[str],
        policy: PolicyArg = None,
        unknown_refs: Optional[List[UnknownReference]] = None,
    ) -> None:
        self.member_ids = set(member_ids)
        self.policy = resolve_policy(policy)
        self.unknown_refs = unknown_refs

    def known(self, member_id: str, source: str, record_id: Optional[str] = None) -> bool:
        if member_id in self.member_ids:
            return True

        if self.policy is UnknownMemberPolicy.reject:
            raise UnknownMemberError(member_id, source, record_id)

        if self.policy is UnknownMemberPolicy.collect:
            log.warning("Skipping unknown member %r (%s, record=%s)", member_id, source, record_id)
            if self.unknown_refs is not None:
                self.unknown_refs.append(
                    UnknownReference(member_id=member_id, source=source, record_id=record_id)
                )
        return False
