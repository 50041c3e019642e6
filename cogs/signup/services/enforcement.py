"""
Cooldown enforcement - periodic reconciliation of cooldowns against membership.

Restores the invariant "nobody is listed on a list they are on an active
cooldown for", whatever left them there (interleaved joins, manual DB edits,
older bot versions). Expired cooldowns are left alone: join purges them.
"""

from datetime import datetime
from typing import Callable, Optional

from core.logging import get_logger
from ..repositories import CooldownRepository, MembershipRepository
from .signup_service import utcnow, as_utc

logger = get_logger("signup_enforcement")


class CooldownEnforcer:

    def __init__(
        self,
        memberships: MembershipRepository,
        cooldowns: CooldownRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.memberships = memberships
        self.cooldowns = cooldowns
        self.clock = clock

    async def enforce(self, now: Optional[datetime] = None) -> int:
        """Pull every actively cooled-down user from the matching list.

        Idempotent. Returns the number of memberships actually removed.
        """
        now = as_utc(now) if now is not None else self.clock()
        removed = 0
        for cooldown in await self.cooldowns.find_active(now):
            if await self.memberships.pull_user(cooldown.list_name, cooldown.user_id):
                removed += 1
                logger.warning(
                    "cooldown_violation_healed",
                    user_id=cooldown.user_id,
                    list_name=cooldown.list_name,
                    expires_at=as_utc(cooldown.expires_at).isoformat(),
                )
        return removed
