"""
Signup Service - list membership rules with cooldown enforcement.

State of a (user, list) pair:
    Idle -> Member          join
    Member -> Idle          leave / remove / clear
    Member -> Cooldown      confirm
    Cooldown -> Idle        removecd, or expiry followed by the next join

A join while on an active cooldown is rejected, never queued.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from core.errors import ActiveCooldown, AlreadyMember, CooldownNotFound, NotAMember
from core.logging import get_logger
from ..constants import LIST_DEFINITIONS, ListDefinition
from ..models import Cooldown
from ..repositories import CooldownRepository, MembershipRepository

logger = get_logger("signup_service")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes coming back from storage as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class ListStatus:
    definition: ListDefinition
    members: List[int] = field(default_factory=list)
    cooldowns: List[Cooldown] = field(default_factory=list)


@dataclass
class BoardSnapshot:
    generated_at: datetime
    lists: List[ListStatus] = field(default_factory=list)


class SignupService:
    """Join/leave/confirm operations over the membership and cooldown stores.

    Each method is a self-contained unit: it leaves both stores consistent on
    its own, with no state carried between calls.
    """

    def __init__(
        self,
        memberships: MembershipRepository,
        cooldowns: CooldownRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.memberships = memberships
        self.cooldowns = cooldowns
        self.clock = clock

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now) if now is not None else self.clock()

    async def join(self, definition: ListDefinition, user_id: int, now: Optional[datetime] = None) -> None:
        """Enroll ``user_id``.

        The cooldown check runs before any membership write. An expired
        cooldown is purged here instead of by a separate sweep.

        Raises:
            ActiveCooldown: cooldown still running, nothing was changed.
            AlreadyMember: user already enrolled, nothing was changed.
        """
        now = self._now(now)
        cooldown = await self.cooldowns.find(user_id, definition.name)
        if cooldown is not None:
            expires_at = as_utc(cooldown.expires_at)
            if expires_at > now:
                raise ActiveCooldown(user_id, definition.name, expires_at, expires_at - now)
            if await self.cooldowns.delete_if_expired(user_id, definition.name, now):
                logger.info("stale_cooldown_purged", user_id=user_id, list_name=definition.name)

        if not await self.memberships.add_user(definition.name, user_id):
            raise AlreadyMember(user_id, definition.name)
        logger.info("list_joined", user_id=user_id, list_name=definition.name)

    async def leave(self, definition: ListDefinition, user_id: int) -> None:
        if not await self.memberships.remove_user(definition.name, user_id):
            raise NotAMember(user_id, definition.name)
        logger.info("list_left", user_id=user_id, list_name=definition.name)

    async def remove(self, definition: ListDefinition, user_id: int, actor_id: Optional[int] = None) -> None:
        """Admin force-remove. Same store effect as leave, no cooldown."""
        if not await self.memberships.remove_user(definition.name, user_id):
            raise NotAMember(user_id, definition.name)
        logger.info("list_member_removed", user_id=user_id, list_name=definition.name, actor_id=actor_id)

    async def clear(self, definition: ListDefinition, actor_id: Optional[int] = None) -> int:
        removed = await self.memberships.clear(definition.name)
        logger.info("list_cleared", list_name=definition.name, removed=removed, actor_id=actor_id)
        return removed

    async def confirm(
        self,
        definition: ListDefinition,
        user_id: int,
        now: Optional[datetime] = None,
        actor_id: Optional[int] = None,
    ) -> Cooldown:
        """Evict the user and (re)start their cooldown at now + list cooldown.

        Unconditional: works whether or not the user is listed and replaces
        any earlier cooldown for the same list.
        """
        now = self._now(now)
        was_member = await self.memberships.pull_user(definition.name, user_id)
        cooldown = await self.cooldowns.upsert(user_id, definition.name, now + definition.cooldown)
        logger.info(
            "list_confirmed",
            user_id=user_id,
            list_name=definition.name,
            was_member=was_member,
            actor_id=actor_id,
        )
        return cooldown

    async def remove_cooldown(self, definition: ListDefinition, user_id: int, actor_id: Optional[int] = None) -> None:
        if not await self.cooldowns.delete(user_id, definition.name):
            raise CooldownNotFound(user_id, definition.name)
        logger.info("cooldown_removed", user_id=user_id, list_name=definition.name, actor_id=actor_id)

    async def remaining_cooldown(
        self, definition: ListDefinition, user_id: int, now: Optional[datetime] = None
    ) -> Optional[timedelta]:
        """Time left on the user's cooldown, or None if there is no active one."""
        now = self._now(now)
        cooldown = await self.cooldowns.find(user_id, definition.name)
        if cooldown is None or as_utc(cooldown.expires_at) <= now:
            return None
        return as_utc(cooldown.expires_at) - now

    async def snapshot(self, now: Optional[datetime] = None) -> BoardSnapshot:
        """Current members and active cooldowns of every configured list."""
        now = self._now(now)
        members = await self.memberships.get_all(d.name for d in LIST_DEFINITIONS)
        active = await self.cooldowns.find_active(now)

        snapshot = BoardSnapshot(generated_at=now)
        for definition in LIST_DEFINITIONS:
            snapshot.lists.append(ListStatus(
                definition=definition,
                members=members.get(definition.name, []),
                cooldowns=[c for c in active if c.list_name == definition.name],
            ))
        return snapshot
