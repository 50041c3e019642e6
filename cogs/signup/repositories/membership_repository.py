"""
Membership Repository - which users are enrolled in which list.

Membership records are get-or-create: reading a list that has never been
touched creates its (empty) record, so callers never see "list missing".
"""

from typing import Dict, Iterable, List

from tortoise.exceptions import IntegrityError

from core.database import storage_guard
from core.logging import get_logger
from ..models import ListMembership, ListMember

logger = get_logger("signup_membership_repository")


class MembershipRepository:
    """Tortoise-backed store mapping list name to enrolled user ids."""

    @storage_guard("membership.get_or_create")
    async def get_or_create(self, list_name: str) -> ListMembership:
        """Return the membership record for ``list_name``, creating it if needed. Idempotent."""
        membership, created = await ListMembership.get_or_create(list_name=list_name)
        if created:
            logger.info("membership_created", list_name=list_name)
        return membership

    @storage_guard("membership.get_users")
    async def get_users(self, list_name: str) -> List[int]:
        """Enrolled user ids in join order."""
        await self.get_or_create(list_name)
        return await ListMember.filter(membership_id=list_name).order_by("id").values_list("user_id", flat=True)

    @storage_guard("membership.get_all")
    async def get_all(self, list_names: Iterable[str]) -> Dict[str, List[int]]:
        names = list(list_names)
        result: Dict[str, List[int]] = {name: [] for name in names}
        for name in names:
            await self.get_or_create(name)

        rows = await ListMember.filter(membership_id__in=names).order_by("id").values_list("membership_id", "user_id")
        for list_name, user_id in rows:
            result[list_name].append(user_id)
        return result

    @storage_guard("membership.is_member")
    async def is_member(self, list_name: str, user_id: int) -> bool:
        return await ListMember.filter(membership_id=list_name, user_id=user_id).exists()

    @storage_guard("membership.add_user")
    async def add_user(self, list_name: str, user_id: int) -> bool:
        """Add ``user_id`` to the list.

        The insert is guarded by the (membership, user_id) unique constraint,
        so two concurrent joins cannot both succeed.

        Returns:
            bool: True if inserted, False if the user was already a member.
        """
        membership = await self.get_or_create(list_name)
        try:
            await ListMember.create(membership=membership, user_id=user_id)
        except IntegrityError:
            return False
        return True

    @storage_guard("membership.remove_user")
    async def remove_user(self, list_name: str, user_id: int) -> bool:
        """Returns False when the user was not a member."""
        deleted = await ListMember.filter(membership_id=list_name, user_id=user_id).delete()
        return deleted > 0

    @storage_guard("membership.pull_user")
    async def pull_user(self, list_name: str, user_id: int) -> bool:
        """Remove if present. Never treats "not a member" as an error.

        Returns whether a row was actually removed (for logging only).
        """
        deleted = await ListMember.filter(membership_id=list_name, user_id=user_id).delete()
        return deleted > 0

    @storage_guard("membership.clear")
    async def clear(self, list_name: str) -> int:
        """Empty the list unconditionally. Returns how many users were removed."""
        await self.get_or_create(list_name)
        return await ListMember.filter(membership_id=list_name).delete()
