"""
Cooldown Repository - per (user, list) re-join restrictions.
"""

from datetime import datetime
from typing import List, Optional

from core.database import storage_guard
from core.logging import get_logger
from ..models import Cooldown

logger = get_logger("signup_cooldown_repository")


class CooldownRepository:
    """Tortoise-backed store of cooldown expiry timestamps keyed by (user_id, list_name)."""

    @storage_guard("cooldown.find")
    async def find(self, user_id: int, list_name: str) -> Optional[Cooldown]:
        return await Cooldown.get_or_none(user_id=user_id, list_name=list_name)

    @storage_guard("cooldown.upsert")
    async def upsert(self, user_id: int, list_name: str, expires_at: datetime) -> Cooldown:
        """Create or overwrite the single cooldown for (user_id, list_name)."""
        cooldown, created = await Cooldown.update_or_create(
            defaults={"expires_at": expires_at},
            user_id=user_id,
            list_name=list_name,
        )
        logger.info(
            "cooldown_upserted",
            user_id=user_id,
            list_name=list_name,
            expires_at=expires_at.isoformat(),
            replaced=not created,
        )
        return cooldown

    @storage_guard("cooldown.delete")
    async def delete(self, user_id: int, list_name: str) -> bool:
        """Returns False when no record existed."""
        deleted = await Cooldown.filter(user_id=user_id, list_name=list_name).delete()
        return deleted > 0

    @storage_guard("cooldown.delete_if_expired")
    async def delete_if_expired(self, user_id: int, list_name: str, now: datetime) -> bool:
        """Delete the record only if it is still expired at ``now``.

        Conditional on expires_at so a confirm that lands between the caller's
        read and this delete is not wiped out.
        """
        deleted = await Cooldown.filter(user_id=user_id, list_name=list_name, expires_at__lte=now).delete()
        return deleted > 0

    @storage_guard("cooldown.find_active")
    async def find_active(self, now: datetime) -> List[Cooldown]:
        """All cooldowns with expires_at > now, soonest expiry first."""
        return await Cooldown.filter(expires_at__gt=now).order_by("expires_at", "id")
