"""
Unit tests for CooldownRepository.
"""
from datetime import timedelta

import pytest

from cogs.signup.models import Cooldown


class TestUpsert:

    @pytest.mark.asyncio
    async def test_creates_record(self, cooldowns, now):
        expires = now + timedelta(days=7)

        cooldown = await cooldowns.upsert(1, "Crystal of Chaos", expires)

        assert cooldown.expires_at == expires
        found = await cooldowns.find(1, "Crystal of Chaos")
        assert found is not None
        assert found.expires_at == expires

    @pytest.mark.asyncio
    async def test_overwrites_existing_record(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(days=1))
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(days=7))

        assert await Cooldown.filter(user_id=1, list_name="Crystal of Chaos").count() == 1
        found = await cooldowns.find(1, "Crystal of Chaos")
        assert found.expires_at == now + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_keyed_by_user_and_list(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(days=1))
        await cooldowns.upsert(1, "Abyssal Raid", now + timedelta(days=2))
        await cooldowns.upsert(2, "Crystal of Chaos", now + timedelta(days=3))

        assert await Cooldown.all().count() == 3


class TestFindAndDelete:

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, cooldowns):
        assert await cooldowns.find(1, "Crystal of Chaos") is None

    @pytest.mark.asyncio
    async def test_delete(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(days=1))

        assert await cooldowns.delete(1, "Crystal of Chaos") is True
        assert await cooldowns.delete(1, "Crystal of Chaos") is False
        assert await cooldowns.find(1, "Crystal of Chaos") is None

    @pytest.mark.asyncio
    async def test_delete_if_expired_keeps_active_record(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(minutes=1))

        assert await cooldowns.delete_if_expired(1, "Crystal of Chaos", now) is False
        assert await cooldowns.find(1, "Crystal of Chaos") is not None

    @pytest.mark.asyncio
    async def test_delete_if_expired_removes_stale_record(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now - timedelta(minutes=1))

        assert await cooldowns.delete_if_expired(1, "Crystal of Chaos", now) is True
        assert await cooldowns.find(1, "Crystal of Chaos") is None

    @pytest.mark.asyncio
    async def test_expiry_exactly_now_counts_as_expired(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now)

        assert await cooldowns.find_active(now) == []
        assert await cooldowns.delete_if_expired(1, "Crystal of Chaos", now) is True


class TestFindActive:

    @pytest.mark.asyncio
    async def test_only_future_expiries_sorted(self, cooldowns, now):
        await cooldowns.upsert(1, "Crystal of Chaos", now + timedelta(days=3))
        await cooldowns.upsert(2, "Crystal of Chaos", now - timedelta(days=1))
        await cooldowns.upsert(3, "Abyssal Raid", now + timedelta(hours=1))

        active = await cooldowns.find_active(now)

        assert [(c.user_id, c.list_name) for c in active] == [(3, "Abyssal Raid"), (1, "Crystal of Chaos")]
