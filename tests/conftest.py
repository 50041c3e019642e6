"""
Pytest configuration and fixtures for the rosterbot test suite.

This module provides:
- An in-memory SQLite database initialised through Tortoise for each test
- Repository / service fixtures wired to that database
- Discord.py object mocks
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from tortoise import Tortoise

from cogs.signup.constants import LISTS_BY_ID
from cogs.signup.repositories import CooldownRepository, MembershipRepository
from cogs.signup.services import CooldownEnforcer, SignupService


# =============================================================================
# Database - real Tortoise models on in-memory SQLite
# =============================================================================

@pytest_asyncio.fixture
async def db():
    """Fresh schema per test, torn down afterwards."""
    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["cogs.signup.models"]},
        use_tz=True,
        timezone="UTC",
    )
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def now() -> datetime:
    """A fixed 'current time' so expiry arithmetic is exact."""
    return datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def memberships(db) -> MembershipRepository:
    return MembershipRepository()


@pytest.fixture
def cooldowns(db) -> CooldownRepository:
    return CooldownRepository()


@pytest.fixture
def service(memberships, cooldowns, now) -> SignupService:
    return SignupService(memberships, cooldowns, clock=lambda: now)


@pytest.fixture
def enforcer(memberships, cooldowns, now) -> CooldownEnforcer:
    return CooldownEnforcer(memberships, cooldowns, clock=lambda: now)


@pytest.fixture
def crystal():
    """List "1": Crystal of Chaos, one week cooldown."""
    return LISTS_BY_ID["1"]


@pytest.fixture
def raid():
    return LISTS_BY_ID["2"]


# =============================================================================
# Discord.py Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_bot():
    """Create a mock Discord bot instance."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 123456789
    bot.user.name = "TestBot"
    bot.guilds = []
    bot.get_channel = MagicMock(return_value=None)
    return bot


@pytest.fixture
def mock_user():
    """Create a mock Discord member."""
    user = MagicMock()
    user.id = 222222222
    user.name = "TestUser"
    user.display_name = "Test User"
    user.mention = "<@222222222>"
    user.bot = False
    user.guild_permissions.administrator = False
    return user


@pytest.fixture
def mock_admin():
    admin = MagicMock()
    admin.id = 333333333
    admin.name = "AdminUser"
    admin.mention = "<@333333333>"
    admin.bot = False
    admin.guild_permissions.administrator = True
    return admin


@pytest.fixture
def mock_ctx(mock_user):
    """Create a mock commands.Context invoked by ``mock_user`` in a guild."""
    ctx = MagicMock()
    ctx.author = mock_user
    ctx.guild = MagicMock()
    ctx.guild.id = 987654321
    ctx.channel = MagicMock()
    ctx.channel.id = 444444444
    ctx.clean_prefix = "!"
    ctx.prefix = "!"
    ctx.send = AsyncMock()
    return ctx
