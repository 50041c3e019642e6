from dataclasses import dataclass, field
from typing import Optional

from .board import BoardState
from .repositories import CooldownRepository, MembershipRepository
from .services import CooldownEnforcer, SignupService


@dataclass
class SignupContext:
    """Process-wide state of the signup feature, created once in main.py and
    handed to the cog through ``bot.signup_context``."""
    service: SignupService
    enforcer: CooldownEnforcer
    board_state: BoardState = field(default_factory=BoardState)

    @classmethod
    def create(cls, board_channel_id: Optional[int] = None) -> "SignupContext":
        memberships = MembershipRepository()
        cooldowns = CooldownRepository()
        return cls(
            service=SignupService(memberships, cooldowns),
            enforcer=CooldownEnforcer(memberships, cooldowns),
            board_state=BoardState(channel_id=board_channel_id),
        )
