from .membership_repository import MembershipRepository
from .cooldown_repository import CooldownRepository

__all__ = ["MembershipRepository", "CooldownRepository"]
