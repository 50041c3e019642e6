"""Signup services - list rules and cooldown enforcement."""

from .signup_service import SignupService, BoardSnapshot, ListStatus, utcnow, as_utc
from .enforcement import CooldownEnforcer

__all__ = [
    "SignupService",
    "BoardSnapshot",
    "ListStatus",
    "CooldownEnforcer",
    "utcnow",
    "as_utc",
]
