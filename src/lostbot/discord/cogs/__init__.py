"""Slash command cogs."""

from .base import GENERIC_FAILURE, GuardedCog
from .clash import ClashCog, MembersPageButton
from .community import CommunityCog
from .fun import FunCog

__all__ = ["GuardedCog", "GENERIC_FAILURE", "ClashCog", "MembersPageButton", "CommunityCog", "FunCog"]
