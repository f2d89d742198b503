"""Persistence collaborators used by the service layer."""

from .perk_repository import PerkRepository

__all__ = ["PerkRepository"]
