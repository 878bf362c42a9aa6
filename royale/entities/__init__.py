"""Entities that live in a match."""

from royale.entities.actor import Actor, SupplementaryActor
from royale.entities.resource import Resource, capacity_for

__all__ = ["Actor", "SupplementaryActor", "Resource", "capacity_for"]
