"""Ports (interfaces) for the ports-and-adapters architecture."""

from nyala_presale.domain.ports.clock import Clock
from nyala_presale.domain.ports.key_value_storage import KeyValueStorage
from nyala_presale.domain.ports.shortlist_persistence import ShortlistPersistence
from nyala_presale.domain.ports.unit_resolver import UnitResolver

__all__ = [
    "Clock",
    "KeyValueStorage",
    "ShortlistPersistence",
    "UnitResolver",
]
