"""Shortlist state domain models."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from nyala_presale.domain.models.unit import Unit


@dataclass(frozen=True)
class ShortlistState:
    """Immutable snapshot of the shortlist.

    ``ordered_ids`` holds the same ids as ``unit_ids`` in insertion order.
    ``items`` holds at most one resolved unit per id, in the same order.
    """

    unit_ids: frozenset[str] = frozenset()
    ordered_ids: tuple[str, ...] = ()
    items: tuple[Unit, ...] = ()

    @property
    def count(self) -> int:
        """Number of shortlisted units."""
        return len(self.unit_ids)

    def contains(self, unit_id: str) -> bool:
        """Check whether a unit is shortlisted."""
        return unit_id in self.unit_ids


class PersistedShortlist(BaseModel):
    """Shortlist contents as handed to and from persistence."""

    model_config = ConfigDict(frozen=True)

    unit_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShortlistStorageReport:
    """Observable outcome of shortlist persistence for the current session."""

    is_degraded: bool = False
    errors: tuple[str, ...] = field(default_factory=tuple)
