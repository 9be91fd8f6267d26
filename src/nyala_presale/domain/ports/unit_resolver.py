"""Unit resolver port."""

from typing import Protocol

from nyala_presale.domain.models.unit import Unit


class UnitResolver(Protocol):
    """Port for resolving unit identifiers to unit records."""

    def resolve(self, unit_id: str) -> Unit | None:
        """Get the unit for an id, or None if the catalog does not know it."""
        ...
