"""In-memory unit catalog."""

from __future__ import annotations

from collections.abc import Iterable

from nyala_presale.domain.models.unit import Unit
from nyala_presale.domain.ports.unit_resolver import UnitResolver


class InMemoryUnitCatalog(UnitResolver):
    """Resolves unit ids against a fixed list of units."""

    def __init__(self, units: Iterable[Unit] = ()) -> None:
        self._units: dict[str, Unit] = {unit.id: unit for unit in units}

    def resolve(self, unit_id: str) -> Unit | None:
        return self._units.get(unit_id)

    def __len__(self) -> int:
        return len(self._units)
