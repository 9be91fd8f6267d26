"""Unit catalog adapters."""

from nyala_presale.adapters.catalog.in_memory_unit_catalog import InMemoryUnitCatalog

__all__ = ["InMemoryUnitCatalog"]
