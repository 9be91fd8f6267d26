"""Unit domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Unit:
    """A villa unit offered in the pre-sale."""

    id: str
    code: str  # e.g. "A-101"
    unit_type: str  # "1-bed", "2-bed", "3-bed-a", "3-bed-b"
    floor: int
    area_sqm: float
    orientation: str
    price_usd: int
    status: str = "available"  # "available", "held" or "sold"
