"""Site settings singleton entity."""

from dataclasses import dataclass, field, fields
from typing import Any

from domain.entities.clock import utc_now_iso

SETTINGS_ID = 1


@dataclass
class SiteSettings:
    """Organization contact details plus calculator and map tunables.

    There is exactly one row (``id == 1``); the client only reads and
    updates it.
    """

    org_name: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    org_address: str = ""
    # Calculator
    kwh_per_kw_per_month: float = 130
    tariff_per_kwh: float = 8.5
    system_cost_per_kw: float = 45000
    subsidy_percentage: float = 30
    maintenance_cost_per_kw_year: float = 500
    # Carousel
    carousel_speed: float = 30
    # Map
    map_center_lat: float = 21.0
    map_center_lng: float = 78.0
    map_zoom: int = 5
    id: int = SETTINGS_ID
    updated_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "SiteSettings":
        """Build settings from the ``settings`` row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in row.items() if key in known})
