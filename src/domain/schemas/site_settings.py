"""Pydantic schema for the settings singleton."""

from pydantic import BaseModel, Field


class SiteSettingsUpdate(BaseModel):
    """Schema for updating settings (all fields optional, id is fixed)."""

    org_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    org_address: str | None = None
    kwh_per_kw_per_month: float | None = Field(None, gt=0)
    tariff_per_kwh: float | None = Field(None, gt=0)
    system_cost_per_kw: float | None = Field(None, ge=0)
    subsidy_percentage: float | None = Field(None, ge=0, le=100)
    maintenance_cost_per_kw_year: float | None = Field(None, ge=0)
    carousel_speed: float | None = Field(None, gt=0)
    map_center_lat: float | None = Field(None, ge=-90, le=90)
    map_center_lng: float | None = Field(None, ge=-180, le=180)
    map_zoom: int | None = Field(None, ge=0, le=22)
