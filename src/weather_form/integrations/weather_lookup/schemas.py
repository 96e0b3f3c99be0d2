"""
Pydantic schemas for the weather provider's location search.
"""

from pydantic import BaseModel, ConfigDict, Field


class LocationMatch(BaseModel):
    """One candidate returned by the location search endpoint."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="City name as known by the provider")
    country: str = Field(..., description="Country name as known by the provider")
    id: int | None = Field(None, description="Provider location id")
    region: str | None = Field(None, description="Region or state")
    lat: float | None = Field(None, description="Latitude")
    lon: float | None = Field(None, description="Longitude")
    url: str | None = Field(None, description="Provider location slug")


class LocationSearchQuery(BaseModel):
    """Query parameters for the location search endpoint."""

    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)

    @property
    def q(self) -> str:
        return f"{self.city},{self.country}"
