from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ServiceCreateDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    location: str = Field(min_length=1, max_length=256)
    contact_info: str | None = Field(default=None, max_length=256)
    hourly_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    available_slots: dict[str, Any] = Field(default_factory=dict)


class ServiceQueryDTO(BaseModel):
    """Query string filters; values stay raw so the use case owns their validation."""

    model_config = ConfigDict(populate_by_name=True)

    location: str | None = None
    max_rate: str | None = Field(default=None, alias="maxRate")
    available_day: str | None = Field(default=None, alias="availableDay")


class ServiceResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    contact_info: str | None
    hourly_rate: Decimal
    available_slots: dict[str, Any]

    @field_serializer("hourly_rate")
    def _rate(self, value: Decimal) -> float:
        return float(value)
