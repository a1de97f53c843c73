from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from autoservice.domain.bookings.entities import format_slot_time


class BookingRequestDTO(BaseModel):
    client_name: str = Field(min_length=1, max_length=128)
    client_email: str | None = Field(default=None, max_length=254)
    date: dt.date
    time: dt.time

    @field_validator("client_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("client_email")
    @classmethod
    def normalise_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class BookingResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_id: int
    client_name: str
    client_email: str | None
    date: dt.date
    time: dt.time
    user_id: int | None
    created_at: dt.datetime

    @field_serializer("time")
    def _format_time(self, value: dt.time) -> str:
        return format_slot_time(value)
