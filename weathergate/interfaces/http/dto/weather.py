from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class WeatherQueryDTO(BaseModel):
    city: str = Field(min_length=1, max_length=128)

    @field_validator("city", mode="before")
    @classmethod
    def strip_city(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value
