from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CredentialsRequestDTO(BaseModel):
    login: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("login")
    @classmethod
    def validate_login(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Login cannot be blank")
        return value
