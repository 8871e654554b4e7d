"""Pydantic schemas for on-disk configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SMTPConfig(BaseModel):
    """SMTP submission settings read from the JSON configuration file."""

    model_config = ConfigDict(frozen=True)

    smtp_host: str = Field(..., min_length=1)
    smtp_port: str = Field(..., description='Port as a string, e.g. "587".')
    from_email: str = Field(..., min_length=1)
    email_password: str = Field(..., repr=False)
    to_email: str = Field(..., min_length=1)

    @field_validator("smtp_port")
    @classmethod
    def _port_is_numeric(cls, value: str) -> str:
        if not value.isdigit() or not 0 < int(value) < 65536:
            raise ValueError(f"smtp_port must be a TCP port number, got {value!r}")
        return value

    @property
    def port_number(self) -> int:
        return int(self.smtp_port)
