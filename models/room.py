"""Datenmodell für einen Raum (Pydantic v2)."""

from pydantic import BaseModel, Field, field_validator


class Room(BaseModel):
    """Repräsentiert einen Hörsaal / Seminarraum."""

    id: str                         # "R-101"
    name: str                       # "Ruang 101"
    capacity: int = Field(0, ge=0)
    building: str = ""
    location: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return str(v).strip()
