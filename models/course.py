"""Datenmodell für eine Lehrveranstaltung (Mata Kuliah, Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Course(BaseModel):
    """Repräsentiert eine Lehrveranstaltung mit SKS-Gewicht."""

    id: str                                 # "mk-1"
    code: str                               # "IF101"
    name: str                               # "Algoritma dan Pemrograman"
    credits: int = Field(gt=0)              # SKS
    coordinator_id: Optional[str] = None    # Standard-Koordinator (≠ PJMK pro Sitzung)

    @field_validator("id", "code", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return str(v).strip()

    @field_validator("coordinator_id", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
