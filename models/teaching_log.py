"""Datenmodell für einen Anwesenheitseintrag (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TeachingLog(BaseModel):
    """Realisierte Sitzung eines Dosen in einem Jadwal-Eintrag."""

    id: str
    schedule_id: str
    lecturer_id: str
    week: int = Field(ge=1, le=16)      # Pertemuan 1..16
    timestamp: Optional[str] = None
    date: Optional[str] = None          # YYYY-MM-DD

    @field_validator("id", "schedule_id", "lecturer_id", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return str(v).strip()
