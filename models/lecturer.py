"""Datenmodell für eine Lehrkraft (Dosen, Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator


class Lecturer(BaseModel):
    """Repräsentiert einen Dosen. NIP dient als Standard-Login und Eindeutigkeitsanker."""

    id: str
    name: str
    nip: str
    position: str = ""                  # Jabatan, Freitext
    expertise: str = ""
    password: Optional[str] = None      # überschreibt den NIP-Login

    @field_validator("id", "nip", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return str(v).strip()

    @property
    def normalized_position(self) -> str:
        """Jabatan normalisiert für Statistiken ("lektor kepala" → "Lektor Kepala")."""
        cleaned = " ".join(self.position.split())
        return cleaned.title() if cleaned else "Tanpa Jabatan"
