"""Datenmodell für ein Klassenlabel (Kelas / PDB, Pydantic v2)."""

from pydantic import BaseModel


class ClassName(BaseModel):
    """Kohorten-Label wie "PDB01" – unabhängig von der Lehrveranstaltung."""

    id: str      # "cls-1"
    name: str    # "PDB01"
