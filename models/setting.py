"""Datenmodell für eine globale Einstellung (Key/Value)."""

from pydantic import BaseModel


class AppSetting(BaseModel):
    """Globale Einstellung, z.B. key="schedule_lock", value="true"."""

    id: str
    key: str
    value: str

    @property
    def is_true(self) -> bool:
        return self.value.strip().lower() == "true"
