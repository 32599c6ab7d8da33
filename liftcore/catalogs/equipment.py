"""Equipment catalog."""

from __future__ import annotations

from typing import Iterable, List, Optional

from liftcore.catalogs.base import Catalog
from liftcore.config import DEFAULT_SETTINGS, EngineSettings
from liftcore.models.equipment import EquipmentProfile


class EquipmentCatalog(Catalog[EquipmentProfile]):
    """Registry of crane profiles available to scenarios."""

    def __init__(
        self,
        records: Optional[Iterable[EquipmentProfile]] = None,
        settings: EngineSettings | None = None,
    ):
        if records is None:
            from liftcore.catalogs.library import EQUIPMENT_LIBRARY

            records = EQUIPMENT_LIBRARY
        self.settings = settings or DEFAULT_SETTINGS
        super().__init__(records)

    @property
    def kind(self) -> str:
        return "equipment"

    def register(self, profile: EquipmentProfile) -> EquipmentProfile:
        return self._put(profile)

    def for_load(self, weight: float, radius: float) -> List[EquipmentProfile]:
        """Profiles that can lift ``weight`` kg at ``radius`` m."""
        return [
            p for p in self.list()
            if radius <= p.max_radius
            and p.capacity_at(radius, self.settings.capacity_lookup) >= weight
        ]
