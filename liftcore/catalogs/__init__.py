from liftcore.catalogs.base import Catalog
from liftcore.catalogs.equipment import EquipmentCatalog
from liftcore.catalogs.scenarios import ScenarioCatalog, authoring_problems

__all__ = ["Catalog", "EquipmentCatalog", "ScenarioCatalog", "authoring_problems"]
