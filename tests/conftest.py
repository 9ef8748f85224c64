import pytest

from aon_import.clients import InMemoryCatalog
from aon_import.models import CatalogInfo

EQUIPMENT = CatalogInfo(id="pf2e.equipment-srd", label="Equipment", system="pf2e")
SPELLS = CatalogInfo(id="pf2e.spells-srd", label="Spells", system="pf2e")
OTHER_SYSTEM = CatalogInfo(id="dnd5e.items", label="Items (SRD)", system="dnd5e")


@pytest.fixture
def catalog():
    return InMemoryCatalog({
        EQUIPMENT: [
            {"_id": "eq1", "name": "Longsword", "type": "weapon", "system": {"level": {"value": 0}}},
            {"_id": "eq2", "name": "Healing Potion (Minor)", "type": "consumable"},
            {"_id": "eq3", "name": "Rope", "type": "equipment"},
        ],
        SPELLS: [
            {"_id": "sp1", "name": "longsword", "type": "spell"},
        ],
        OTHER_SYSTEM: [
            {"_id": "x1", "name": "Longsword", "type": "weapon"},
        ],
    })
