import pytest

from arc_loot_helper.models import GameData

RAW_CATALOG = {
    "items": [
        {"id": "metal-parts", "name": {"en": "Metal Parts"}, "type": "Basic Material", "value": 75},
        {"id": "spring", "name": {"en": "Spring"}, "type": "Basic Material"},
        {"id": "dog-collar", "name": {"en": "Dog Collar"}, "type": "Trinket"},
        {"id": "lemon", "name": {"en": "Lemon"}, "type": "Nature"},
    ],
    "quests": [
        {
            "id": "q1",
            "name": {"en": "Picking Up The Pieces"},
            "requiredItemIds": [
                {"itemId": "metal-parts", "quantity": 10},
                {"itemId": "spring", "quantity": 5},
            ],
        },
        {"id": "q2", "requiredItemIds": [{"itemId": "metal-parts", "quantity": 20}]},
        {"id": "q3", "requiredItemIds": [{"itemId": "metal-parts", "quantity": 100}]},
        {"id": "q4"},
    ],
    "hideoutModules": [
        {
            "id": "scrappy",
            "name": {"en": "Scrappy"},
            "maxLevel": 3,
            "levels": [
                {"level": 1, "requirementItemIds": [{"itemId": "dog-collar", "quantity": 1}]},
                {"level": 2, "requirementItemIds": [{"itemId": "lemon", "quantity": 3}]},
                {"level": 3, "requirementItemIds": [{"itemId": "metal-parts", "quantity": 50}]},
            ],
        }
    ],
    "projects": [
        {
            "id": "expedition",
            "name": {"en": "Expedition"},
            "phases": [
                {"phase": 1, "requirementItemIds": [{"itemId": "spring", "quantity": 15}]},
                {"phase": 2, "requirementCategories": {"Combat Items": 250000}},
            ],
        }
    ],
}


@pytest.fixture
def catalog() -> GameData:
    return GameData.from_dict(RAW_CATALOG)


@pytest.fixture
def raw_catalog() -> dict:
    return RAW_CATALOG
