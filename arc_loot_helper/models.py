"""Catalog records parsed from the arcraiders-data JSON files.

Every ``from_dict`` checks the structure it walks and raises
:class:`~arc_loot_helper.errors.CatalogShapeError` on a mismatch.  Optional
requirement fields that are missing or ``null`` mean "no requirements" and
are never an error, so a legitimately empty quest and a malformed one can
be told apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import CatalogShapeError

LocalizedText = Dict[str, str]


def _expect_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise CatalogShapeError(path, f"expected object, got {type(value).__name__}")
    return value


def _expect_list(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise CatalogShapeError(path, f"expected list, got {type(value).__name__}")
    return value


def _optional_list(value: Any, path: str) -> List[Any]:
    if value is None:
        return []
    return _expect_list(value, path)


def _expect_id(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value:
        raise CatalogShapeError(path, "expected non-empty string id")
    return value


def _expect_int(value: Any, path: str, *, min_value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise CatalogShapeError(path, f"expected integer, got {type(value).__name__}")
    if value < min_value:
        raise CatalogShapeError(path, f"expected integer >= {min_value}, got {value}")
    return value


def _localized(value: Any) -> LocalizedText:
    if isinstance(value, Mapping):
        return {str(lang): str(text) for lang, text in value.items()}
    if isinstance(value, str):
        return {"en": value}
    return {}


def _freeze(record: Any, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if isinstance(value, Mapping):
            object.__setattr__(record, name, MappingProxyType(dict(value)))
        else:
            object.__setattr__(record, name, tuple(value))


def _parse_entries(value: Any, path: str) -> List["ItemRequirementEntry"]:
    return [
        ItemRequirementEntry.from_dict(entry, f"{path}[{index}]")
        for index, entry in enumerate(_optional_list(value, path))
    ]


@dataclass(frozen=True, slots=True)
class ItemRequirementEntry:
    item_id: str
    quantity: int

    @classmethod
    def from_dict(cls, data: Any, path: str = "entry") -> "ItemRequirementEntry":
        data = _expect_mapping(data, path)
        return cls(
            item_id=_expect_id(data.get("itemId"), f"{path}.itemId"),
            quantity=_expect_int(data.get("quantity"), f"{path}.quantity", min_value=0),
        )


@dataclass(frozen=True, slots=True)
class Quest:
    id: str
    name: LocalizedText = field(default_factory=dict)
    trader: str = ""
    required_items: Tuple[ItemRequirementEntry, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "required_items")

    @classmethod
    def from_dict(cls, data: Any, path: str = "quest") -> "Quest":
        data = _expect_mapping(data, path)
        return cls(
            id=_expect_id(data.get("id"), f"{path}.id"),
            name=_localized(data.get("name")),
            trader=str(data.get("trader") or ""),
            required_items=_parse_entries(data.get("requiredItemIds"), f"{path}.requiredItemIds"),
        )


@dataclass(frozen=True, slots=True)
class HideoutModuleLevel:
    level: int
    required_items: Tuple[ItemRequirementEntry, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "required_items")

    @classmethod
    def from_dict(cls, data: Any, path: str = "level") -> "HideoutModuleLevel":
        data = _expect_mapping(data, path)
        return cls(
            level=_expect_int(data.get("level"), f"{path}.level", min_value=1),
            required_items=_parse_entries(
                data.get("requirementItemIds"), f"{path}.requirementItemIds"
            ),
        )


@dataclass(frozen=True, slots=True)
class HideoutModule:
    id: str
    name: LocalizedText = field(default_factory=dict)
    max_level: int = 0
    levels: Tuple[HideoutModuleLevel, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "levels")

    @classmethod
    def from_dict(cls, data: Any, path: str = "module") -> "HideoutModule":
        data = _expect_mapping(data, path)
        levels = [
            HideoutModuleLevel.from_dict(level, f"{path}.levels[{index}]")
            for index, level in enumerate(_expect_list(data.get("levels"), f"{path}.levels"))
        ]
        max_level = data.get("maxLevel")
        if max_level is not None:
            max_level = _expect_int(max_level, f"{path}.maxLevel", min_value=0)
        return cls(
            id=_expect_id(data.get("id"), f"{path}.id"),
            name=_localized(data.get("name")),
            max_level=len(levels) if max_level is None else max_level,
            levels=levels,
        )


@dataclass(frozen=True, slots=True)
class ProjectPhase:
    """One phase of a project.

    A phase asks for exact item quantities, for an aggregate value per item
    category (``category_requirements``), or both.  Category values cannot
    be turned into item quantities and are left out of every requirement
    map; :attr:`is_value_based` lets callers say so.
    """

    phase: int
    name: LocalizedText = field(default_factory=dict)
    required_items: Tuple[ItemRequirementEntry, ...] = ()
    category_requirements: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "required_items", "category_requirements")

    @property
    def is_value_based(self) -> bool:
        return bool(self.category_requirements)

    @classmethod
    def from_dict(cls, data: Any, path: str = "phase") -> "ProjectPhase":
        data = _expect_mapping(data, path)
        categories: Dict[str, float] = {}
        raw_categories = data.get("requirementCategories")
        if raw_categories is not None:
            categories_path = f"{path}.requirementCategories"
            for category, value in _expect_mapping(raw_categories, categories_path).items():
                if not isinstance(value, (int, float)) or isinstance(value, bool):
                    raise CatalogShapeError(f"{categories_path}.{category}", "expected number")
                categories[str(category)] = value
        return cls(
            phase=_expect_int(data.get("phase"), f"{path}.phase", min_value=1),
            name=_localized(data.get("name")),
            required_items=_parse_entries(
                data.get("requirementItemIds"), f"{path}.requirementItemIds"
            ),
            category_requirements=categories,
        )


@dataclass(frozen=True, slots=True)
class Project:
    id: str
    name: LocalizedText = field(default_factory=dict)
    phases: Tuple[ProjectPhase, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "phases")

    @classmethod
    def from_dict(cls, data: Any, path: str = "project") -> "Project":
        data = _expect_mapping(data, path)
        return cls(
            id=_expect_id(data.get("id"), f"{path}.id"),
            name=_localized(data.get("name")),
            phases=[
                ProjectPhase.from_dict(phase, f"{path}.phases[{index}]")
                for index, phase in enumerate(_expect_list(data.get("phases"), f"{path}.phases"))
            ],
        )


@dataclass(frozen=True, slots=True)
class Item:
    id: str
    name: LocalizedText = field(default_factory=dict)
    type: str = "Misc"
    rarity: Optional[str] = None
    value: int = 0
    weight_kg: float = 0.0

    @property
    def display_name(self) -> str:
        return self.name.get("en") or self.id

    @classmethod
    def from_dict(cls, data: Any, path: str = "item") -> "Item":
        data = _expect_mapping(data, path)
        value = data.get("value")
        weight = data.get("weightKg")
        return cls(
            id=_expect_id(data.get("id"), f"{path}.id"),
            name=_localized(data.get("name")),
            type=str(data.get("type") or "Misc"),
            rarity=data.get("rarity"),
            value=int(value) if isinstance(value, (int, float)) else 0,
            weight_kg=float(weight) if isinstance(weight, (int, float)) else 0.0,
        )


@dataclass(frozen=True, slots=True)
class GameData:
    """The full catalog: items plus every requirement-bearing entity."""

    items: Tuple[Item, ...] = ()
    quests: Tuple[Quest, ...] = ()
    hideout_modules: Tuple[HideoutModule, ...] = ()
    projects: Tuple[Project, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "items", "quests", "hideout_modules", "projects")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameData":
        """Build the catalog from the raw datasets keyed by dataset name."""

        data = _expect_mapping(data, "$")

        def parse(key: str, parser):
            raw = _optional_list(data.get(key), key)
            return [parser(entry, f"{key}[{index}]") for index, entry in enumerate(raw)]

        return cls(
            items=parse("items", Item.from_dict),
            quests=parse("quests", Quest.from_dict),
            hideout_modules=parse("hideoutModules", HideoutModule.from_dict),
            projects=parse("projects", Project.from_dict),
        )

    def item_index(self) -> Dict[str, Item]:
        return {item.id: item for item in self.items}
