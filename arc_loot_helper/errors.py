"""Error types raised while reading catalog data."""

from __future__ import annotations


class CatalogError(ValueError):
    """Base error for catalog data that cannot be used."""


class CatalogShapeError(CatalogError):
    """Catalog record does not have the expected structure.

    Attributes:
        path: Location of the offending value, e.g. ``quests[2].requiredItemIds[0]``
        detail: What was expected at that location
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class UnknownDatasetError(KeyError):
    """Requested dataset name is not configured."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown dataset: {name}")
