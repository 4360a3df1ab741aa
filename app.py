"""FastAPI backend exposing outstanding item requirements for ARC Raiders."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

import requests
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from arc_loot_helper.config import PROGRESS_SCHEMA_VERSION
from arc_loot_helper.data_loader import RemoteDataLoader, load_game_data
from arc_loot_helper.errors import CatalogError
from arc_loot_helper.models import GameData
from arc_loot_helper.progress import GameProgress
from arc_loot_helper.requirements import has_category_requirements, requirement_breakdown
from arc_loot_helper.store import RequirementStore

loader = RemoteDataLoader()

app = FastAPI(title="ARC Loot Helper API")


@lru_cache(maxsize=1)
def get_catalog() -> GameData:
    return load_game_data(loader)


def catalog_dependency() -> GameData:
    try:
        return get_catalog()
    except (CatalogError, requests.RequestException) as exc:
        raise HTTPException(status_code=503, detail=f"Catalog unavailable: {exc}") from exc


class QuestProgressModel(BaseModel):
    questId: str
    completed: bool = False
    completedAt: str | None = None


class HideoutProgressModel(BaseModel):
    moduleId: str
    level: int = Field(ge=1)
    completed: bool = False
    completedAt: str | None = None


class ProjectProgressModel(BaseModel):
    projectId: str
    phase: int = Field(ge=1)
    completed: bool = False
    completedAt: str | None = None


class ProgressModel(BaseModel):
    """Same rules as ``GameProgress.from_dict``."""

    quests: Dict[str, QuestProgressModel] = Field(default_factory=dict)
    hideout: Dict[str, HideoutProgressModel] = Field(default_factory=dict)
    projects: Dict[str, ProjectProgressModel] = Field(default_factory=dict)
    version: int = PROGRESS_SCHEMA_VERSION


class RequirementsRequest(BaseModel):
    progress: ProgressModel = Field(default_factory=ProgressModel)


class NeededItemModel(BaseModel):
    item_id: str
    name: str
    remaining: int


class RequirementsResponse(BaseModel):
    total: Dict[str, int]
    completed: Dict[str, int]
    remaining: Dict[str, int]
    has_value_based_requirements: bool
    items: List[NeededItemModel]


class InitResponse(BaseModel):
    items: int
    quests: int
    hideout_modules: int
    projects: int
    progress_version: int
    has_value_based_requirements: bool


class BreakdownResponse(BaseModel):
    item_id: str
    name: str
    quests: int
    hideout: int
    projects: int
    total: int


@app.get("/api/init", response_model=InitResponse)
async def api_init(catalog: GameData = Depends(catalog_dependency)) -> InitResponse:
    return InitResponse(
        items=len(catalog.items),
        quests=len(catalog.quests),
        hideout_modules=len(catalog.hideout_modules),
        projects=len(catalog.projects),
        progress_version=PROGRESS_SCHEMA_VERSION,
        has_value_based_requirements=has_category_requirements(catalog.projects),
    )


@app.post("/api/requirements", response_model=RequirementsResponse)
async def api_requirements(
    payload: RequirementsRequest,
    catalog: GameData = Depends(catalog_dependency),
) -> RequirementsResponse:
    progress = GameProgress.from_dict(payload.progress.model_dump())
    store = RequirementStore()
    snapshot = store.recompute(catalog, progress)

    index = catalog.item_index()
    needed = sorted(snapshot.remaining.items(), key=lambda pair: (-pair[1], pair[0]))
    items = [
        NeededItemModel(
            item_id=item_id,
            name=index[item_id].display_name if item_id in index else item_id,
            remaining=quantity,
        )
        for item_id, quantity in needed
    ]
    return RequirementsResponse(
        total=dict(snapshot.total),
        completed=dict(snapshot.completed),
        remaining=dict(snapshot.remaining),
        has_value_based_requirements=snapshot.has_value_based_requirements,
        items=items,
    )


@app.get("/api/items/{item_id}/breakdown", response_model=BreakdownResponse)
async def api_item_breakdown(
    item_id: str,
    catalog: GameData = Depends(catalog_dependency),
) -> BreakdownResponse:
    item = catalog.item_index().get(item_id)
    breakdown = requirement_breakdown(item_id, catalog.quests, catalog.hideout_modules, catalog.projects)
    return BreakdownResponse(
        item_id=item_id,
        name=item.display_name if item else item_id,
        **breakdown,
    )
