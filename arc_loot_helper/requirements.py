"""Item requirement totals across quests, hideout modules and projects.

Requirement maps are sparse: an item that is not needed has no key, and
every present key has a quantity above zero.  Readers fall back to ``0``
explicitly.

Project phases that ask for a value per item category (for example
"250,000 value of Combat Items") cannot be expressed as item quantities.
They are left out of every map here; use :func:`has_category_requirements`
to tell users the numbers are incomplete.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence

from .models import HideoutModule, ItemRequirementEntry, Project, Quest
from .progress import GameProgress
from .progress_keys import hideout_key, project_key

ItemRequirements = Dict[str, int]


def _add_entries(target: ItemRequirements, entries: Iterable[ItemRequirementEntry]) -> None:
    for entry in entries:
        if entry.quantity <= 0:
            continue
        target[entry.item_id] = target.get(entry.item_id, 0) + entry.quantity


def aggregate_quest_requirements(quests: Iterable[Quest]) -> ItemRequirements:
    """Sum the required items of every quest."""

    aggregated: ItemRequirements = {}
    for quest in quests:
        _add_entries(aggregated, quest.required_items)
    return aggregated


def aggregate_hideout_requirements(modules: Iterable[HideoutModule]) -> ItemRequirements:
    """Sum the required items of every level of every module.

    All levels count, not only the next one: a full build-out needs them all.
    """

    aggregated: ItemRequirements = {}
    for module in modules:
        for level in module.levels:
            _add_entries(aggregated, level.required_items)
    return aggregated


def aggregate_project_requirements(projects: Iterable[Project]) -> ItemRequirements:
    """Sum the item-based requirements of every project phase.

    Category-value requirements are ignored.
    """

    aggregated: ItemRequirements = {}
    for project in projects:
        for phase in project.phases:
            _add_entries(aggregated, phase.required_items)
    return aggregated


def merge_requirements(*sources: Mapping[str, int]) -> ItemRequirements:
    """Add requirement maps together key by key."""

    merged: ItemRequirements = {}
    for source in sources:
        for item_id, quantity in source.items():
            merged[item_id] = merged.get(item_id, 0) + quantity
    return merged


def calculate_item_requirements(
    quests: Iterable[Quest],
    modules: Iterable[HideoutModule],
    projects: Iterable[Project],
) -> ItemRequirements:
    """Total item requirements across all progression systems."""

    return merge_requirements(
        aggregate_quest_requirements(quests),
        aggregate_hideout_requirements(modules),
        aggregate_project_requirements(projects),
    )


def calculate_completed_requirements(
    progress: GameProgress,
    quests: Iterable[Quest],
    modules: Iterable[HideoutModule],
    projects: Iterable[Project],
) -> ItemRequirements:
    """Portion of the total requirements already handed in.

    A quest, hideout level or project phase contributes only when its own
    progress entry is marked completed.  Levels and phases are judged one by
    one; completing level 2 says nothing about level 1.
    """

    completed: ItemRequirements = {}

    for quest in quests:
        entry = progress.quests.get(quest.id)
        if entry is not None and entry.completed:
            _add_entries(completed, quest.required_items)

    for module in modules:
        for level in module.levels:
            entry = progress.hideout.get(hideout_key(module.id, level.level))
            if entry is not None and entry.completed:
                _add_entries(completed, level.required_items)

    for project in projects:
        for phase in project.phases:
            entry = progress.projects.get(project_key(project.id, phase.phase))
            if entry is not None and entry.completed:
                _add_entries(completed, phase.required_items)

    return completed


def calculate_remaining_requirements(
    total: Mapping[str, int],
    completed: Mapping[str, int],
) -> ItemRequirements:
    """Outstanding quantity per item, omitting anything already satisfied.

    Items that only appear in ``completed`` are ignored.
    """

    remaining: ItemRequirements = {}
    for item_id, quantity in total.items():
        left = max(0, quantity - completed.get(item_id, 0))
        if left > 0:
            remaining[item_id] = left
    return remaining


def has_category_requirements(projects: Iterable[Project]) -> bool:
    """True when some project phase has value-based requirements."""

    return any(phase.is_value_based for project in projects for phase in project.phases)


def requirement_breakdown(
    item_id: str,
    quests: Sequence[Quest],
    modules: Sequence[HideoutModule],
    projects: Sequence[Project],
) -> Dict[str, int]:
    """How much of ``item_id`` each progression system asks for."""

    breakdown = {
        "quests": aggregate_quest_requirements(quests).get(item_id, 0),
        "hideout": aggregate_hideout_requirements(modules).get(item_id, 0),
        "projects": aggregate_project_requirements(projects).get(item_id, 0),
    }
    breakdown["total"] = sum(breakdown.values())
    return breakdown
