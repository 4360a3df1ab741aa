"""Cached remaining-requirement map kept in step with catalog and progress."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from .models import GameData
from .progress import GameProgress, ProgressTracker
from .requirements import (
    calculate_completed_requirements,
    calculate_item_requirements,
    calculate_remaining_requirements,
    has_category_requirements,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["RequirementSnapshot"], None]


def _frozen(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class RequirementSnapshot:
    """Total, completed and remaining maps from one recompute."""

    total: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    completed: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    remaining: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    has_value_based_requirements: bool = False


EMPTY_SNAPSHOT = RequirementSnapshot()


class RequirementStore:
    """Holds the latest :class:`RequirementSnapshot` and serves reads from it.

    ``recompute`` is the only writer and swaps the whole snapshot at once, so
    readers see either the previous result or the new one.  All arithmetic
    lives in :mod:`arc_loot_helper.requirements`.
    """

    def __init__(self) -> None:
        self._snapshot: RequirementSnapshot = EMPTY_SNAPSHOT
        self._catalog: Optional[GameData] = None
        self._progress: GameProgress = GameProgress()
        self._listeners: List[SnapshotListener] = []

    @property
    def snapshot(self) -> RequirementSnapshot:
        return self._snapshot

    @property
    def remaining(self) -> Mapping[str, int]:
        return self._snapshot.remaining

    @property
    def has_value_based_requirements(self) -> bool:
        return self._snapshot.has_value_based_requirements

    def quantity_needed(self, item_id: str) -> int:
        """Remaining quantity of ``item_id``, ``0`` when nothing is outstanding."""

        return self._snapshot.remaining.get(item_id, 0)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def recompute(self, catalog: Optional[GameData], progress: GameProgress) -> RequirementSnapshot:
        """Rebuild every map from ``catalog`` and ``progress`` and publish it.

        Without a catalog the store is emptied rather than left stale.
        """

        self._catalog = catalog
        self._progress = progress
        if catalog is None:
            snapshot = EMPTY_SNAPSHOT
        else:
            total = calculate_item_requirements(catalog.quests, catalog.hideout_modules, catalog.projects)
            completed = calculate_completed_requirements(
                progress, catalog.quests, catalog.hideout_modules, catalog.projects
            )
            remaining = calculate_remaining_requirements(total, completed)
            snapshot = RequirementSnapshot(
                total=_frozen(total),
                completed=_frozen(completed),
                remaining=_frozen(remaining),
                has_value_based_requirements=has_category_requirements(catalog.projects),
            )
        logger.debug(
            "Recomputed requirements: %d total, %d completed, %d remaining",
            len(snapshot.total),
            len(snapshot.completed),
            len(snapshot.remaining),
        )
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def set_catalog(self, catalog: Optional[GameData]) -> RequirementSnapshot:
        """Catalog finished loading (or was dropped); recompute with the last progress."""

        return self.recompute(catalog, self._progress)

    def bind(self, tracker: ProgressTracker, catalog: Optional[GameData] = None) -> Callable[[], None]:
        """Recompute whenever ``tracker`` publishes new progress.

        Runs one recompute straight away and returns a function that detaches
        the store from the tracker.
        """

        if catalog is not None:
            self._catalog = catalog
        self.recompute(self._catalog, tracker.progress)
        return tracker.subscribe(lambda progress: self.recompute(self._catalog, progress))
