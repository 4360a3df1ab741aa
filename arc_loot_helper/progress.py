"""Completion progress for quests, hideout levels and project phases."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import PROGRESS_SCHEMA_VERSION
from .progress_keys import hideout_key, project_key

logger = logging.getLogger(__name__)

ProgressListener = Callable[["GameProgress"], None]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _section(data: Mapping[str, Any], key: str) -> Dict[str, Mapping[str, Any]]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValueError(f"progress.{key}: expected object")
    for entry_key, entry in value.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"progress.{key}.{entry_key}: expected object")
    return dict(value)


def _str_field(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"progress.{path}: expected string")
    return value


def _int_field(value: Any, path: str, min_value: int | None = None) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"progress.{path}: expected integer")
    if min_value is not None and value < min_value:
        raise ValueError(f"progress.{path}: expected integer >= {min_value}")
    return value


@dataclass(frozen=True, slots=True)
class QuestProgress:
    quest_id: str
    completed: bool = False
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"questId": self.quest_id, "completed": self.completed, "completedAt": self.completed_at}


@dataclass(frozen=True, slots=True)
class HideoutProgress:
    module_id: str
    level: int
    completed: bool = False
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "moduleId": self.module_id,
            "level": self.level,
            "completed": self.completed,
            "completedAt": self.completed_at,
        }


@dataclass(frozen=True, slots=True)
class ProjectProgress:
    project_id: str
    phase: int
    completed: bool = False
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectId": self.project_id,
            "phase": self.phase,
            "completed": self.completed,
            "completedAt": self.completed_at,
        }


@dataclass(frozen=True, slots=True)
class GameProgress:
    """Snapshot of everything the player has marked complete.

    ``hideout`` and ``projects`` are keyed by the composite keys from
    :mod:`arc_loot_helper.progress_keys`.  The sections are read-only views;
    change progress through :class:`ProgressTracker`.
    """

    quests: Mapping[str, QuestProgress] = field(default_factory=dict)
    hideout: Mapping[str, HideoutProgress] = field(default_factory=dict)
    projects: Mapping[str, ProjectProgress] = field(default_factory=dict)
    version: int = PROGRESS_SCHEMA_VERSION

    def __post_init__(self) -> None:
        for name in ("quests", "hideout", "projects"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameProgress":
        """Parse the camelCase wire shape, raising ``ValueError`` on bad fields."""

        if not isinstance(data, Mapping):
            raise ValueError("progress: expected object")
        quests = {
            key: QuestProgress(
                quest_id=_str_field(entry.get("questId"), f"quests.{key}.questId"),
                completed=bool(entry.get("completed", False)),
                completed_at=entry.get("completedAt"),
            )
            for key, entry in _section(data, "quests").items()
        }
        hideout = {
            key: HideoutProgress(
                module_id=_str_field(entry.get("moduleId"), f"hideout.{key}.moduleId"),
                level=_int_field(entry.get("level"), f"hideout.{key}.level", min_value=1),
                completed=bool(entry.get("completed", False)),
                completed_at=entry.get("completedAt"),
            )
            for key, entry in _section(data, "hideout").items()
        }
        projects = {
            key: ProjectProgress(
                project_id=_str_field(entry.get("projectId"), f"projects.{key}.projectId"),
                phase=_int_field(entry.get("phase"), f"projects.{key}.phase", min_value=1),
                completed=bool(entry.get("completed", False)),
                completed_at=entry.get("completedAt"),
            )
            for key, entry in _section(data, "projects").items()
        }
        return cls(
            quests=quests,
            hideout=hideout,
            projects=projects,
            version=_int_field(data.get("version", PROGRESS_SCHEMA_VERSION), "version"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quests": {key: entry.to_dict() for key, entry in self.quests.items()},
            "hideout": {key: entry.to_dict() for key, entry in self.hideout.items()},
            "projects": {key: entry.to_dict() for key, entry in self.projects.items()},
            "version": self.version,
        }


def _valid_id(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _valid_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ProgressTracker:
    """Records completion and tells subscribers about every change.

    Each mutation builds a new :class:`GameProgress`; snapshots handed out
    earlier are never modified.  Invalid ids or level/phase numbers are
    ignored.
    """

    def __init__(self, progress: GameProgress | None = None) -> None:
        self._progress = progress or GameProgress()
        self._listeners: List[ProgressListener] = []

    @property
    def progress(self) -> GameProgress:
        return self._progress

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Call ``listener`` with each new snapshot; returns an unsubscribe function."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, progress: GameProgress) -> None:
        self._progress = progress
        for listener in list(self._listeners):
            listener(progress)

    # Quests

    def complete_quest(self, quest_id: str) -> None:
        if not _valid_id(quest_id):
            logger.debug("Ignoring completion of invalid quest id %r", quest_id)
            return
        entry = QuestProgress(quest_id=quest_id, completed=True, completed_at=_now())
        self._publish(replace(self._progress, quests={**self._progress.quests, quest_id: entry}))

    def uncomplete_quest(self, quest_id: str) -> None:
        if not _valid_id(quest_id):
            logger.debug("Ignoring reset of invalid quest id %r", quest_id)
            return
        quests = {key: entry for key, entry in self._progress.quests.items() if key != quest_id}
        self._publish(replace(self._progress, quests=quests))

    def is_quest_completed(self, quest_id: str) -> bool:
        if not _valid_id(quest_id):
            return False
        entry = self._progress.quests.get(quest_id)
        return entry is not None and entry.completed

    # Hideout levels

    def complete_hideout_level(self, module_id: str, level: int) -> None:
        if not (_valid_id(module_id) and _valid_number(level)):
            logger.debug("Ignoring completion of invalid hideout level %r/%r", module_id, level)
            return
        entry = HideoutProgress(module_id=module_id, level=level, completed=True, completed_at=_now())
        hideout = {**self._progress.hideout, hideout_key(module_id, level): entry}
        self._publish(replace(self._progress, hideout=hideout))

    def uncomplete_hideout_level(self, module_id: str, level: int) -> None:
        if not (_valid_id(module_id) and _valid_number(level)):
            logger.debug("Ignoring reset of invalid hideout level %r/%r", module_id, level)
            return
        key = hideout_key(module_id, level)
        hideout = {k: entry for k, entry in self._progress.hideout.items() if k != key}
        self._publish(replace(self._progress, hideout=hideout))

    def is_hideout_level_completed(self, module_id: str, level: int) -> bool:
        if not (_valid_id(module_id) and _valid_number(level)):
            return False
        entry = self._progress.hideout.get(hideout_key(module_id, level))
        return entry is not None and entry.completed

    # Project phases

    def complete_project_phase(self, project_id: str, phase: int) -> None:
        if not (_valid_id(project_id) and _valid_number(phase)):
            logger.debug("Ignoring completion of invalid project phase %r/%r", project_id, phase)
            return
        entry = ProjectProgress(project_id=project_id, phase=phase, completed=True, completed_at=_now())
        projects = {**self._progress.projects, project_key(project_id, phase): entry}
        self._publish(replace(self._progress, projects=projects))

    def uncomplete_project_phase(self, project_id: str, phase: int) -> None:
        if not (_valid_id(project_id) and _valid_number(phase)):
            logger.debug("Ignoring reset of invalid project phase %r/%r", project_id, phase)
            return
        key = project_key(project_id, phase)
        projects = {k: entry for k, entry in self._progress.projects.items() if k != key}
        self._publish(replace(self._progress, projects=projects))

    def is_project_phase_completed(self, project_id: str, phase: int) -> bool:
        if not (_valid_id(project_id) and _valid_number(phase)):
            return False
        entry = self._progress.projects.get(project_key(project_id, phase))
        return entry is not None and entry.completed

    def reset(self) -> None:
        self._publish(GameProgress())
