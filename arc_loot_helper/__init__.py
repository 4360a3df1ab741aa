"""Work out which looted items are still needed for quests, hideout and projects."""

from .config import DATA_URLS
from .data_loader import RemoteDataLoader, load_game_data
from .models import GameData
from .progress import GameProgress, ProgressTracker
from .store import RequirementSnapshot, RequirementStore

__all__ = [
    "DATA_URLS",
    "GameData",
    "GameProgress",
    "ProgressTracker",
    "RemoteDataLoader",
    "RequirementSnapshot",
    "RequirementStore",
    "load_game_data",
]
