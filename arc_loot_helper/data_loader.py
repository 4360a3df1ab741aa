"""Utilities for retrieving ARC Raiders catalog data from GitHub."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

import requests

from .config import DATA_URLS, REQUEST_TIMEOUT
from .errors import UnknownDatasetError
from .models import GameData

logger = logging.getLogger(__name__)

CATALOG_DATASETS = ("items", "quests", "hideoutModules", "projects")


@dataclass(slots=True)
class RemoteDataLoader:
    """Fetches JSON blobs from the public arcraiders-data repository."""

    session: requests.Session | None = None
    urls: Mapping[str, str] = field(default_factory=lambda: DATA_URLS.copy())
    timeout: float = REQUEST_TIMEOUT
    _session: requests.Session = field(init=False, repr=False)
    _cache: Dict[str, Any] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._session = self.session or requests.Session()

    def fetch_json(self, name: str) -> Any:
        """Return the parsed JSON for ``name`` from the configured URLs."""

        if name not in self.urls:
            raise UnknownDatasetError(name)
        if name not in self._cache:
            logger.info("Fetching dataset %s from %s", name, self.urls[name])
            response = self._session.get(self.urls[name], timeout=self.timeout)
            response.raise_for_status()
            self._cache[name] = response.json()
        return self._cache[name]


def load_game_data(loader: RemoteDataLoader) -> GameData:
    """Download every catalog dataset and parse it into :class:`GameData`."""

    return GameData.from_dict({name: loader.fetch_json(name) for name in CATALOG_DATASETS})
