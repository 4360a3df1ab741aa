"""Configuration for remote ARC Raiders data sources."""

from __future__ import annotations

DATA_BASE_URL = "https://raw.githubusercontent.com/RaidTheory/arcraiders-data/main"
"""Root of the public arcraiders-data repository."""

DATA_URLS = {
    "items": f"{DATA_BASE_URL}/items.json",
    "quests": f"{DATA_BASE_URL}/quests.json",
    "hideoutModules": f"{DATA_BASE_URL}/hideoutModules.json",
    "projects": f"{DATA_BASE_URL}/projects.json",
}
"""Mapping of dataset name to the corresponding raw GitHub URL."""

REQUEST_TIMEOUT = 30
"""Seconds to wait for a dataset download."""

PROGRESS_SCHEMA_VERSION = 1
"""Version stamped on every progress snapshot."""
