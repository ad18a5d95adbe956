"""Steam file path constants and install root candidates."""

import os
from typing import List


# Environment override for the primary Steam root
STEAM_PATH_ENV = "STEAM_PATH"

# Layout inside a library root
STEAMAPPS_DIR = "steamapps"
MANIFEST_EXTENSION = ".acf"
MANIFEST_GLOB = "appmanifest_*.acf"
LIBRARY_FOLDERS_FILE = "libraryfolders.vdf"

# libraryfolders.vdf lives in steamapps/ on older clients and config/ on newer ones
LIBRARY_FOLDERS_LOCATIONS = (
    (STEAMAPPS_DIR, LIBRARY_FOLDERS_FILE),
    ("config", LIBRARY_FOLDERS_FILE),
)

# Linux install locations
LINUX_STEAM_PATHS = (
    "~/.steam/steam",
    "~/.local/share/Steam",
)


def get_candidate_steam_paths() -> List[str]:
    """Ordered list of places a Steam install may live.

    Environment variables are read at call time. Entries depending on an
    unset variable are skipped.
    """
    candidates = []

    override = os.environ.get(STEAM_PATH_ENV)
    if override:
        candidates.append(override)

    for env_var in ("ProgramFiles(x86)", "ProgramFiles"):
        base = os.environ.get(env_var)
        if base:
            candidates.append(os.path.join(base, "Steam"))

    candidates.append("C:\\Steam")

    for path in LINUX_STEAM_PATHS:
        candidates.append(os.path.expanduser(path))

    return candidates


def get_steamapps_path(library_root: str) -> str:
    """Get the steamapps directory of a library root."""
    return os.path.join(library_root, STEAMAPPS_DIR)


def get_library_folders_paths(library_root: str) -> List[str]:
    """Possible locations of a root's libraryfolders.vdf, in probe order."""
    return [os.path.join(library_root, *parts) for parts in LIBRARY_FOLDERS_LOCATIONS]
