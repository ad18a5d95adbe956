"""Installed title discovery from a library's appmanifest files"""

import os
import logging
from typing import List, Optional, Iterable

from ..models import Library, Title
from ..manifest import decode_title, read_manifest_text
from ..utils.paths import get_steamapps_path, MANIFEST_EXTENSION
from .libraries import discover_libraries

logger = logging.getLogger(__name__)


def enumerate_titles(library_root: str) -> List[Title]:
    """
    Decode every manifest directly under <library_root>/steamapps.

    Titles come back in directory listing order, which is not sorted.
    A directory that cannot be listed yields no titles.
    """
    titles: List[Title] = []
    steamapps_path = get_steamapps_path(library_root)

    try:
        with os.scandir(steamapps_path) as entries:
            manifest_files = [
                entry.path for entry in entries
                if entry.name.endswith(MANIFEST_EXTENSION) and entry.is_file()
            ]
    except OSError as e:
        logger.error(f"[Discovery] Error reading steamapps directory {steamapps_path}: {e}")
        return titles

    for manifest_path in manifest_files:
        try:
            content = read_manifest_text(manifest_path)
        except OSError as e:
            logger.error(f"[Discovery] Error reading manifest {manifest_path}: {e}")
            continue

        title = decode_title(content)
        if title is None:
            logger.debug(f"[Discovery] Game name not found in manifest: {manifest_path}")
            continue

        titles.append(title)
        logger.debug(f"[Discovery] Detected game: {title.name} (AutoUpdateBehavior: {title.auto_update_policy})")

    logger.info(f"[Discovery] Detected {len(titles)} games in {library_root}")
    return titles


def load_library(root_path: str) -> Library:
    """Build a Library for a root with its titles decoded."""
    return Library(root_path=root_path, titles=enumerate_titles(root_path))


def discover_libraries_with_titles(candidates: Optional[Iterable[str]] = None) -> List[Library]:
    """Discover library roots and decode the titles of each one."""
    return [load_library(lib.root_path) for lib in discover_libraries(candidates)]
