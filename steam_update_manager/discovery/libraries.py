"""
Steam library root discovery.

Probes the usual install locations for the primary Steam root, then reads
its libraryfolders.vdf to find every additional library root.
"""
import os
import re
import logging
from typing import List, Optional, Iterable

import vdf

from ..models import Library
from ..utils.paths import get_candidate_steam_paths, get_library_folders_paths

logger = logging.getLogger(__name__)

# Fallback for declaration files the vdf parser rejects
PATH_LINE_RE = re.compile(r'^\s*"path"\s*"(.+)"')


def unescape_path(path: str) -> str:
    """Collapse escaped backslash pairs into single backslashes."""
    return path.replace("\\\\", "\\")


def _collect_paths(node, found: List[str]) -> None:
    for key, value in node.items():
        if hasattr(value, 'items'):
            _collect_paths(value, found)
        elif key == "path" and value:
            found.append(value)


def _scan_path_lines(text: str) -> List[str]:
    paths = []
    for line in text.split("\n"):
        match = PATH_LINE_RE.match(line)
        if match:
            paths.append(unescape_path(match.group(1)))
    return paths


def parse_library_folders(text: str) -> List[str]:
    """
    Extract every library "path" from libraryfolders.vdf content.

    Paths are returned in document order with escaped backslashes collapsed.
    Repeated keys are kept by parsing into a vdf.VDFDict.
    """
    try:
        data = vdf.loads(text, mapper=vdf.VDFDict)
    except (SyntaxError, ValueError) as e:
        logger.warning(f"[Discovery] libraryfolders.vdf is not valid VDF ({e}), scanning lines")
        return _scan_path_lines(text)

    paths: List[str] = []
    _collect_paths(data, paths)
    return paths


def find_library_folders_file(root: str) -> Optional[str]:
    for path in get_library_folders_paths(root):
        if os.path.isfile(path):
            return path
    return None


def load_library_folders(root: str) -> List[str]:
    """Read the additional library roots declared by a Steam root."""
    vdf_path = find_library_folders_file(root)
    if not vdf_path:
        logger.debug(f"[Discovery] No libraryfolders.vdf under {root}")
        return []

    try:
        with open(vdf_path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            content = f.read()
    except OSError as e:
        logger.error(f"[Discovery] Error reading {vdf_path}: {e}")
        return []

    return parse_library_folders(content)


def _canonical_path(path: str) -> str:
    """Resolve symlinks so ~/.steam/steam and its target compare equal."""
    try:
        return os.path.normcase(os.path.realpath(path))
    except (OSError, ValueError):
        # If realpath fails, just use the original path
        return os.path.normcase(os.path.normpath(path))


def _same_path(a: str, b: str) -> bool:
    return _canonical_path(a) == _canonical_path(b)


def find_primary_root(candidates: Optional[Iterable[str]] = None) -> Optional[str]:
    """Return the first candidate Steam root that exists."""
    if candidates is None:
        candidates = get_candidate_steam_paths()

    for path in candidates:
        if os.path.exists(path):
            logger.info(f"[Discovery] Found Steam root: {path}")
            return path
        logger.debug(f"[Discovery] Steam root candidate missing: {path}")
    return None


def discover_libraries(candidates: Optional[Iterable[str]] = None) -> List[Library]:
    """
    Discover Steam library roots.

    Args:
        candidates: Install paths to probe in order (defaults to the
            platform locations from utils.paths)

    Returns:
        Libraries with empty title lists, primary root first. Empty when no
        Steam install was found.
    """
    primary = find_primary_root(candidates)
    if primary is None:
        logger.info("[Discovery] No Steam installation found")
        return []

    libraries = [Library(root_path=primary)]

    for lib_path in load_library_folders(primary):
        if any(_same_path(lib_path, lib.root_path) for lib in libraries):
            continue
        if not os.path.exists(lib_path):
            logger.warning(f"[Discovery] Declared library does not exist: {lib_path}")
            continue
        libraries.append(Library(root_path=lib_path))

    logger.info(f"[Discovery] Found {len(libraries)} Steam libraries")
    return libraries
