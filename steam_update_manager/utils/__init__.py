# Utils package
from .paths import (
    get_candidate_steam_paths,
    get_steamapps_path,
    get_library_folders_paths,
    STEAM_PATH_ENV,
    STEAMAPPS_DIR,
    MANIFEST_EXTENSION,
    MANIFEST_GLOB,
    LIBRARY_FOLDERS_FILE,
)

__all__ = [
    'get_candidate_steam_paths',
    'get_steamapps_path',
    'get_library_folders_paths',
    'STEAM_PATH_ENV',
    'STEAMAPPS_DIR',
    'MANIFEST_EXTENSION',
    'MANIFEST_GLOB',
    'LIBRARY_FOLDERS_FILE',
]
