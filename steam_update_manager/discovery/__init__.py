# Discovery package
from .libraries import (
    discover_libraries,
    find_primary_root,
    load_library_folders,
    parse_library_folders,
    unescape_path,
)
from .games import (
    enumerate_titles,
    load_library,
    discover_libraries_with_titles,
)
