# Steam Update Manager
# Discovers Steam libraries and rewrites each game's AutoUpdateBehavior.

from .models import (
    Title,
    Library,
    POLICY_KEY,
    POLICY_ALWAYS_UPDATE,
    POLICY_UPDATE_ON_LAUNCH,
    POLICY_LABELS,
    policy_from_label,
)
from .discovery import discover_libraries, discover_libraries_with_titles, enumerate_titles
from .controllers import ProgressLog, update_library, update_library_sync
from .service import UpdateManagerService

__version__ = "1.0.0"
