"""Update pass controllers.

Re-exports the engine entry points and the shared progress log.
"""

from .progress_log import ProgressLog
from .update_engine import (
    UpdateOutcome,
    update_library,
    update_library_report,
    update_library_sync,
    find_title_manifest,
    apply_title_policy,
    UPDATE_COMPLETE_MESSAGE,
    STATUS_UPDATED,
    STATUS_NOT_FOUND,
    STATUS_FAILED,
)

__all__ = [
    'ProgressLog',
    'UpdateOutcome',
    'update_library',
    'update_library_report',
    'update_library_sync',
    'find_title_manifest',
    'apply_title_policy',
    'UPDATE_COMPLETE_MESSAGE',
    'STATUS_UPDATED',
    'STATUS_NOT_FOUND',
    'STATUS_FAILED',
]
