"""
UpdateManagerService - the collaborator the presentation layer talks to.

Responsibilities:
- Discover Steam libraries and their installed titles
- Run auto-update policy passes on a library chosen by root path
- Replace a library's title list wholesale once a pass finishes
"""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, Any, List, Optional, Iterable

from .models import Library, POLICY_LABELS, is_valid_policy
from .discovery import discover_libraries_with_titles
from .controllers import ProgressLog, update_library_report
from .controllers.progress_log import LogListener

logger = logging.getLogger(__name__)


class UpdateManagerService:
    """Service holding the discovered library model."""

    def __init__(self, candidates: Optional[Iterable[str]] = None):
        """
        Args:
            candidates: Steam install paths to probe instead of the
                platform defaults
        """
        self.candidates = list(candidates) if candidates is not None else None
        self._libraries: List[Library] = []

        self._update_lock = asyncio.Lock()
        self._is_updating = False

    @property
    def libraries(self) -> List[Library]:
        return list(self._libraries)

    def discover_libraries(self) -> List[Library]:
        """Discover libraries and titles, replacing the current model."""
        self._libraries = discover_libraries_with_titles(self.candidates)
        logger.info(f"[Service] {len(self._libraries)} libraries loaded")
        return self.libraries

    def library_paths(self) -> List[str]:
        return [lib.root_path for lib in self._libraries]

    def get_library(self, root_path: str) -> Optional[Library]:
        for lib in self._libraries:
            if lib.root_path == root_path:
                return lib
        return None

    def _replace_library(self, library: Library) -> None:
        self._libraries = [
            library if lib.root_path == library.root_path else lib
            for lib in self._libraries
        ]

    async def update_library(self, root_path: str, policy: str,
                             listener: Optional[LogListener] = None) -> Dict[str, Any]:
        """Set the auto-update policy for every title of one library.

        Args:
            root_path: Root of a discovered library
            policy: "0" or "1"
            listener: Called with each progress line as it is produced

        Returns:
            Dict with success, the refreshed titles, counts and the log lines
        """
        if not is_valid_policy(policy):
            return {
                'success': False,
                'error': f"Unknown auto-update policy: {policy}",
                'valid_policies': list(POLICY_LABELS),
            }

        library = self.get_library(root_path)
        if library is None:
            logger.warning(f"[Service] Unknown library: {root_path}")
            return {'success': False, 'error': f"Unknown library: {root_path}"}

        if self._is_updating:
            logger.warning("[Service] Update already in progress, ignoring request")
            return {'success': False, 'error': 'Update already in progress'}

        async with self._update_lock:
            self._is_updating = True
            try:
                log = ProgressLog(listener)
                titles, outcomes = await update_library_report(library, policy, log)
                refreshed = replace(library, titles=titles)
                self._replace_library(refreshed)

                return {
                    'success': True,
                    'root_path': refreshed.root_path,
                    'titles': [title.to_dict() for title in refreshed.titles],
                    'updated_count': sum(1 for outcome in outcomes if outcome.succeeded),
                    'failed_count': sum(1 for outcome in outcomes if not outcome.succeeded),
                    'log': log.lines,
                }
            finally:
                self._is_updating = False
