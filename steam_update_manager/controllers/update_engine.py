"""
Update engine: rewrites AutoUpdateBehavior for every title of a library.

Each title gets its own task. All tasks are started together and joined
before the pass returns. File work runs in worker threads so one slow disk
does not hold up the other titles. A failed title never stops its siblings,
and nothing is rolled back.
"""
import asyncio
import glob
import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from ..models import Library, Title, POLICY_KEY, is_valid_policy
from ..manifest import manifest_declares_name, read_manifest_text, update_manifest_value
from ..utils.paths import get_steamapps_path, MANIFEST_GLOB
from .progress_log import ProgressLog

logger = logging.getLogger(__name__)

UPDATE_COMPLETE_MESSAGE = "Update complete."

STATUS_UPDATED = "updated"
STATUS_NOT_FOUND = "not_found"
STATUS_FAILED = "failed"


@dataclass
class UpdateOutcome:
    """Result of updating one title"""
    title: Title
    status: str
    manifest_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_UPDATED

    def message(self) -> str:
        name = self.title.name
        if self.status == STATUS_UPDATED:
            return f"Successfully updated {name}"
        if self.status == STATUS_NOT_FOUND:
            return f"Failed to find appmanifest for {name}"
        return f"Failed to update {name}: {self.error}"


def find_title_manifest(steamapps_path: str, title_name: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the appmanifest declaring a title's name.

    Returns (path, content) of the first match in sorted filename order, or
    (None, None). Unreadable candidates are skipped.
    """
    for manifest_path in sorted(glob.glob(os.path.join(glob.escape(steamapps_path), MANIFEST_GLOB))):
        try:
            content = read_manifest_text(manifest_path)
        except OSError as e:
            logger.debug(f"[UpdateEngine] Skipping unreadable manifest {manifest_path}: {e}")
            continue
        if manifest_declares_name(content, title_name):
            return manifest_path, content
    return None, None


def apply_title_policy(steamapps_path: str, title: Title, policy: str) -> UpdateOutcome:
    """Locate and edit one title's manifest. Blocking; runs in a worker thread."""
    manifest_path, content = find_title_manifest(steamapps_path, title.name)
    if manifest_path is None:
        logger.warning(f"[UpdateEngine] No appmanifest found for {title.name}")
        return UpdateOutcome(title=title, status=STATUS_NOT_FOUND)

    try:
        update_manifest_value(manifest_path, POLICY_KEY, policy, text=content)
    except OSError as e:
        logger.error(f"[UpdateEngine] Failed to write {manifest_path}: {e}")
        return UpdateOutcome(title=title, status=STATUS_FAILED,
                             manifest_path=manifest_path, error=str(e))

    return UpdateOutcome(
        title=replace(title, auto_update_policy=policy),
        status=STATUS_UPDATED,
        manifest_path=manifest_path,
    )


async def _update_title(steamapps_path: str, title: Title, policy: str,
                        log: ProgressLog) -> UpdateOutcome:
    try:
        outcome = await asyncio.to_thread(apply_title_policy, steamapps_path, title, policy)
    except Exception as e:
        logger.error(f"[UpdateEngine] Unexpected error updating {title.name}: {e}")
        outcome = UpdateOutcome(title=title, status=STATUS_FAILED, error=str(e))
    await log.append(outcome.message())
    return outcome


async def update_library_report(library: Library, policy: str,
                                log: Optional[ProgressLog] = None) -> Tuple[List[Title], List[UpdateOutcome]]:
    """
    Run an update pass and return (titles, outcomes).

    Both lists follow the order of library.titles.

    Raises:
        ValueError: policy is not a known AutoUpdateBehavior token
    """
    if not is_valid_policy(policy):
        raise ValueError(f"Unknown auto-update policy: {policy!r}")

    if log is None:
        log = ProgressLog()

    steamapps_path = get_steamapps_path(library.root_path)
    logger.info(f"[UpdateEngine] Setting {POLICY_KEY}={policy} for {len(library.titles)} games in {library.root_path}")

    outcomes = await asyncio.gather(
        *[_update_title(steamapps_path, title, policy, log) for title in library.titles]
    )
    await log.append(UPDATE_COMPLETE_MESSAGE)

    updated = sum(1 for outcome in outcomes if outcome.succeeded)
    logger.info(f"[UpdateEngine] Updated {updated}/{len(outcomes)} games in {library.root_path}")

    return [outcome.title for outcome in outcomes], list(outcomes)


async def update_library(library: Library, policy: str,
                         log: Optional[ProgressLog] = None) -> List[Title]:
    """
    Set the auto-update policy of every title in a library.

    Args:
        library: Library whose titles are updated
        policy: "0" (always keep updated) or "1" (update on launch)
        log: Progress sink receiving one line per title plus a final
            "Update complete." line

    Returns:
        New title list, same length and order as library.titles. Titles
        whose update failed keep their previous policy.
    """
    titles, _ = await update_library_report(library, policy, log)
    return titles


def update_library_sync(library: Library, policy: str,
                        log: Optional[ProgressLog] = None) -> List[Title]:
    """Blocking wrapper around update_library for callers without a loop."""
    return asyncio.run(update_library(library, policy, log))
