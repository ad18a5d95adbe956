"""Manifest file I/O that round-trips content byte for byte"""

import os
import logging
from typing import List, Optional

from .codec import set_manifest_value

logger = logging.getLogger(__name__)

MANIFEST_ENCODING = "utf-8"
# Undecodable bytes survive a read/write cycle unchanged
MANIFEST_ERRORS = "surrogateescape"


def read_manifest_text(path: str) -> str:
    """Read a manifest without newline translation. Raises OSError."""
    with open(path, 'r', encoding=MANIFEST_ENCODING, errors=MANIFEST_ERRORS, newline='') as f:
        return f.read()


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)


def write_manifest_lines(path: str, lines: List[str]) -> None:
    """
    Write lines back to an existing manifest in place.

    The file is truncated and rewritten rather than replaced, so it keeps its
    permission bits. Raises OSError.
    """
    with open(path, 'w', encoding=MANIFEST_ENCODING, errors=MANIFEST_ERRORS, newline='') as f:
        f.write(join_lines(lines))
        f.flush()
        os.fsync(f.fileno())  # Force write to disk


def update_manifest_value(path: str, key: str, value: str, text: Optional[str] = None) -> bool:
    """
    Set key to value in the manifest at path.

    Args:
        path: Manifest file to edit
        key: Manifest key to set
        value: New value
        text: Content already read from path, to skip a second read

    Returns:
        True if the file was rewritten, False if it already held the value
    """
    if text is None:
        text = read_manifest_text(path)

    lines = split_lines(text)
    new_lines = set_manifest_value(lines, key, value)
    if new_lines == lines:
        logger.debug(f"[Manifest] {path} already has {key}={value}")
        return False

    write_manifest_lines(path, new_lines)
    logger.debug(f"[Manifest] Wrote {key}={value} to {path}")
    return True
