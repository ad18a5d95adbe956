"""
Codec for Steam's key-value manifest text (appmanifest_*.acf, libraryfolders.vdf).

Decoding is line based: a key-value line is two quoted tokens separated by a
double tab. Everything else (braces, section names) is ignored.

Editing never goes through the decoded mapping. It works on the raw lines so
every line it does not touch is kept byte for byte.
"""
import logging
from typing import Dict, List, Optional, Tuple

from ..models import Title, POLICY_KEY, POLICY_ALWAYS_UPDATE

logger = logging.getLogger(__name__)

KEY_VALUE_SEPARATOR = "\t\t"
CLOSING_BRACE = "}"


def split_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split one manifest line into (key, value), or None if it is not a pair."""
    parts = line.strip().split(KEY_VALUE_SEPARATOR, 1)
    if len(parts) != 2:
        return None
    return parts[0].strip('"'), parts[1].strip('"')


def decode_manifest(text: str) -> Dict[str, str]:
    """
    Decode every key-value line of a manifest.

    Nesting is flattened. A key seen twice keeps its last value.
    """
    values: Dict[str, str] = {}
    for line in text.split("\n"):
        pair = split_key_value(line)
        if pair is None:
            continue
        key, value = pair
        values[key] = value
    return values


def decode_title(text: str) -> Optional[Title]:
    """
    Decode an appmanifest into a Title.

    Returns None when the manifest has no name. A missing policy falls back
    to "always keep updated".
    """
    values = decode_manifest(text)
    name = values.get("name", "")
    if not name:
        return None
    policy = values.get(POLICY_KEY, "") or POLICY_ALWAYS_UPDATE
    return Title(name=name, auto_update_policy=policy)


def format_manifest_line(key: str, value: str) -> str:
    """Canonical top-level key-value line."""
    return f'\t"{key}"{KEY_VALUE_SEPARATOR}"{value}"'


def manifest_declares_name(text: str, name: str) -> bool:
    """True if the raw manifest text carries a name line for this title."""
    return f'"name"{KEY_VALUE_SEPARATOR}"{name}"' in text


def _carriage_return(line: str) -> str:
    """Line ending suffix left on a line split from CRLF text."""
    return "\r" if line.endswith("\r") else ""


def set_manifest_value(lines: List[str], key: str, value: str) -> List[str]:
    """
    Return a copy of lines with key set to value.

    The first line mentioning the quoted key is replaced with the canonical
    line. If the key is absent, the canonical line goes right before the
    last line that is only "}", or at the end when there is no such line.

    The new line keeps the CRLF ending of the line it replaces or precedes.

    Only the first matching line is rewritten. A manifest with duplicate key
    lines keeps the later ones as they were.
    """
    token = f'"{key}"'
    new_line = format_manifest_line(key, value)
    new_lines = list(lines)

    for index, line in enumerate(new_lines):
        if token in line:
            new_lines[index] = new_line + _carriage_return(line)
            return new_lines

    for index in range(len(new_lines) - 1, -1, -1):
        if new_lines[index].strip() == CLOSING_BRACE:
            new_lines.insert(index, new_line + _carriage_return(new_lines[index]))
            return new_lines

    logger.debug(f"[Manifest] No closing brace found, appending {key} at end")
    new_lines.append(new_line)
    return new_lines
