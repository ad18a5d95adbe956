"""
Library and title data model shared by discovery, the update engine and
the presentation layer.
"""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional


# Manifest key holding the auto-update policy
POLICY_KEY = "AutoUpdateBehavior"

POLICY_ALWAYS_UPDATE = "0"
POLICY_UPDATE_ON_LAUNCH = "1"

# Token -> user-facing label
POLICY_LABELS = {
    POLICY_ALWAYS_UPDATE: "Always keep this game updated",
    POLICY_UPDATE_ON_LAUNCH: "Only update this game when I launch it",
}


def is_valid_policy(value: str) -> bool:
    return value in POLICY_LABELS


def policy_from_label(label: str) -> Optional[str]:
    """
    Map a user-facing label back to its policy token.

    Accepts the bare token ("1"), the label itself, or a selector string in
    the "<token> - <label>" form.
    """
    text = (label or "").strip()
    if text in POLICY_LABELS:
        return text
    for token, policy_label in POLICY_LABELS.items():
        if text == policy_label or text == f"{token} - {policy_label}":
            return token
    return None


@dataclass(frozen=True)
class Title:
    """One installed game tracked by an appmanifest file"""
    name: str
    auto_update_policy: str = POLICY_ALWAYS_UPDATE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Library:
    """A Steam library root and the titles installed in it"""
    root_path: str
    titles: List[Title] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'root_path': self.root_path,
            'titles': [title.to_dict() for title in self.titles],
        }
