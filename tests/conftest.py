from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


def make_manifest(appid: str, name: str, policy: str | None = None) -> str:
    """Build appmanifest content shaped like the Steam client writes it."""
    lines = [
        '"AppState"',
        '{',
        f'\t"appid"\t\t"{appid}"',
        '\t"Universe"\t\t"1"',
        f'\t"name"\t\t"{name}"',
        '\t"StateFlags"\t\t"4"',
        f'\t"installdir"\t\t"{name}"',
    ]
    if policy is not None:
        lines.append(f'\t"AutoUpdateBehavior"\t\t"{policy}"')
    lines += [
        '\t"AllowOtherDownloadsWhileRunning"\t\t"0"',
        '\t"InstalledDepots"',
        '\t{',
        '\t\t"228989"',
        '\t\t{',
        '\t\t\t"manifest"\t\t"3514306556860204959"',
        '\t\t\t"size"\t\t"39546856"',
        '\t\t}',
        '\t}',
        '}',
        '',
    ]
    return "\n".join(lines)


@pytest.fixture
def steam_library(tmp_path: Path):
    """Factory creating a library root whose steamapps folder holds manifests."""
    def _create(root_name: str = "SteamLibrary", games=()) -> Path:
        root = tmp_path / root_name
        steamapps = root / "steamapps"
        steamapps.mkdir(parents=True)
        for appid, name, policy in games:
            (steamapps / f"appmanifest_{appid}.acf").write_text(
                make_manifest(appid, name, policy), encoding="utf-8", newline=""
            )
        return root
    return _create
