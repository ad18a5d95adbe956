from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from steam_update_manager.discovery import (
    discover_libraries,
    load_library_folders,
    parse_library_folders,
    unescape_path,
)
from steam_update_manager.utils.paths import get_candidate_steam_paths


MODERN_LIBRARYFOLDERS = '''"libraryfolders"
{
\t"0"
\t{
\t\t"path"\t\t"C:\\\\Program Files (x86)\\\\Steam"
\t\t"label"\t\t""
\t\t"apps"
\t\t{
\t\t\t"228980"\t\t"0"
\t\t}
\t}
\t"1"
\t{
\t\t"path"\t\t"D:\\\\SteamLibrary"
\t}
}
'''


def _write_libraryfolders(root: Path, paths, location: str = "steamapps") -> None:
    entries = "".join(
        f'\t"{index}"\n\t{{\n\t\t"path"\t\t"{path}"\n\t}}\n'
        for index, path in enumerate(paths)
    )
    target = root / location / "libraryfolders.vdf"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f'"libraryfolders"\n{{\n{entries}}}\n', encoding="utf-8")


def test_unescape_path() -> None:
    assert unescape_path("C:\\\\Games\\\\Lib2") == "C:\\Games\\Lib2"


def test_parse_single_escaped_path() -> None:
    assert parse_library_folders('"path"\t\t"C:\\\\Games\\\\Lib2"\n') == ["C:\\Games\\Lib2"]


def test_parse_modern_format_in_order() -> None:
    assert parse_library_folders(MODERN_LIBRARYFOLDERS) == [
        "C:\\Program Files (x86)\\Steam",
        "D:\\SteamLibrary",
    ]


def test_parse_repeated_path_keys_at_same_level() -> None:
    text = '"LibraryFolders"\n{\n\t"path"\t\t"E:\\\\One"\n\t"path"\t\t"F:\\\\Two"\n}\n'
    assert parse_library_folders(text) == ["E:\\One", "F:\\Two"]


def test_parse_malformed_falls_back_to_line_scan() -> None:
    text = '"libraryfolders"\n{\n\t"0"\n\t{\n\t\t"path"\t\t"D:\\\\Games"\n'
    assert parse_library_folders(text) == ["D:\\Games"]


def test_load_library_folders_missing_file(tmp_path: Path) -> None:
    assert load_library_folders(str(tmp_path)) == []


def test_load_library_folders_config_location(tmp_path: Path) -> None:
    _write_libraryfolders(tmp_path, ["/mnt/games"], location="config")
    assert load_library_folders(str(tmp_path)) == ["/mnt/games"]


def test_discover_no_steam_install(tmp_path: Path) -> None:
    assert discover_libraries([str(tmp_path / "nope"), str(tmp_path / "also-nope")]) == []


def test_discover_first_existing_candidate_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()

    libraries = discover_libraries([str(tmp_path / "missing"), str(first), str(second)])

    assert [lib.root_path for lib in libraries] == [str(first)]
    assert libraries[0].titles == []


def test_discover_additional_libraries(tmp_path: Path) -> None:
    primary = tmp_path / "Steam"
    extra = tmp_path / "Extra"
    extra.mkdir()
    _write_libraryfolders(primary, [str(primary), str(extra), str(extra), str(tmp_path / "Offline")])

    libraries = discover_libraries([str(primary)])

    assert [lib.root_path for lib in libraries] == [str(primary), str(extra)]


def test_candidate_paths_follow_environment(tmp_path: Path) -> None:
    env = {
        "STEAM_PATH": str(tmp_path / "custom"),
        "ProgramFiles(x86)": "C:\\Program Files (x86)",
    }
    with patch.dict("os.environ", env, clear=True):
        candidates = get_candidate_steam_paths()

    assert candidates[0] == str(tmp_path / "custom")
    assert any(path.endswith("Steam") and "Program Files (x86)" in path for path in candidates)
    assert "C:\\Steam" in candidates


def test_candidate_paths_skip_unset_variables() -> None:
    with patch.dict("os.environ", {}, clear=True):
        candidates = get_candidate_steam_paths()
    assert candidates[0] == "C:\\Steam"


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_discover_symlinked_primary_listed_once(tmp_path: Path) -> None:
    real_root = tmp_path / "share" / "Steam"
    extra = tmp_path / "Extra"
    extra.mkdir()
    _write_libraryfolders(real_root, [str(real_root), str(extra)])
    link = tmp_path / "dotsteam"
    link.symlink_to(real_root, target_is_directory=True)

    libraries = discover_libraries([str(link)])

    assert [lib.root_path for lib in libraries] == [str(link), str(extra)]


@pytest.mark.skipif(os.name == "nt", reason="POSIX byte paths")
def test_load_library_folders_keeps_non_utf8_bytes(tmp_path: Path) -> None:
    target = tmp_path / "steamapps" / "libraryfolders.vdf"
    target.parent.mkdir(parents=True)
    target.write_bytes(b'"libraryfolders"\n{\n\t"0"\n\t{\n\t\t"path"\t\t"/mnt/Spi\xe9le"\n\t}\n}\n')

    paths = load_library_folders(str(tmp_path))

    assert [os.fsencode(path) for path in paths] == [b"/mnt/Spi\xe9le"]
