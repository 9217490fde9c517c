import os

import pytest

from icon_resizer.output import (ExportCancelled, OutputFolderError, ensure_writable, platform_folder,
                                 resolve_output_folder, unique_stems)
from icon_resizer.sizes import PlatformSelection


def test_ensure_writable_creates_parents(tmp_path):
    folder = tmp_path / "a" / "b" / "c"
    assert ensure_writable(str(folder)) == str(folder)
    assert folder.is_dir()


def test_ensure_writable_raises_when_not_creatable(blocked_folder):
    with pytest.raises(OSError):
        ensure_writable(blocked_folder)


def test_preferred_folder_used_without_picker_call(tmp_path):
    calls = []
    folder = resolve_output_folder(str(tmp_path / "ok"), picker=calls.append)
    assert folder == str(tmp_path / "ok")
    assert calls == []


def test_picker_fallback_when_default_not_creatable(tmp_path, blocked_folder):
    asked = []

    def picker(failed):
        asked.append(failed)
        return str(tmp_path / "picked")

    folder = resolve_output_folder(blocked_folder, picker)
    assert asked == [blocked_folder]
    assert folder == str(tmp_path / "picked")
    assert os.path.isdir(folder)


def test_no_picker_raises(blocked_folder):
    with pytest.raises(OutputFolderError) as exc:
        resolve_output_folder(blocked_folder)
    assert exc.value.folder == blocked_folder


@pytest.mark.parametrize("answer", [None, ""])
def test_cancelled_picker(blocked_folder, answer):
    with pytest.raises(ExportCancelled):
        resolve_output_folder(blocked_folder, lambda failed: answer)


def test_picked_folder_also_unusable(tmp_path, blocked_folder):
    other = tmp_path / "blocker" / "Other"
    with pytest.raises(OutputFolderError) as exc:
        resolve_output_folder(blocked_folder, lambda failed: str(other))
    assert exc.value.folder == str(other)


def test_platform_folder_layout(tmp_path):
    root = str(tmp_path)
    assert platform_folder(root, PlatformSelection.IOS, "both") == os.path.join(root, "iOS")
    assert platform_folder(root, PlatformSelection.MACOS, PlatformSelection.BOTH) == os.path.join(root, "macOS")
    assert platform_folder(root, PlatformSelection.IOS, "ios") == root
    assert platform_folder(root, PlatformSelection.MACOS, "macos") == root


def test_unique_stems():
    names = ["/a/shot.png", "/b/shot.png", "other.jpg", "/c/shot.jpeg", "shot_1.png"]
    assert unique_stems(names) == ["shot", "shot_1", "other", "shot_2", "shot_1_1"]


def test_unique_stems_ignores_case():
    assert unique_stems(["Home.png", "home.png", "HOME.jpg"]) == ["Home", "home_1", "HOME_2"]
