import json

from icon_resizer.manifest import CONTENTS_FILENAME, build_contents, manifest_entry, read_contents, write_contents
from icon_resizer.sizes import IOS_ICON_SIZES, MACOS_ICON_SIZES, IconSize


def test_manifest_entry_fields():
    entry = manifest_entry(IconSize("Icon-83.5@2x", 83.5, 2, "ipad"))
    assert entry == {
        "filename": "Icon-83.5@2x.png",
        "idiom": "ipad",
        "scale": "2x",
        "size": "83.5x83.5",
    }


def test_build_contents_keeps_table_order():
    contents = build_contents(IOS_ICON_SIZES)
    assert contents["info"] == {"author": "xcode", "version": 1}
    assert [e["filename"] for e in contents["images"]] == [i.filename for i in IOS_ICON_SIZES]
    marketing = contents["images"][-1]
    assert marketing == {"filename": "Icon-1024.png", "idiom": "ios-marketing", "scale": "1x", "size": "1024x1024"}


def test_mac_entries():
    images = build_contents(MACOS_ICON_SIZES)["images"]
    assert images[1] == {"filename": "icon_16x16@2x.png", "idiom": "mac", "scale": "2x", "size": "16x16"}
    assert {e["idiom"] for e in images} == {"mac"}


def test_write_and_read_contents(tmp_path):
    path = write_contents(str(tmp_path), MACOS_ICON_SIZES[:3])
    assert path == str(tmp_path / CONTENTS_FILENAME)
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    assert raw == read_contents(str(tmp_path))
    assert len(raw["images"]) == 3


def test_empty_manifest(tmp_path):
    write_contents(str(tmp_path), [])
    assert read_contents(str(tmp_path))["images"] == []
