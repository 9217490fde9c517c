import json
import os
from typing import Any, Dict, Iterable, List

from .sizes import IconSize

CONTENTS_FILENAME = "Contents.json"


def manifest_entry(icon: IconSize) -> Dict[str, str]:
    return {
        "filename": icon.filename,
        "idiom": icon.idiom,
        "scale": icon.scale_label,
        "size": icon.size,
    }


def build_contents(icons: Iterable[IconSize]) -> Dict[str, Any]:
    """Build the asset catalog manifest for the given (already written) icons."""
    return {
        "images": [manifest_entry(icon) for icon in icons],
        "info": {
            "author": "xcode",
            "version": 1,
        },
    }


def write_contents(folder: str, icons: List[IconSize]) -> str:
    """Write Contents.json next to the icons and return its path."""
    path = os.path.join(folder, CONTENTS_FILENAME)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(build_contents(icons), f, ensure_ascii=False, indent=2)
        f.write("\n")
    return path


def read_contents(folder: str) -> Dict[str, Any]:
    with open(os.path.join(folder, CONTENTS_FILENAME), 'r', encoding='utf-8') as f:
        return json.load(f)
