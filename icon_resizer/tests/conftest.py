import io

import pytest
from PIL import Image


def make_image(width, height, color=(255, 0, 0, 255)):
    """Solid image with a contrasting left half so resizes are not trivial."""
    img = Image.new("RGBA", (width, height), color)
    img.paste((0, 0, 255, 255), (0, 0, width // 2, height))
    return img


def png_bytes(width, height, color=(255, 0, 0, 255)):
    buf = io.BytesIO()
    make_image(width, height, color).save(buf, "PNG")
    return buf.getvalue()


@pytest.fixture
def write_png(tmp_path):
    def _write(name, width, height, folder=None):
        path = (folder or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        make_image(width, height).save(path, "PNG")
        return str(path)
    return _write


@pytest.fixture
def source_png(write_png):
    return write_png("icon-1024.png", 1024, 1024)


@pytest.fixture
def blocked_folder(tmp_path):
    """A folder path that can never be created (its parent is a regular file)."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    return str(blocker / "AppIcons")


@pytest.fixture
def output_root(tmp_path, monkeypatch):
    from icon_resizer import config
    root = tmp_path / "out"
    monkeypatch.setattr(config, "OUTPUT_FOLDER", str(root))
    return root


@pytest.fixture
def image_factory():
    return make_image


@pytest.fixture
def png_factory():
    return png_bytes
