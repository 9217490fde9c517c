import importlib.util
import os

import pytest

TOOL = os.path.join(os.path.dirname(__file__), "..", "..", "tools", "upload_icon.py")


@pytest.fixture
def upload_icon(monkeypatch):
    spec = importlib.util.spec_from_file_location("upload_icon", TOOL)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    opened = []

    def tracking_open(path, mode="r"):
        handle = open(path, mode)
        opened.append(handle)
        return handle

    monkeypatch.setattr(module, "open", tracking_open, raising=False)
    module.opened = opened
    return module


class FakeResponse:
    status_code = 200
    ok = True

    def json(self):
        return {"message": "Generated 15 iOS Only icons!", "output_folder": "/tmp/out",
                "files": [{"name": "Icon-1024.png", "url": None}]}


def test_icons_mode_rejects_several_images(upload_icon, write_png, monkeypatch):
    monkeypatch.setattr(upload_icon.requests, "post", lambda *a, **kw: pytest.fail("should not post"))
    with pytest.raises(SystemExit) as exc:
        upload_icon.main([write_png("a.png", 8, 8), write_png("b.png", 8, 8)])
    assert exc.value.code == 2
    assert upload_icon.opened == []


def test_missing_file_closes_already_opened(upload_icon, write_png, tmp_path, capsys):
    code = upload_icon.main(["--screenshots", write_png("a.png", 8, 8), str(tmp_path / "gone.png")])
    assert code == 1
    assert "Error" in capsys.readouterr().err
    assert len(upload_icon.opened) == 1
    assert upload_icon.opened[0].closed


def test_icons_upload_posts_single_file(upload_icon, write_png, monkeypatch, capsys):
    sent = {}

    def fake_post(url, files, data, headers, timeout):
        sent.update(url=url, files=files, data=data)
        return FakeResponse()

    monkeypatch.setattr(upload_icon.requests, "post", fake_post)
    code = upload_icon.main([write_png("icon.png", 8, 8), "--platform", "ios", "--server", "http://host:1"])

    assert code == 0
    assert sent["url"] == "http://host:1/icons/"
    assert sent["data"] == {"platform": "ios"}
    assert sent["files"]["file"][0] == "icon.png"
    assert all(h.closed for h in upload_icon.opened)
    assert "Generated 15 iOS Only icons!" in capsys.readouterr().out
