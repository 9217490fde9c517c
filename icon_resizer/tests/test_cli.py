import os

import resize_icons


def test_sizes_command(capsys):
    assert resize_icons.main(["sizes", "--platform", "ios"]) == 0
    out = capsys.readouterr().out
    assert "Icon-83.5@2x.png" in out
    assert "Total: 15" in out


def test_screenshot_sizes_command(capsys):
    assert resize_icons.main(["sizes", "--mode", "screenshots", "--platform", "macos"]) == 0
    assert "Mac-2880" in capsys.readouterr().out


def test_icons_command(tmp_path, source_png, capsys):
    out_dir = tmp_path / "icons"
    assert resize_icons.main(["icons", source_png, "--platform", "macos", "-o", str(out_dir), "--no-prompt"]) == 0
    assert "Generated 10 macOS Only icons!" in capsys.readouterr().out
    assert (out_dir / "icon_16x16.png").exists()


def test_icons_missing_source(tmp_path):
    assert resize_icons.main(["icons", str(tmp_path / "nope.png"), "--no-prompt"]) == 1


def test_icons_blocked_folder_without_prompt(source_png, blocked_folder, capsys):
    assert resize_icons.main(["icons", source_png, "-o", blocked_folder, "--no-prompt"]) == 1
    assert "Cannot write to output folder" in capsys.readouterr().out


def test_icons_prompts_for_folder(tmp_path, source_png, blocked_folder, monkeypatch):
    picked = tmp_path / "picked"
    monkeypatch.setattr("builtins.input", lambda prompt: str(picked))
    assert resize_icons.main(["icons", source_png, "--platform", "ios", "-o", blocked_folder]) == 0
    assert (picked / "Icon-1024.png").exists()


def test_icons_prompt_cancelled(source_png, blocked_folder, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "")
    assert resize_icons.main(["icons", source_png, "-o", blocked_folder]) == 2
    assert "Cancelled" in capsys.readouterr().out


def test_screenshots_command_expands_folders(tmp_path, write_png):
    shots = tmp_path / "shots"
    write_png("one.png", 90, 160, folder=shots)
    write_png("two.png", 160, 90, folder=shots)
    (shots / "readme.txt").write_text("ignored")
    out_dir = tmp_path / "out"

    code = resize_icons.main(["screenshots", str(shots), "--platform", "ios", "--resample", "nearest",
                              "-o", str(out_dir), "--no-prompt"])
    assert code == 0
    assert sorted(os.listdir(out_dir / "iPhone-5.5")) == ["one.png", "two.png"]


def test_expand_sources_keeps_files(tmp_path, write_png):
    single = write_png("x.png", 10, 10)
    assert resize_icons.expand_sources([single]) == [single]


def test_bad_fit_from_environment_is_reported(tmp_path, write_png, monkeypatch, capsys):
    monkeypatch.setattr(resize_icons.cfg, "SCREENSHOT_FIT", "zoom")
    shot = write_png("one.png", 90, 160)
    code = resize_icons.main(["screenshots", shot, "-o", str(tmp_path / "out"), "--no-prompt"])
    assert code == 1
    assert "❌ Error: Unknown fit mode" in capsys.readouterr().out
