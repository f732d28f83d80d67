import json

from teleframe import cli


def test_status(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"addonInterface": {"addons": {"clock": {"enabled": False}}}}))

    assert cli.main(["status", "--config", str(path)]) == 0
    assert "clock" in capsys.readouterr().out


def test_enable_and_config(tmp_path, write_addon, addons_dir, capsys):
    write_addon("clock", "def addon(instance):\n    pass\n")
    path = tmp_path / "config.json"
    options = ["--config", str(path), "--addons-dir", str(addons_dir)]

    assert cli.main(["enable", "clock", *options]) == 0
    assert cli.main(["config", "clock", "format", "HH:mm", *options]) == 0

    data = json.loads(path.read_text())
    assert data["addonInterface"]["addons"]["clock"] == {"enabled": True, "format": "HH:mm"}
    assert "Config changed for addon 'clock'." in capsys.readouterr().out


def test_missing_addon_name_exits_non_zero(tmp_path, capsys):
    assert cli.main(["disable", "--config", str(tmp_path / "config.json")]) == 1
    assert "Usage:" in capsys.readouterr().err
