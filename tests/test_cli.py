import json
import os
import runpy
import sys
from pathlib import Path

import pytest

from conftest import FakeResolver, write_file
from plexup import __version__, cli
from plexup.upload import notify
from plexup.utils import constants, system_util


@pytest.fixture(autouse=True)
def no_env_token(monkeypatch):
    monkeypatch.setattr(constants, "TMDB_API_KEY", None)


@pytest.fixture
def config_file(tmp_path, prefix):
    doc = {
        "download_path_prefix": str(prefix),
        "remote_default_path": "Unsorted",
        "remote_drive_name": "gdrive",
        "library": [
            {"name": "Adult", "path": "/lib/adult", "plex_library_id": 3, "is_av": True},
        ],
        "auto_scan": {"enable": True, "plex_server_path": "http://plex:32400", "delay_seconds": 0},
    }
    p = tmp_path / "config.json"
    p.write_text(json.dumps(doc), encoding="utf-8")
    return p


def test_missing_arguments_are_rejected(config_file):
    assert cli.main(["--config", str(config_file)]) == cli.EXIT_USAGE
    assert cli.main(["--config", str(config_file), "--file-number", "1"]) == cli.EXIT_USAGE


def test_bad_config(tmp_path):
    rc = cli.main(["--config", str(tmp_path / "missing.json"), "--file-number", "1", "--file-path", "/dl/x"])
    assert rc == cli.EXIT_USAGE


def test_path_outside_root(config_file):
    rc = cli.main(["--config", str(config_file), "--file-number", "1", "--file-path", "/other/root/file"])
    assert rc == cli.EXIT_INVALID_PATH


def test_no_upload_prints_result(config_file, prefix, capsys):
    f = write_file(prefix / "loose.mkv")
    rc = cli.main(["--config", str(config_file), "--file-number", "1", "--file-path", str(f), "--no-upload"])
    assert rc == cli.EXIT_OK
    assert f"{f}\t/Unsorted\t0" in capsys.readouterr().out
    assert f.exists()


def test_tv_without_token_fails_item(config_file, prefix, tmp_path):
    doc = json.loads(config_file.read_text(encoding="utf-8"))
    doc["library"].append({"name": "TV", "path": "/lib/tv", "plex_library_id": 2})
    config_file.write_text(json.dumps(doc), encoding="utf-8")
    item = prefix / "auto" / "TV" / "1" / "Show.S01E01"
    write_file(item / "ep.mkv")

    rc = cli.main(["--config", str(config_file), "--file-number", "1", "--file-path", str(item)])
    assert rc == cli.EXIT_ITEM_FAILED
    assert (item / "ep.mkv").exists()


def test_full_run_uploads_and_scans(config_file, prefix, monkeypatch):
    item = prefix / "auto" / "Adult" / "AB-100"
    write_file(item / "a.mkv", 120 * 1024 * 1024)
    cmds = []
    monkeypatch.setattr(system_util, "run_cmd", lambda cmd, cwd=None: cmds.append(cmd) or (0, "", ""))
    scans = []
    monkeypatch.setattr(notify, "scan", lambda scan_cfg, remote, lib_id: scans.append((remote, lib_id)) or True)

    rc = cli.main(["--config", str(config_file), "--file-number", "1", "--file-path", str(item)])

    assert rc == cli.EXIT_OK
    assert cmds == [["rclone", "copy", str(item), "gdrive:/lib/adult/AB-100"]]
    assert scans == [("/lib/adult/AB-100", 3)]
    assert not (prefix / "auto").exists()


def test_upload_failure_exit_code(config_file, prefix, monkeypatch):
    f = write_file(prefix / "loose.mkv")
    monkeypatch.setattr(system_util, "run_cmd", lambda cmd, cwd=None: (1, "", "nope"))
    scans = []
    monkeypatch.setattr(notify, "scan", lambda *a: scans.append(a))

    rc = cli.main(["--config", str(config_file), "--file-number", "1", "--file-path", str(f)])

    assert rc == cli.EXIT_UPLOAD_FAILED
    assert f.exists()
    assert scans == []


def test_partial_rename_failure_is_logged_with_completed(config_file, prefix, monkeypatch, capsys):
    doc = json.loads(config_file.read_text(encoding="utf-8"))
    doc["tmdb_token"] = "token"
    doc["library"].append({"name": "TV", "path": "/lib/tv", "plex_library_id": 2})
    config_file.write_text(json.dumps(doc), encoding="utf-8")
    monkeypatch.setattr(cli, "TMDbResolver", lambda token: FakeResolver(series={"1": ("Show", "2020")}))
    item = prefix / "auto" / "TV" / "1" / "Show.S01E01"
    write_file(item / "a.mkv")
    write_file(item / "b.mkv")
    real_rename = os.rename
    calls = []

    def flaky_rename(src, dst):
        calls.append(src)
        if len(calls) == 2:
            raise PermissionError(13, "Permission denied", str(src))
        real_rename(src, dst)

    monkeypatch.setattr(os, "rename", flaky_rename)

    rc = cli.main(["--config", str(config_file), "--file-number", "2", "--file-path", str(item)])

    out = capsys.readouterr().out
    assert rc == cli.EXIT_ITEM_FAILED
    assert 'kind="filesystem"' in out
    assert str(item / "S01E01.a.mkv") in out
    assert (item / "b.mkv").exists()


def test_launcher_script_runs_cli(monkeypatch, capsys):
    launcher = Path(__file__).resolve().parents[1] / "plex_auto_upload.py"
    monkeypatch.setattr(sys, "argv", [str(launcher), "--version"])

    with pytest.raises(SystemExit) as exc:
        runpy.run_path(str(launcher), run_name="__main__")

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
