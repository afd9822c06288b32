from conftest import make_cfg, write_file
from plexup.upload import transfer
from plexup.utils import UPLOAD_ATTEMPTS, system_util


def test_build_rclone_cmd(cfg):
    cmd = transfer.build_rclone_cmd(cfg, "/dl/auto/Movies/9001", "/lib/movies/Cool Film (2021)/")
    assert cmd == [
        "rclone",
        "--config=/etc/rclone.conf",
        "copy",
        "/dl/auto/Movies/9001",
        "gdrive:/lib/movies/Cool Film (2021)/",
    ]


def test_build_rclone_cmd_without_config(prefix):
    cfg = make_cfg(prefix, rclone_config="")
    assert "--config" not in " ".join(transfer.build_rclone_cmd(cfg, "/a", "/b"))


def test_upload_retries_then_cleans_up(cfg, prefix, monkeypatch):
    item = prefix / "auto" / "Movies" / "9001"
    write_file(item / "film.mkv")
    results = iter([(1, "", "timeout"), (0, "", "")])
    calls = []

    def fake_run(cmd, cwd=None):
        calls.append(cmd)
        return next(results)

    monkeypatch.setattr(system_util, "run_cmd", fake_run)

    assert transfer.upload(cfg, str(item), "/lib/movies/Cool Film (2021)/") is True
    assert len(calls) == 2
    assert not item.exists()
    assert not (prefix / "auto").exists()


def test_upload_gives_up_and_keeps_files(cfg, prefix, monkeypatch):
    item = prefix / "auto" / "Movies" / "9001"
    write_file(item / "film.mkv")
    calls = []
    monkeypatch.setattr(system_util, "run_cmd", lambda cmd, cwd=None: calls.append(cmd) or (3, "", "boom"))

    assert transfer.upload(cfg, str(item), "/lib/movies/x/") is False
    assert len(calls) == UPLOAD_ATTEMPTS
    assert (item / "film.mkv").exists()


def test_upload_missing_binary_counts_as_failure(cfg, prefix, monkeypatch):
    item = write_file(prefix / "loose.mkv")

    def missing(cmd, cwd=None):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(system_util, "run_cmd", missing)

    assert transfer.upload(cfg, str(item), "/Unsorted") is False
    assert item.exists()
