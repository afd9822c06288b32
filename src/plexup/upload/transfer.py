"""
Upload of a prepared item to the remote drive with rclone.

The copy is attempted up to ``UPLOAD_ATTEMPTS`` times. Only a successful
copy triggers local cleanup; when every attempt fails the files stay where
they are so the download can be retried.
"""
from typing import List

from plexup.upload import cleanup
from plexup.utils import UPLOAD_ATTEMPTS, LogLevel, logger, system_util
from plexup.utils.config import AppConfig


def build_rclone_cmd(cfg: AppConfig, local_path: str, remote_path: str) -> List[str]:
    cmd = [cfg.rclone_path]
    if cfg.rclone_config:
        cmd.append(f"--config={cfg.rclone_config}")
    cmd += ["copy", local_path, f"{cfg.remote_drive_name}:{remote_path}"]
    return cmd


def upload(cfg: AppConfig, local_path: str, remote_path: str) -> bool:
    """Copy ``local_path`` to ``remote_path``; clean up and return True on success."""
    cmd = build_rclone_cmd(cfg, local_path, remote_path)
    for attempt in range(1, UPLOAD_ATTEMPTS + 1):
        try:
            code, _, err = system_util.run_cmd(cmd)
        except OSError as e:
            code, err = -1, str(e)
        if code == 0:
            logger.log("upload.ok", LogLevel.INFO, local=local_path, remote=remote_path, attempt=attempt)
            cleanup.clean_up(local_path, cfg.download_path_prefix)
            return True
        logger.log(
            "upload.fail",
            LogLevel.ERROR,
            local=local_path,
            attempt=attempt,
            exit_code=code,
            stderr=err.strip()[-500:],
        )
    logger.log("upload.giveup", LogLevel.ERROR, local=local_path, attempts=UPLOAD_ATTEMPTS)
    return False
