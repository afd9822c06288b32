"""Ask Plex to rescan the folder an item was uploaded to."""
import time
import typing

import requests

from plexup.utils import LogLevel, constants, logger
from plexup.utils.config import AutoScanConfig


def refresh_url(scan: AutoScanConfig, library_id: int) -> str:
    return f"{scan.plex_server_path}/library/sections/{library_id}/refresh"


def scan(
        scan_cfg: AutoScanConfig,
        remote_path: str,
        library_id: int,
        session: typing.Optional[requests.Session] = None,
        sleep: typing.Callable[[float], None] = time.sleep,
) -> bool:
    """
    Trigger a partial Plex library scan for ``remote_path``.

    Skipped when ``library_id`` is not a real section id. Waits
    ``delay_seconds`` first so the remote mount can pick up the new files.
    Failures are logged, never raised.
    """
    if library_id < 1:
        logger.log("scan.skip", LogLevel.ERROR, reason="invalid Plex library id", plex_library_id=library_id)
        return False

    if scan_cfg.delay_seconds:
        sleep(scan_cfg.delay_seconds)

    params = {
        "path": scan_cfg.plex_scan_prefix + remote_path,
        "X-Plex-Token": scan_cfg.plex_token,
    }
    http = session or requests
    try:
        resp = http.get(refresh_url(scan_cfg, library_id), params=params, timeout=constants.HTTP_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.log("scan.error", LogLevel.WARN, remote=remote_path, error=str(e))
        return False

    if resp.status_code == 200:
        logger.log("scan.ok", LogLevel.INFO, remote=remote_path, plex_library_id=library_id)
        return True
    logger.log("scan.fail", LogLevel.WARN, remote=remote_path, status=resp.status_code)
    return False
