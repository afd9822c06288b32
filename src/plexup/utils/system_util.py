"""
Utility functions for running external commands.

Functions:
    - run_cmd: Executes a system command and returns its exit code along with its
      standard output and error streams.
    - run_capture: Runs the AV metadata capture tool against a prepared item.
      The outcome is logged only; capture is best-effort enrichment.
"""
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from plexup.utils import logger
from plexup.utils.logger import LogLevel


def run_cmd(cmd: List[str], cwd: Optional[str] = None) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr)."""
    p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=cwd)
    return p.returncode, p.stdout, p.stderr


def run_capture(binary: str, working_dir: str, target: Path) -> Optional[int]:
    """
    Run ``<binary> -p <target>`` from ``working_dir``.

    The capture tool reads its own config from the directory it is started in,
    hence the explicit working directory. Returns the exit code, or None when
    the tool could not be started at all.
    """
    if not binary:
        logger.log("capture.skip", LogLevel.DEBUG, reason="no capture tool configured", path=str(target))
        return None
    try:
        code, _, err = run_cmd([binary, "-p", str(target)], cwd=working_dir or None)
    except OSError as e:
        logger.log("capture.error", LogLevel.WARN, path=str(target), error=str(e))
        return None
    if code != 0:
        logger.log("capture.fail", LogLevel.WARN, path=str(target), exit_code=code, stderr=err.strip()[-500:])
    else:
        logger.log("capture.ok", LogLevel.INFO, path=str(target))
    return code
