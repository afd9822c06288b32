"""
Handoff of a prepared item: rclone upload, local cleanup and Plex rescan.

- transfer: `upload` copies the item with rclone (retried) and cleans up on success.
- cleanup: `clean_up` deletes the item and prunes empty parent folders.
- notify: `scan` asks Plex to refresh the affected library folder.
"""
from .cleanup import clean_up
from .notify import scan
from .transfer import upload

__all__ = ["clean_up", "scan", "upload"]
