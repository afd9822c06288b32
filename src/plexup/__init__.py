"""
Post-download handoff for a Plex library kept on a remote drive.

This package is run once per completed download. It works out which Plex
library the downloaded item belongs to, renames the local files to the
library's naming convention, copies the item to the remote drive with rclone
and finally asks Plex to rescan the affected folder.

The package is organized into several categories:
- Classifying a download path and preparing the item (TV, movie, AV).
- Transferring the prepared item and pruning the local download tree.
- Utilities for configuration, logging, TMDb lookups and external commands.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
