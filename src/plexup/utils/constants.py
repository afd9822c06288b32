"""
Constants and default settings for download classification and upload.

This module holds the fixed policy values used while preparing a download
(path layout, naming patterns, AV size threshold) together with the defaults
for the external collaborators (TMDb, rclone, Plex). Environment variables
from a local ``.env`` file are loaded on import so that ``TMDB_API_KEY`` can
be supplied without touching the JSON config.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# Download tree layout: <prefix>/auto/<library>/<item>
AUTO_FOLDER = "auto"

# Season/episode token in the episode folder or file name
SEASON_EPISODE_REGEX = re.compile(r"S(\d+)E(\d+)")

# AV files below this size are samples/junk and are deleted
AV_MIN_FILE_SIZE = 100 * 1024 * 1024

# Default config location
DEFAULT_CONFIG_PATH = "config.json"

# TMDb API configuration
TMDB_API_KEY = os.getenv("TMDB_API_KEY")
TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_LANGUAGE = "en-US"
HTTP_TIMEOUT = 30

# Transfer settings
UPLOAD_ATTEMPTS = 3

# Seconds to wait before asking Plex to rescan a freshly uploaded folder
DEFAULT_SCAN_DELAY = 60

# Library categories
CATEGORY_TV = "tv"
CATEGORY_MOVIE = "movie"
CATEGORY_AV = "av"
CATEGORY_UNCLASSIFIED = "unclassified"
