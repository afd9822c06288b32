"""
Download classification and preparation.

Package organization:
- parser: Path containment checks, library name and identifier extraction,
  season/episode parsing.
- formatter: Remote destination paths and local file name rules.
- core: The dispatcher and the TV, movie and AV processors.

Public API (top-level exports)
- `classify_and_prepare`: Classify a download and prepare it for upload.
- `ClassifiedItem`: (local_path, remote_path, library_id, category).
- `SeasonEpisode`: Parsed S<NN>E<NN> pair.

Example:
    from plexup.classify import classify_and_prepare
    item = classify_and_prepare(cfg, "/dl/auto/TV/1399/Show.S01E01", 1, resolver)
"""
from .parser import SeasonEpisode
from .core import ClassifiedItem, classify_and_prepare

__all__ = [
    "ClassifiedItem",
    "SeasonEpisode",
    "classify_and_prepare",
]
