"""Module for database models."""

from .torrent_arr_mapping import MappingStats, TorrentArrMapping

__all__ = [
    "MappingStats",
    "TorrentArrMapping",
]
