"""
Managers Package
================

Coordination layer for the EPG AdZone Validator.

Managers:
- AssetManager: Reference asset database lookups
- HistoryManager: Recent validation results
- FileManager: File system operations
"""

from .asset_manager import AssetManager, AssetRecord
from .file_manager import FileManager
from .history_manager import (
    HistoryManager,
    HistoryStorage,
    JSONFileStorage,
    MemoryStorage,
)

__all__ = [
    'AssetManager',
    'AssetRecord',
    'FileManager',
    'HistoryManager',
    'HistoryStorage',
    'JSONFileStorage',
    'MemoryStorage',
]
