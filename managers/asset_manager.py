"""
Asset Manager
=============

Reference store of known physical asset files (images, boot videos).
Follows SRP: Only handles asset lookups.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from core.settings import DEFAULT_ASSET_DATABASE


class AssetRecord:
    """Known physical properties of one asset file."""

    def __init__(
        self,
        file_name: str,
        actual_width: int,
        actual_height: int,
        mime_type: str = "",
        resolution: str = "",
        file_size: int = 0,
    ):
        self.file_name = file_name
        self.actual_width = int(actual_width)
        self.actual_height = int(actual_height)
        self.mime_type = mime_type
        self.resolution = resolution
        self.file_size = int(file_size)

    @property
    def dimensions(self) -> str:
        return f"{self.actual_width}x{self.actual_height}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], file_name: str = None) -> "AssetRecord":
        """
        Build a record from a plain dictionary.

        Accepts the camelCase keys used by host-supplied asset databases
        (fileName, actualWidth, ...) as well as snake_case keys.

        Args:
            data: Record dictionary
            file_name: Fallback file name (e.g. the key the record was stored under)
        """

        def pick(camel: str, snake: str, default=None):
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        name = pick("fileName", "file_name", file_name)
        if not name:
            raise ValueError("Asset record has no file name")
        return cls(
            file_name=name,
            actual_width=pick("actualWidth", "actual_width", 0),
            actual_height=pick("actualHeight", "actual_height", 0),
            mime_type=pick("mimeType", "mime_type", ""),
            resolution=pick("resolution", "resolution", ""),
            file_size=pick("fileSize", "file_size", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "actualWidth": self.actual_width,
            "actualHeight": self.actual_height,
            "mimeType": self.mime_type,
            "resolution": self.resolution,
            "fileSize": self.file_size,
        }

    def __repr__(self):
        return f"AssetRecord({self.file_name!r}, {self.dimensions})"


AssetMap = Mapping[str, Union[AssetRecord, Dict[str, Any]]]


class AssetManager:
    """
    Read-only lookup table of asset records keyed by file name.

    A supplied map replaces the default database entirely; nothing is merged.
    """

    def __init__(self, assets: Optional[AssetMap] = None):
        """
        Initialize asset manager.

        Args:
            assets: Replacement asset map (default: built-in asset database)
        """
        source = assets if assets is not None else DEFAULT_ASSET_DATABASE
        self._assets: Dict[str, AssetRecord] = {}
        for key, record in source.items():
            if not isinstance(record, AssetRecord):
                record = AssetRecord.from_dict(record, file_name=key)
            self._assets[key] = record

    @classmethod
    def from_json_file(cls, filepath: str) -> "AssetManager":
        """
        Load an asset database exported by a host application.

        The file holds either an object keyed by file name or a list of records.

        Args:
            filepath: Path to JSON file

        Returns:
            AssetManager over the loaded records
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_json_data(data, source=filepath)

    @classmethod
    def from_json_data(cls, data: Any, source: str = "asset data") -> "AssetManager":
        """
        Build a manager from decoded JSON (object keyed by file name, or list of records).

        Raises:
            ValueError: If the data is neither an object nor a list
        """
        if isinstance(data, list):
            records = [AssetRecord.from_dict(item) for item in data]
            return cls({r.file_name: r for r in records})
        if isinstance(data, dict):
            return cls(data)
        raise ValueError(f"Unsupported asset database format in {source}")

    def lookup(self, file_name: str) -> Optional[AssetRecord]:
        """
        Get the record for a file name.

        Args:
            file_name: Asset file name as written in the document

        Returns:
            AssetRecord or None
        """
        return self._assets.get(file_name)

    def get_all_file_names(self) -> List[str]:
        return sorted(self._assets.keys())

    def get_all_records(self) -> List[AssetRecord]:
        return [self._assets[name] for name in self.get_all_file_names()]

    def __contains__(self, file_name: str) -> bool:
        return file_name in self._assets

    def __len__(self) -> int:
        return len(self._assets)
