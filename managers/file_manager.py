"""
File Manager
============

Manages file system operations.
Follows SRP: Only handles file system utilities.
"""

import glob
import os
from pathlib import Path
from typing import List


class FileManager:
    """
    Manager responsible for file system operations.

    Follows SRP: Only handles file operations.
    """

    def ensure_directory(self, directory: str) -> None:
        """
        Ensure directory exists, create if necessary.

        Args:
            directory: Directory path
        """
        os.makedirs(directory, exist_ok=True)

    def file_exists(self, filepath: str) -> bool:
        """
        Check if file exists.

        Args:
            filepath: Path to file

        Returns:
            True if file exists
        """
        return os.path.exists(filepath) and os.path.isfile(filepath)

    def directory_exists(self, directory: str) -> bool:
        """
        Check if directory exists.

        Args:
            directory: Directory path

        Returns:
            True if directory exists
        """
        return os.path.exists(directory) and os.path.isdir(directory)

    def read_text(self, filepath: str) -> str:
        """
        Read a document as text.

        Args:
            filepath: Path to file

        Returns:
            File content (undecodable bytes replaced)
        """
        with open(filepath, "r", encoding="utf-8", errors="replace") as f:
            return f.read()

    def list_xml_files(self, target: str) -> List[str]:
        """
        Resolve a file or directory argument to the XML files it names.

        Args:
            target: Path to an XML file or a directory

        Returns:
            Sorted list of XML file paths (empty if nothing matches)
        """
        if self.file_exists(target):
            return [target]
        if not self.directory_exists(target):
            return []
        return sorted(glob.glob(os.path.join(target, "*.xml")))

    def report_filename(self, source_name: str, extension: str) -> str:
        """
        Build the report file name for a validated document.

        Args:
            source_name: Validated file name (e.g. "epg.xml")
            extension: Report extension without dot ("csv", "json")

        Returns:
            e.g. "epg_validation_report.csv"
        """
        stem = Path(source_name).stem or "epg"
        return f"{stem}_validation_report.{extension.lstrip('.')}"
