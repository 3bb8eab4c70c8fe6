# src/storage/result_writer.py - v1
"""Write a merge result to the local filesystem (the CLI's "download")."""

from __future__ import annotations

import logging
from pathlib import Path

from pdffusion.core.models import MergeResult

logger = logging.getLogger(__name__)


class LocalResultWriter:
    """Write merged PDFs under a base directory."""

    def __init__(self, base_path: str | Path | None = None) -> None:
        """Initialize with optional base path.

        Args:
            base_path: Directory for all writes. If None, the current directory.
        """
        self._base = Path(base_path) if base_path else Path.cwd()

    def target_path(self, file_name: str, overwrite: bool = False) -> Path:
        """Path for file_name; adds ' (1)', ' (2)'... instead of overwriting."""
        dest = self._base / file_name
        if overwrite:
            return dest
        i = 1
        while dest.exists():
            stem, ext = Path(file_name).stem, Path(file_name).suffix
            dest = self._base / f"{stem} ({i}){ext}"
            i += 1
        return dest

    def write(self, result: MergeResult, overwrite: bool = False) -> Path:
        """Write result.output_bytes and return the final path."""
        self._base.mkdir(parents=True, exist_ok=True)
        dest = self.target_path(result.output_name, overwrite=overwrite)
        dest.write_bytes(result.output_bytes)
        logger.info("Wrote %s (%d bytes)", dest, result.output_size_bytes)
        return dest
