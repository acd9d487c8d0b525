"""
Output Manager - Timestamped run folders and retention cleanup.

Each ingestion run writes into a folder under the base output directory named
YYYYMMDD_HHMM_{source_name} (e.g., "20261018_0930_WordPress_REST"):

  - content_graph.json:      Every registered type and its nodes
  - extraction_results.json: Run metadata, node counts, errors

Folders older than OUTPUT_RETENTION_DAYS are removed before a new run starts.
A retention of 0 keeps everything.
"""

import json
import os
import re
import shutil
from datetime import datetime, timedelta
from typing import Any, Optional

RUN_FOLDER_PATTERN = re.compile(r'^(\d{8})_(\d{4})_.*$')


class OutputManager:
    """Creates the per-run output folder and prunes old ones.

    Attributes:
        base_dir: Root output directory (default: ./output).
        source_name: Used in folder naming (non-alphanumerics become "_").
        retention_days: Age in days after which run folders are deleted.
        current_dir: This run's folder, None until create_run_dir().
    """

    def __init__(self, base_dir: str, source_name: str, retention_days: int = 30):
        self.base_dir = base_dir
        self.source_name = source_name
        self.retention_days = retention_days
        self.current_dir: Optional[str] = None
        self._started = datetime.now()

    @property
    def folder_name(self) -> str:
        safe_name = re.sub(r"[^0-9A-Za-z_-]", "_", self.source_name)
        return f"{self._started.strftime('%Y%m%d_%H%M')}_{safe_name}"

    def create_run_dir(self) -> str:
        """Create (if needed) and return this run's folder."""
        self.current_dir = os.path.join(self.base_dir, self.folder_name)
        os.makedirs(self.current_dir, exist_ok=True)
        return self.current_dir

    def cleanup_old_folders(self, debug: bool = False) -> int:
        """Delete run folders whose timestamp is older than retention_days.

        Only folders matching the YYYYMMDD_HHMM_* pattern are considered.

        Returns:
            The number of folders deleted.
        """
        if self.retention_days <= 0 or not os.path.isdir(self.base_dir):
            return 0

        cutoff = datetime.now() - timedelta(days=self.retention_days)
        deleted = 0

        for entry in sorted(os.listdir(self.base_dir)):
            path = os.path.join(self.base_dir, entry)
            match = RUN_FOLDER_PATTERN.match(entry)
            if not match or not os.path.isdir(path):
                continue

            try:
                created = datetime.strptime(f"{match.group(1)}_{match.group(2)}", "%Y%m%d_%H%M")
                if created < cutoff:
                    shutil.rmtree(path)
                    deleted += 1
                    if debug:
                        print(f"  Deleted old output folder: {entry}")
            except (ValueError, OSError) as e:
                if debug:
                    print(f"  Warning: Could not process folder {entry}: {e}")

        return deleted

    def get_output_path(self, filename: str) -> str:
        """Path of filename inside this run's folder.

        Raises:
            RuntimeError: If create_run_dir() has not been called yet.
        """
        if not self.current_dir:
            raise RuntimeError("Output directory not created. Call create_run_dir() first.")
        return os.path.join(self.current_dir, filename)

    def write_json(self, filename: str, data: Any) -> str:
        """Serialize data into this run's folder and return the file path."""
        path = self.get_output_path(filename)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
        return path
