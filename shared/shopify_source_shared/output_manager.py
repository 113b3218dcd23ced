"""
Output Manager — Timestamped run folders and retention cleanup.

Each sourcing run writes into a folder under the base output directory named
YYYYMMDD_HHMM_{provider_name} (e.g., "20261019_1430_Shopify_Storefront").

Inside each folder the orchestrator saves:
  - nodes.json:             Snapshot of every node handed to the node store
  - sourcing_results.json:  Run metadata, node counts per type, errors

Folders older than OUTPUT_RETENTION_DAYS are removed at startup, before the
new run folder is created. retention_days=0 keeps every run.
"""

import json
import logging
import os
import re
import shutil
from datetime import datetime, timedelta
from typing import Any, Optional

logger = logging.getLogger(__name__)

RUN_FOLDER_PATTERN = re.compile(r"^(\d{8})_(\d{4})_.*$")


class OutputManager:
    """Resolves run folders and file paths for sourcing output.

    Attributes:
        base_dir: Root output directory (default: ./output).
        provider_name: Label appended to folder names.
        retention_days: Age in days after which run folders are deleted.
        current_dir: The current run folder, None until created.
    """

    def __init__(self, base_dir: str, provider_name: str, retention_days: int = 30,
                 now: Optional[datetime] = None):
        self.base_dir = base_dir
        self.provider_name = provider_name
        self.retention_days = retention_days
        self.current_dir = None
        self._run_timestamp = now or datetime.now()

    @property
    def folder_name(self) -> str:
        """Folder name for the current run, with the provider label sanitized."""
        safe_provider = re.sub(r"[^0-9A-Za-z_-]", "_", self.provider_name)
        return f"{self._run_timestamp.strftime('%Y%m%d_%H%M')}_{safe_provider}"

    def create_timestamped_dir(self) -> str:
        self.current_dir = os.path.join(self.base_dir, self.folder_name)
        os.makedirs(self.current_dir, exist_ok=True)
        return self.current_dir

    def cleanup_old_folders(self) -> int:
        """Delete run folders older than retention_days.

        Only folders whose names match the YYYYMMDD_HHMM_* pattern are
        considered; anything else in the base directory is left alone.

        Returns:
            The number of folders deleted.
        """
        if self.retention_days <= 0 or not os.path.isdir(self.base_dir):
            return 0

        cutoff = datetime.now() - timedelta(days=self.retention_days)
        deleted = 0

        for name in sorted(os.listdir(self.base_dir)):
            path = os.path.join(self.base_dir, name)
            match = RUN_FOLDER_PATTERN.match(name)
            if not match or not os.path.isdir(path):
                continue

            try:
                created_at = datetime.strptime(f"{match.group(1)}_{match.group(2)}", "%Y%m%d_%H%M")
                if created_at < cutoff:
                    shutil.rmtree(path)
                    deleted += 1
                    logger.debug("Deleted old output folder: %s", name)
            except (ValueError, OSError) as e:
                logger.warning("Could not process output folder %s: %s", name, e)

        return deleted

    def get_output_path(self, filename: str) -> str:
        """Resolve filename inside the current run folder.

        Raises:
            RuntimeError: If create_timestamped_dir() has not been called yet.
        """
        if not self.current_dir:
            raise RuntimeError("Output directory not created. Call create_timestamped_dir() first.")
        return os.path.join(self.current_dir, filename)

    def write_json(self, filename: str, payload: Any) -> str:
        """Serialize payload as indented JSON into the current run folder."""
        path = self.get_output_path(filename)
        with open(path, "w") as f:
            json.dump(payload, f, indent=2, default=str)
        return path
