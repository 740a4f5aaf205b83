"""Read-only access to stored swarm runs.

Each run lives in ``<runs_dir>/<run_id>/config.json``. The store lists run
directories newest first and parses their records; it never writes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from .errors import RunLookupError
from .models import RunRecord

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class RunStore:
    """Lists run directories and reads their config records."""

    def __init__(self, runs_dir: Union[str, Path]):
        self.runs_dir = Path(runs_dir)

    def list_run_ids(self) -> List[str]:
        """Return run identifiers, most recently modified first.

        Raises:
            RunLookupError: if the runs directory is missing or unreadable.
        """
        try:
            entries = [p for p in self.runs_dir.iterdir() if p.is_dir()]
        except OSError as e:
            raise RunLookupError(f"cannot list {self.runs_dir}: {e}") from e

        def _key(path: Path):
            try:
                mtime = path.stat().st_mtime
            except OSError:
                mtime = 0.0
            return (mtime, path.name)

        entries.sort(key=_key, reverse=True)
        return [p.name for p in entries]

    def read_record(self, run_id: str) -> RunRecord:
        """Parse ``config.json`` for one run.

        Raises:
            RunLookupError: if the file is unreadable, not JSON, or misses fields.
        """
        config_path = self.runs_dir / run_id / CONFIG_FILENAME
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            return RunRecord.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise RunLookupError(f"invalid run record {config_path}: {e}") from e

    def count_runs(self) -> int:
        """Number of stored runs; 0 when the listing fails."""
        try:
            return len(self.list_run_ids())
        except RunLookupError as e:
            logger.debug(f"Run count unavailable: {e}")
            return 0
