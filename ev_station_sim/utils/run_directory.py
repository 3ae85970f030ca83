"""
Output folder for one command-line simulation run.

Every run gets ``<base>/<timestamp>_<label>/`` so repeated runs of the same
station never overwrite each other::

    simulation_output/
      2026-02-17_143052_20cp-seed-12345/
        metadata.json          CLI arguments, creation time, simulation id
        data/                  tick series, session log, summary
        reports/               daily peaks, hourly profile
"""

import json
import os
import re
from datetime import datetime
from typing import Any, Dict, Optional

import pandas as pd

DATA_SUBDIR = "data"
REPORTS_SUBDIR = "reports"
MAX_LABEL_LENGTH = 50


class RunDirectory:
    """Timestamped folder holding the exported data of one simulation run."""

    def __init__(self, base_dir: str, label: Optional[str] = None, created_at: Optional[datetime] = None):
        self.created_at = created_at or datetime.now()
        self.name = f"{self.created_at:%Y-%m-%d_%H%M%S}_{self.slug(label or 'run')}"
        self.root = os.path.join(base_dir, self.name)
        self.data_dir = os.path.join(self.root, DATA_SUBDIR)
        self.reports_dir = os.path.join(self.root, REPORTS_SUBDIR)

        for path in (self.data_dir, self.reports_dir):
            os.makedirs(path, exist_ok=True)

    @classmethod
    def for_station(cls, base_dir: str, num_chargepoints: int, seed: int) -> "RunDirectory":
        return cls(base_dir, f"{num_chargepoints}cp-seed-{seed}")

    def report_path(self, filename: str) -> str:
        return os.path.join(self.reports_dir, filename)

    def write_report(self, filename: str, series: pd.Series) -> str:
        """Write a daily or hourly series to ``reports/``. Returns the path."""
        path = self.report_path(filename)
        series.to_csv(path)
        return path

    def save_metadata(self, cli_args: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> str:
        """Write ``metadata.json``; argument values are stored as strings."""
        metadata = {
            "run_name": self.name,
            "created_at": self.created_at.isoformat(),
            "cli_args": {key: str(value) for key, value in cli_args.items()},
        }
        metadata.update(extra or {})

        path = os.path.join(self.root, "metadata.json")
        with open(path, "w") as f:
            json.dump(metadata, f, indent=2, default=str)
        return path

    @staticmethod
    def slug(label: str) -> str:
        """Filesystem-safe lowercase label, ``unnamed`` if nothing is left."""
        cleaned = "-".join(re.findall(r"[a-z0-9]+", label.lower()))
        return cleaned[:MAX_LABEL_LENGTH] or "unnamed"

    def __repr__(self) -> str:
        return f"RunDirectory({self.root})"
