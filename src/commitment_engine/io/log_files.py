"""
Read-only access to exported log and group files.

Log exports are JSONL: one log entry object per line.  Group settings are a
single JSON or YAML object.  Nothing here writes; persisting entries is the
surrounding application's job.
"""

import json
from pathlib import Path

import yaml

from ..core.models import GroupConfig, LogEntry
from .serializers import ValidationError, dict_to_group_config, json_line_to_log_entry


class LogFile:
    """
    A member's exported log history in JSONL format.

    Blank lines are ignored; any other unparsable line is an error that
    names the line number.
    """

    def __init__(self, path: str | Path):
        """
        Args:
            path: Path to the JSONL export
        """
        self.path = Path(path)

    def load_entries(self) -> list[LogEntry]:
        """
        Load all entries from the file.

        Returns:
            List of LogEntry, sorted by date (stable within a day)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If a line is not a valid log entry
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Log file not found: {self.path}")

        entries: list[LogEntry] = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    entries.append(json_line_to_log_entry(line))
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.path}: {e}"
                    ) from e

        entries.sort(key=lambda e: e.date)
        return entries


def load_group_config(path: str | Path) -> GroupConfig:
    """
    Load group settings from a .json, .yaml or .yml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the content is not a valid group config
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Group config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValidationError(f"Invalid group config {path}: {e}") from e

    return dict_to_group_config(data)
