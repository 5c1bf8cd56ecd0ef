"""
Configuration management for the clc command line tool.
"""

from dataclasses import asdict, dataclass, fields
import logging
import os
from typing import Any, Dict, List

import yaml

from clc.clc_history import DEFAULT_HISTORY_SIZE
from clc.clc_parser import DEFAULT_MAX_DEPTH


DEFAULT_CONFIG_PATH = "~/.clc/config.yaml"
MAX_HISTORY_SIZE = 255
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Each level of nesting costs about a dozen Python frames while parsing.
MAX_PARSE_DEPTH = 60


@dataclass
class CLCSettings:
    """Settings read from the clc YAML configuration file."""
    history_size: int = DEFAULT_HISTORY_SIZE
    history_file: str = "~/.clc/history.json"
    log_dir: str = "~/.clc/logs"
    log_level: str = "INFO"
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def create_default(cls) -> 'CLCSettings':
        """Create the default settings."""
        return cls()

    @classmethod
    def load_from_file(cls, config_path: str) -> 'CLCSettings':
        """
        Load settings from a YAML file.

        A missing file gives the default settings; unknown keys are ignored.

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If the file does not contain a mapping
        """
        path = os.path.expanduser(config_path)
        if not os.path.exists(path):
            return cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls.create_default()

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logging.getLogger("CLCSettings").warning("Ignoring unknown settings in %s: %s", config_path, unknown)

        values: Dict[str, Any] = {key: value for key, value in data.items() if key in known}
        return cls(**values)

    def save_to_file(self, config_path: str) -> None:
        """Save settings to a YAML file, creating its directory if needed."""
        path = os.path.expanduser(config_path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate the settings and return any errors."""
        errors = []

        if not isinstance(self.history_size, int) or not 1 <= self.history_size <= MAX_HISTORY_SIZE:
            errors.append(f"history_size must be an integer from 1 to {MAX_HISTORY_SIZE}, got {self.history_size!r}")

        if not isinstance(self.max_depth, int) or not 1 <= self.max_depth <= MAX_PARSE_DEPTH:
            errors.append(f"max_depth must be an integer from 1 to {MAX_PARSE_DEPTH}, got {self.max_depth!r}")

        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

        for name in ("history_file", "log_dir"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                errors.append(f"{name} must be a non-empty path, got {value!r}")

        return errors
