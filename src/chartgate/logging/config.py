"""
Logging configuration handed to the LoggingManager.

Built from the ``[general.logging]`` table of the chartgate config, or from
defaults when a library user never configures logging.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

FORMAT_TYPES = ("console", "json", "rich")
OUTPUTS = ("console", "file")
DEFAULT_LOG_FILE = Path("logs/chartgate.log")


@dataclass
class LoggingConfig:
    level: Union[str, int] = logging.INFO
    format_type: str = "console"
    output: Union[str, List[str]] = "console"
    file_path: Optional[Path] = None
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5
    service_name: str = "chartgate"
    version: str = "unknown"

    def __post_init__(self):
        if isinstance(self.level, str):
            resolved = logging.getLevelName(self.level.upper())
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown log level '{self.level}'")
            self.level = resolved

        if self.format_type not in FORMAT_TYPES:
            raise ValueError(f"format_type must be one of {', '.join(FORMAT_TYPES)}, got '{self.format_type}'")

        outputs = [self.output] if isinstance(self.output, str) else list(self.output)
        unknown = [o for o in outputs if o not in OUTPUTS]
        if unknown:
            raise ValueError(f"Unknown log output(s): {', '.join(unknown)}")
        self.output = outputs

        if self.file_path is not None:
            self.file_path = Path(self.file_path)

    @property
    def log_file(self) -> Path:
        return self.file_path or DEFAULT_LOG_FILE
